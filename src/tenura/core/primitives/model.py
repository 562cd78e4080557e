# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model shared by every projection input and output.

    Models are immutable snapshots: a run never edits its input, and period
    statements are never touched after the simulator emits them. Mutable
    runtime state (the CapEx ledger, the cache) lives in plain classes.

    Decimal fields serialize to text in JSON mode, so an output that crosses
    a process boundary keeps its exact value.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,
        slots=True,
        extra="forbid",  # Catches typos in assumption payloads immediately
        validate_default=True,
    )

    def fingerprint_payload(self) -> str:
        """Canonical JSON for hashing; keys follow field declaration order."""
        return self.model_dump_json(round_trip=True)
