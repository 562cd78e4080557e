# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import List, Sequence


class ConfigurationError(ValueError):
    """
    Raised when a projection input cannot be simulated as configured.

    Covers parameters that are missing or mutually inconsistent for the
    selected rent variant and schedules whose reference year falls after the
    projection end. Raised before the first simulated year, never mid-run.
    All problems found are collected so the caller sees them together.
    """

    def __init__(self, problems: Sequence[str]):
        self.problems: List[str] = list(problems)
        super().__init__("; ".join(self.problems))
