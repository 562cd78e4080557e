# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
In-memory store of the latest calculation per proposal.

Alongside each output the store keeps a reference fingerprint of the
configuration shared across proposals (recorded history, bridge years and
system rates). When that shared configuration changes, every proposal
calculated against the old one reports as stale.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Optional

from ..analysis import CalculationEngineOutput
from ..periods import ProjectionInput

logger = logging.getLogger(__name__)


def transition_reference(projection: ProjectionInput) -> str:
    """Fingerprint of the configuration shared by all proposals."""
    digest = hashlib.sha256()
    for record in projection.historical_years:
        digest.update(record.model_dump_json().encode("utf-8"))
    for config in projection.transition_years:
        digest.update(config.model_dump_json().encode("utf-8"))
    digest.update(projection.rates.model_dump_json().encode("utf-8"))
    return digest.hexdigest()


@dataclass(frozen=True)
class StoredCalculation:
    proposal_id: str
    output: CalculationEngineOutput
    transition_reference: str

    @property
    def calculated_at(self) -> datetime:
        return self.output.calculated_at


class ProposalStore:
    """Latest ``CalculationEngineOutput`` per proposal, safe across threads."""

    def __init__(self) -> None:
        self._records: Dict[str, StoredCalculation] = {}
        self._lock = threading.Lock()

    def save(
        self,
        proposal_id: str,
        output: CalculationEngineOutput,
        reference: str,
    ) -> StoredCalculation:
        record = StoredCalculation(
            proposal_id=proposal_id, output=output, transition_reference=reference
        )
        with self._lock:
            self._records[proposal_id] = record
        logger.debug(f"Stored calculation for proposal {proposal_id}")
        return record

    def latest(self, proposal_id: str) -> Optional[StoredCalculation]:
        with self._lock:
            return self._records.get(proposal_id)

    def is_stale(self, proposal_id: str, current_reference: str) -> bool:
        """True when never calculated or calculated against other shared configuration."""
        record = self.latest(proposal_id)
        if record is None:
            return True
        return record.transition_reference != current_reference
