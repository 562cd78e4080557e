# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Negotiation offer chain.

A negotiation is an ordered sequence of offers, numbered from 1. Each offer
records who made it and, for counter-offers created by duplication, the
offer it was copied from. Number assignment is atomic per negotiation.
The engine is used purely as a black box to evaluate an offer's
assumptions.
"""

from __future__ import annotations

import logging
import threading
import uuid
from typing import Dict, List, Optional, Sequence

from pydantic import Field

from ..analysis import CalculationEngineOutput, ProjectionEngine
from ..core.primitives import Model, OfferOrigin, PositiveIntGe1
from ..periods import ProjectionInput
from .store import ProposalStore, transition_reference

logger = logging.getLogger(__name__)


class Offer(Model):
    """One proposal within a negotiation."""

    offer_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    offer_number: PositiveIntGe1
    origin: OfferOrigin
    parent_id: Optional[str] = None
    label: Optional[str] = None
    projection: ProjectionInput


class Negotiation:
    """
    Ordered offers for one negotiation.

    Args:
        name: Negotiation label
        store: Where evaluated outputs are kept; a private store when omitted
    """

    def __init__(self, name: str, store: Optional[ProposalStore] = None):
        self.name = name
        self.store = store or ProposalStore()
        self._offers: Dict[str, Offer] = {}
        self._lock = threading.Lock()

    @property
    def offers(self) -> List[Offer]:
        with self._lock:
            return sorted(self._offers.values(), key=lambda o: o.offer_number)

    def get(self, offer_id: str) -> Offer:
        with self._lock:
            if offer_id not in self._offers:
                raise KeyError(f"Unknown offer {offer_id} in negotiation '{self.name}'")
            return self._offers[offer_id]

    def _append(self, **fields) -> Offer:
        with self._lock:
            number = max((o.offer_number for o in self._offers.values()), default=0) + 1
            offer = Offer(offer_number=number, **fields)
            self._offers[offer.offer_id] = offer
        logger.info(
            f"Negotiation '{self.name}': offer #{offer.offer_number} "
            f"({offer.origin.value})"
        )
        return offer

    def add_offer(
        self,
        projection: ProjectionInput,
        origin: OfferOrigin = OfferOrigin.OUR_OFFER,
        label: Optional[str] = None,
    ) -> Offer:
        return self._append(projection=projection, origin=origin, label=label)

    def create_counter_offer(
        self,
        parent_id: str,
        projection: Optional[ProjectionInput] = None,
        origin: OfferOrigin = OfferOrigin.THEIR_COUNTER,
        label: Optional[str] = None,
    ) -> Offer:
        """
        Duplicate ``parent_id`` as a new offer with the next number.

        ``projection`` replaces the copied assumptions when given.
        """
        parent = self.get(parent_id)
        return self._append(
            projection=projection if projection is not None else parent.projection,
            origin=origin,
            parent_id=parent.offer_id,
            label=label,
        )

    def reorder(self, offer_ids: Sequence[str]) -> List[Offer]:
        """Renumber offers 1..n in the order of ``offer_ids``."""
        with self._lock:
            if sorted(offer_ids) != sorted(self._offers):
                raise ValueError(
                    "reorder requires every offer of the negotiation exactly once"
                )
            for number, offer_id in enumerate(offer_ids, start=1):
                self._offers[offer_id] = self._offers[offer_id].model_copy(
                    update={"offer_number": number}
                )
        return self.offers

    def evaluate(
        self,
        offer_id: str,
        engine: Optional[ProjectionEngine] = None,
        force_recalculation: bool = False,
    ) -> CalculationEngineOutput:
        """Run the engine on an offer and keep the output in the store."""
        offer = self.get(offer_id)
        engine = engine or ProjectionEngine()
        output = engine.run(offer.projection, force_recalculation=force_recalculation)
        self.store.save(offer.offer_id, output, transition_reference(offer.projection))
        return output
