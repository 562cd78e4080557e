# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Collaborators around the engine: the latest-calculation store and the
negotiation offer chain.
"""

from .negotiation import Negotiation, Offer
from .store import ProposalStore, StoredCalculation, transition_reference

__all__ = [
    "Negotiation",
    "Offer",
    "ProposalStore",
    "StoredCalculation",
    "transition_reference",
]
