# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rent Model Strategy

Annual rent under exactly one of four mutually exclusive pricing variants.
"""

from .models import (
    FixedEscalationRent,
    HybridRent,
    PartnerInvestmentRent,
    RentModel,
    RentModelBase,
    RevenueShareRent,
)
from .resolver import check_rent_model, rent_model_problems, resolve_rent

__all__ = [
    # Variants
    "FixedEscalationRent",
    "HybridRent",
    "PartnerInvestmentRent",
    "RevenueShareRent",
    "RentModel",
    "RentModelBase",
    # Resolution
    "check_rent_model",
    "rent_model_problems",
    "resolve_rent",
]
