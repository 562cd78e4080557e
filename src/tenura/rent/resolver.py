# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from ..core.primitives import ZERO, ConfigurationError
from .models import (
    FixedEscalationRent,
    HybridRent,
    PartnerInvestmentRent,
    RentModel,
    RevenueShareRent,
)

logger = logging.getLogger(__name__)


def rent_model_problems(
    model: RentModel, contract_start_year: int, contract_end_year: int
) -> List[str]:
    """
    List configuration problems for ``model`` over the contract window.

    Field presence and ranges are enforced when the model is built; this
    covers combinations that only make sense against the contract dates.
    """
    problems: List[str] = []
    label = model.kind.value

    reference_year = getattr(model, "reference_year", None)
    if reference_year is not None and reference_year > contract_end_year:
        problems.append(
            f"{label} rent reference_year {reference_year} is after the "
            f"contract end year {contract_end_year}"
        )

    if isinstance(model, PartnerInvestmentRent):
        if model.investment <= ZERO:
            problems.append(
                "partner_investment rent requires a positive investment "
                "(land and built-up area with their prices per m2)"
            )
        if model.yield_rate <= ZERO:
            problems.append("partner_investment rent requires a positive yield_rate")

    if isinstance(model, RevenueShareRent) and model.share_rate <= ZERO:
        if model.minimum_guarantee is None:
            problems.append(
                "revenue_share rent with a zero share_rate needs a minimum_guarantee"
            )

    if isinstance(model, HybridRent) and model.share_rate <= ZERO:
        problems.append(
            "hybrid rent requires a positive share_rate; use fixed_escalation "
            "for a base rent alone"
        )

    if isinstance(model, FixedEscalationRent) and model.base_rent <= ZERO:
        problems.append("fixed_escalation rent requires a positive base_rent")

    return problems


def check_rent_model(
    model: RentModel, contract_start_year: int, contract_end_year: int
) -> None:
    """Raise ``ConfigurationError`` if ``model`` cannot price the contract."""
    problems = rent_model_problems(model, contract_start_year, contract_end_year)
    if problems:
        raise ConfigurationError(problems)


def resolve_rent(
    model: RentModel, year: int, revenue: Decimal, contract_start_year: int
) -> Decimal:
    """Annual rent under the active variant for ``year``."""
    rent = model.annual_rent(year, revenue, contract_start_year)
    logger.debug(f"Rent {year} ({model.kind.value}): {rent}")
    return rent
