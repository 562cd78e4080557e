# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Transition (bridge) years between the recorded history and the contract.

Enrollment and average tuition come from explicit configuration. Rent
grows from the prior year's rent at the configured rate. Staff cost is a
share of revenue, by default the prior year's share. There are no CapEx
purchases and no debt draws or repayments; the legacy asset base keeps
depreciating.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from pydantic import Field

from ..capex import CapExLedger
from ..core.primitives import (
    ONE,
    ZERO,
    DecimalBetween0And1,
    GrowthDecimal,
    Model,
    PeriodPhase,
    PositiveDecimal,
    PositiveInt,
    SystemRates,
    WorkingCapitalRatios,
    Year,
    safe_divide,
)
from .accounting import OperatingLines, close_period
from .statements import PeriodResult

logger = logging.getLogger(__name__)


class TransitionYear(Model):
    """
    Configuration of one bridge year.

    Attributes:
        year: Calendar year
        students: Enrolled students
        average_tuition: Average annual tuition per student
        rent_growth_rate: Growth applied to the prior year's rent
        staff_cost_ratio: Staff cost / revenue; defaults to the prior year's ratio
        other_opex: Other operating expense; defaults to the prior year's amount
    """

    year: Year
    students: PositiveInt
    average_tuition: PositiveDecimal
    rent_growth_rate: GrowthDecimal = Decimal("0")
    staff_cost_ratio: Optional[DecimalBetween0And1] = None
    other_opex: Optional[PositiveDecimal] = Field(default=None)


def prior_staff_ratio(prior: PeriodResult) -> Decimal:
    ratio = safe_divide(prior.profit_and_loss.staff_costs, prior.profit_and_loss.revenue)
    return ratio if ratio is not None else ZERO


def simulate_transition_year(
    config: TransitionYear,
    prior: PeriodResult,
    ledger: CapExLedger,
    rates: SystemRates,
    working_capital: WorkingCapitalRatios,
    other_revenue_ratio: Decimal,
) -> PeriodResult:
    """Project one bridge year from its configuration and the prior year."""
    tuition = Decimal(config.students) * config.average_tuition
    other_revenue = tuition * other_revenue_ratio
    revenue = tuition + other_revenue

    rent = prior.profit_and_loss.rent * (ONE + config.rent_growth_rate)
    ratio = (
        config.staff_cost_ratio
        if config.staff_cost_ratio is not None
        else prior_staff_ratio(prior)
    )
    other_opex = (
        config.other_opex
        if config.other_opex is not None
        else prior.profit_and_loss.other_opex
    )

    lines = OperatingLines(
        students=config.students,
        tuition_revenue=tuition,
        other_revenue=other_revenue,
        rent=rent,
        staff_costs=revenue * ratio,
        other_opex=other_opex,
    )
    logger.debug(f"Transition {config.year}: revenue {revenue}, rent {rent}")
    return close_period(
        year=config.year,
        phase=PeriodPhase.TRANSITION,
        lines=lines,
        opening=prior.balance_sheet,
        ledger_year=ledger.snapshot(config.year),
        rates=rates,
        working_capital=working_capital,
        prior_cumulative_fcf=prior.cash_flow.cumulative_free_cash_flow,
        allow_financing=False,
    )
