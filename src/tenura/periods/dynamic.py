# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Dynamic (contract) years: full simulation.

revenue    = sum of stream students x stream tuition, plus other revenue
staff      = ratio-derived headcount x CPI-escalated salary
other opex = revenue x other-opex rate
rent       = active rent model
EBITDA     = revenue - rent - staff - other opex
net income = EBITDA - depreciation - net interest - zakat
"""

from __future__ import annotations

import logging

from ..capex import CapExLedger
from ..core.primitives import PeriodPhase
from ..rent import resolve_rent
from ..schedule import total_students, tuition_revenue
from .accounting import OperatingLines, close_period
from .inputs import ProjectionInput
from .statements import PeriodResult

logger = logging.getLogger(__name__)


def operating_lines(year: int, projection: ProjectionInput) -> OperatingLines:
    """Revenue and operating costs of a contract year."""
    students = total_students(projection.streams, year)
    tuition = tuition_revenue(projection.streams, year)
    other_revenue = tuition * projection.other_revenue_ratio
    revenue = tuition + other_revenue

    rent = resolve_rent(
        projection.rent_model, year, revenue, projection.contract_start_year
    )
    return OperatingLines(
        students=students,
        tuition_revenue=tuition,
        other_revenue=other_revenue,
        rent=rent,
        staff_costs=projection.staffing.cost_for(year, students),
        other_opex=revenue * projection.other_opex_rate,
    )


def simulate_dynamic_year(
    year: int,
    projection: ProjectionInput,
    prior: PeriodResult,
    ledger: CapExLedger,
) -> PeriodResult:
    """Simulate one contract year, booking its CapEx in ``ledger``."""
    lines = operating_lines(year, projection)
    ledger_year = ledger.record_year(year, lines.tuition_revenue + lines.other_revenue)
    logger.debug(
        f"Dynamic {year}: {lines.students} students, rent {lines.rent}, "
        f"capex {ledger_year.spend}, depreciation {ledger_year.depreciation}"
    )
    return close_period(
        year=year,
        phase=PeriodPhase.DYNAMIC,
        lines=lines,
        opening=prior.balance_sheet,
        ledger_year=ledger_year,
        rates=projection.rates,
        working_capital=projection.working_capital,
        prior_cumulative_fcf=prior.cash_flow.cumulative_free_cash_flow,
    )
