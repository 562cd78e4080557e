# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Test utilities and fixtures for Tenura testing.

This module provides convenient builders for projection inputs so tests
do not have to spell out every historical year, stream and staff role.
Builders are exposed to tests through factory fixtures.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, List, Optional, Sequence

import pytest

from tenura.analysis import CalculationCache, ProjectionEngine
from tenura.capex import CapExConfig
from tenura.core.primitives import EngineSettings, SystemRates
from tenura.periods import (
    BalanceSheet,
    HistoricalYear,
    PeriodResult,
    ProfitAndLoss,
    ProjectionInput,
    TransitionYear,
)
from tenura.rent import FixedEscalationRent
from tenura.schedule import (
    CurriculumStream,
    EnrollmentRamp,
    StaffingPlan,
    StaffRole,
    StepSchedule,
)


# Historical Utilities
def create_historical_years() -> List[HistoricalYear]:
    """
    Two balanced recorded years, 2023 and 2024.

    2024 closes with 4M cash, 6M net PP&E, no debt and 10M equity.
    """
    return [
        HistoricalYear(
            year=2023,
            profit_and_loss=ProfitAndLoss(
                students=900,
                tuition_revenue=Decimal("27000000"),
                rent=Decimal("4000000"),
                staff_costs=Decimal("13500000"),
                other_opex=Decimal("2700000"),
                depreciation=Decimal("500000"),
            ),
            balance_sheet=BalanceSheet(
                cash=Decimal("3000000"),
                gross_ppe=Decimal("10000000"),
                accumulated_depreciation=Decimal("4000000"),
                equity=Decimal("9000000"),
            ),
        ),
        HistoricalYear(
            year=2024,
            profit_and_loss=ProfitAndLoss(
                students=950,
                tuition_revenue=Decimal("28500000"),
                rent=Decimal("4000000"),
                staff_costs=Decimal("14250000"),
                other_opex=Decimal("2850000"),
                depreciation=Decimal("500000"),
            ),
            balance_sheet=BalanceSheet(
                cash=Decimal("4000000"),
                gross_ppe=Decimal("10500000"),
                accumulated_depreciation=Decimal("4500000"),
                equity=Decimal("10000000"),
            ),
        ),
    ]


def create_transition_years(
    start_year: int = 2025, students: Sequence[int] = (1000, 1050, 1100)
) -> List[TransitionYear]:
    """Bridge years at 30,000 average tuition and 3% rent growth."""
    return [
        TransitionYear(
            year=start_year + offset,
            students=count,
            average_tuition=Decimal("30000"),
            rent_growth_rate=Decimal("0.03"),
        )
        for offset, count in enumerate(students)
    ]


# Operating Utilities
def create_stream(
    name: str = "national",
    initial_students: int = 1100,
    target_students: int = 1500,
    capacity: Optional[int] = 1600,
    tuition: str = "32000",
    tuition_growth: str = "0.05",
    start_year: int = 2028,
) -> CurriculumStream:
    """A curriculum stream ramping over five years from ``start_year``."""
    return CurriculumStream(
        name=name,
        capacity=capacity,
        enrollment=EnrollmentRamp(
            initial_students=initial_students,
            target_students=target_students,
            start_year=start_year,
            end_year=start_year + 4,
        ),
        tuition=StepSchedule(
            base_value=Decimal(tuition),
            growth_rate=Decimal(tuition_growth),
            frequency_years=2,
            reference_year=start_year,
        ),
    )


def create_staffing(reference_year: int = 2028, cpi_rate: str = "0.02") -> StaffingPlan:
    """Teachers at 15 students each plus administrators at 60 students each."""
    return StaffingPlan(
        roles=[
            StaffRole(
                name="teacher", students_per_staff=15, monthly_salary=Decimal("12000")
            ),
            StaffRole(
                name="admin", students_per_staff=60, monthly_salary=Decimal("9000")
            ),
        ],
        cpi_rate=Decimal(cpi_rate),
        reference_year=reference_year,
    )


def create_projection(
    contract_years: int = 30,
    rent_model: Any = None,
    capex: Optional[CapExConfig] = None,
    rates: Optional[SystemRates] = None,
    streams: Optional[List[CurriculumStream]] = None,
    **overrides: Any,
) -> ProjectionInput:
    """
    Build a complete projection input with sensible defaults.

    Args:
        contract_years: Contract length in years, starting 2028
        rent_model: Rent variant (default: 5M fixed, 5% every 2 years)
        capex: CapEx configuration (default: none)
        rates: System rates (default: SystemRates())
        streams: Curriculum streams (default: one national stream)
        **overrides: Any other ProjectionInput field

    Returns:
        ProjectionInput ready for the engine

    Example:
        >>> projection = create_projection(contract_years=10)
        >>> projection.contract_end_year
        2037
    """
    fields: Dict[str, Any] = {
        "contract_start_year": 2028,
        "contract_years": contract_years,
        "historical_years": create_historical_years(),
        "transition_years": create_transition_years(),
        "streams": streams or [create_stream()],
        "staffing": create_staffing(),
        "rent_model": rent_model
        or FixedEscalationRent(
            base_rent=Decimal("5000000"),
            escalation_rate=Decimal("0.05"),
            escalation_frequency=2,
        ),
        "other_opex_rate": Decimal("0.10"),
        "capex": capex or CapExConfig(),
        "rates": rates or SystemRates(),
    }
    fields.update(overrides)
    return ProjectionInput(**fields)


# Validation Utilities
def assert_period_identities(
    periods: Sequence[PeriodResult], tolerance: Decimal = Decimal("0.01")
) -> None:
    """
    Assert the balance-sheet identity for every period and the cash
    reconciliation for every simulated period.
    """
    for period in periods:
        assert abs(period.balance_sheet.balance_difference) <= tolerance, (
            f"{period.year}: balance difference {period.balance_sheet.balance_difference}"
        )
        if period.phase.value != "historical":
            assert abs(period.cash_flow.reconciliation_difference) <= tolerance, (
                f"{period.year}: cash difference "
                f"{period.cash_flow.reconciliation_difference}"
            )


# Pytest Fixtures
@pytest.fixture
def projection_factory():
    """Factory fixture around ``create_projection``."""
    return create_projection


@pytest.fixture
def stream_factory():
    return create_stream


@pytest.fixture
def check_identities():
    return assert_period_identities


@pytest.fixture
def sample_projection() -> ProjectionInput:
    """A ten-year contract with default assumptions."""
    return create_projection(contract_years=10)


@pytest.fixture
def sample_settings() -> EngineSettings:
    return EngineSettings()


@pytest.fixture
def sample_engine(sample_settings) -> ProjectionEngine:
    """An engine with its own cache, so tests never share cached outputs."""
    return ProjectionEngine(settings=sample_settings, cache=CalculationCache())


__all__ = [
    "create_historical_years",
    "create_transition_years",
    "create_stream",
    "create_staffing",
    "create_projection",
    "assert_period_identities",
    # Fixtures
    "projection_factory",
    "stream_factory",
    "check_identities",
    "sample_projection",
    "sample_settings",
    "sample_engine",
]
