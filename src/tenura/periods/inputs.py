# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""The immutable assumption snapshot for one projection run."""

from __future__ import annotations

from decimal import Decimal
from typing import List

from pydantic import Field, model_validator

from ..capex import CapExConfig
from ..core.primitives import (
    DecimalBetween0And1,
    Model,
    PositiveIntGe1,
    SystemRates,
    WorkingCapitalRatios,
    Year,
)
from ..rent import RentModel, rent_model_problems
from ..schedule import CurriculumStream, StaffingPlan
from .historical import HistoricalYear
from .transition import TransitionYear


class ProjectionInput(Model):
    """
    All assumptions for one projection run.

    The timeline is: recorded ``historical_years``, then ``transition_years``
    (contiguous, ending the year before the contract starts), then
    ``contract_years`` dynamic years from ``contract_start_year``.

    Structural consistency (ordering, contiguity) is enforced on
    construction. Cross-checks against the contract window are reported by
    ``configuration_problems`` and enforced by the engine before it runs.
    """

    contract_start_year: Year = 2028
    contract_years: PositiveIntGe1 = 30

    historical_years: List[HistoricalYear] = Field(..., min_length=1)
    transition_years: List[TransitionYear] = Field(default_factory=list)

    streams: List[CurriculumStream] = Field(..., min_length=1)
    staffing: StaffingPlan
    rent_model: RentModel

    other_opex_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Other operating expense / revenue."
    )
    other_revenue_ratio: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Other revenue / tuition revenue."
    )
    working_capital: WorkingCapitalRatios = Field(default_factory=WorkingCapitalRatios)
    rates: SystemRates = Field(default_factory=SystemRates)
    capex: CapExConfig = Field(default_factory=CapExConfig)

    @model_validator(mode="after")
    def check_timeline(self) -> "ProjectionInput":
        """Historical and transition years must run contiguously into the contract."""
        years = [h.year for h in self.historical_years] + [
            t.year for t in self.transition_years
        ]
        expected = list(range(years[0], years[0] + len(years)))
        if years != expected:
            raise ValueError(
                f"historical and transition years must be ascending and contiguous, got {years}"
            )
        if years[-1] != self.contract_start_year - 1:
            raise ValueError(
                f"the last pre-contract year ({years[-1]}) must immediately precede "
                f"contract_start_year ({self.contract_start_year})"
            )
        names = [stream.name for stream in self.streams]
        if len(names) != len(set(names)):
            raise ValueError(f"stream names must be unique, got {names}")
        return self

    @property
    def contract_end_year(self) -> int:
        return self.contract_start_year + self.contract_years - 1

    @property
    def first_year(self) -> int:
        return self.historical_years[0].year

    @property
    def contract_year_range(self) -> range:
        return range(self.contract_start_year, self.contract_end_year + 1)

    @property
    def years(self) -> range:
        return range(self.first_year, self.contract_end_year + 1)

    def configuration_problems(self) -> List[str]:
        """Problems that prevent simulating this input, as readable messages."""
        end = self.contract_end_year
        problems = rent_model_problems(self.rent_model, self.contract_start_year, end)

        if self.staffing.reference_year > end:
            problems.append(
                f"staffing reference_year {self.staffing.reference_year} is after "
                f"the contract end year {end}"
            )
        for stream in self.streams:
            if stream.tuition.reference_year > end:
                problems.append(
                    f"stream '{stream.name}' tuition reference_year "
                    f"{stream.tuition.reference_year} is after the contract end year {end}"
                )
            if stream.enrollment.start_year > end:
                problems.append(
                    f"stream '{stream.name}' enrollment ramp starts in "
                    f"{stream.enrollment.start_year}, after the contract end year {end}"
                )

        for asset in self.capex.manual_assets:
            if not self.contract_start_year <= asset.purchase_year <= end:
                problems.append(
                    f"manual asset in '{asset.category}' purchased in "
                    f"{asset.purchase_year} falls outside the contract "
                    f"({self.contract_start_year}-{end})"
                )

        policies = [self.capex.policy] + [c.policy for c in self.capex.categories]
        for policy in policies:
            if policy is not None and policy.start_year is not None and policy.start_year > end:
                problems.append(
                    f"reinvestment start_year {policy.start_year} is after the "
                    f"contract end year {end}"
                )
        return problems
