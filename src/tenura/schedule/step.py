# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Step-function schedules.

Tuition, salaries and escalating rents all grow in discrete steps: the rate
is applied once per full multiple of the step frequency elapsed since the
reference year, never continuously. With frequency 2 and growth 5%, years
0 and 1 use the base value, years 2 and 3 use base x 1.05, years 4 and 5
use base x 1.05^2.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

import pandas as pd
from pydantic import Field

from ..core.primitives import (
    GrowthDecimal,
    Model,
    PositiveDecimal,
    PositiveIntGe1,
    Year,
    step_factor,
)


def elapsed_steps(year: int, reference_year: int, frequency_years: int) -> int:
    """Number of completed growth steps at ``year``; zero before the reference year."""
    if year <= reference_year:
        return 0
    return (year - reference_year) // frequency_years


class StepSchedule(Model):
    """
    A value that grows by a fixed rate every ``frequency_years`` years.

    Attributes:
        base_value: Value effective in the reference year
        growth_rate: Growth applied at each step (e.g., 0.05 for 5%)
        frequency_years: Years between steps (1 = annual growth)
        reference_year: Year in which ``base_value`` applies

    Example:
        >>> fees = StepSchedule(base_value=50000, growth_rate="0.05",
        ...                     frequency_years=2, reference_year=2028)
        >>> fees.value_for(2029)
        Decimal('50000')
        >>> fees.value_for(2030)
        Decimal('52500.00')
    """

    base_value: PositiveDecimal
    growth_rate: GrowthDecimal = Decimal("0")
    frequency_years: PositiveIntGe1 = 1
    reference_year: Year = Field(
        ..., description="Year in which base_value is effective."
    )

    def steps_at(self, year: int) -> int:
        return elapsed_steps(year, self.reference_year, self.frequency_years)

    def value_for(self, year: int) -> Decimal:
        """Value effective in ``year``."""
        return self.base_value * step_factor(self.growth_rate, self.steps_at(year))

    def series(self, years: Iterable[int]) -> pd.Series:
        """Resolved values for ``years`` as a Series indexed by year."""
        years = list(years)
        return pd.Series(
            [self.value_for(year) for year in years],
            index=pd.Index(years, name="year"),
            name="value",
            dtype=object,
        )

    def rebased(self, reference_year: int) -> "StepSchedule":
        """Copy of this schedule anchored at a different reference year."""
        return self.model_copy(update={"reference_year": reference_year})
