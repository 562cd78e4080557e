# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Engine output bundle.

``CalculationEngineOutput`` is what every caller of the engine receives:
the ordered period series, the validation flags, the metrics and the time
of calculation. All decimal fields serialize to textual decimals in JSON.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

import pandas as pd
from pydantic import Field, model_validator

from ..core.primitives import Model, PeriodPhase
from ..periods import PeriodResult
from .metrics import Metrics
from .validation import ValidationResult


class CalculationEngineOutput(Model):
    """
    Result of one engine run.

    Attributes:
        periods: One PeriodResult per year, ascending, no gaps
        validation: Balance and reconciliation flags (overall and per period)
        metrics: Investment metrics and summary extrema
        calculated_at: When the run was computed
        fingerprint: Cache key of the input and settings that produced it
    """

    periods: List[PeriodResult] = Field(..., min_length=1)
    validation: ValidationResult
    metrics: Metrics
    calculated_at: datetime
    fingerprint: str

    @model_validator(mode="after")
    def check_period_order(self) -> "CalculationEngineOutput":
        years = [period.year for period in self.periods]
        if years != list(range(years[0], years[0] + len(years))):
            raise ValueError(f"periods must be ascending without gaps, got {years}")
        return self

    @property
    def is_validated(self) -> bool:
        """True when every period passed both consistency checks."""
        return self.validation.is_valid

    @property
    def years(self) -> List[int]:
        return [period.year for period in self.periods]

    def period(self, year: int) -> PeriodResult:
        index = year - self.periods[0].year
        if index < 0 or index >= len(self.periods):
            raise KeyError(year)
        return self.periods[index]

    def phase_periods(self, phase: PeriodPhase) -> List[PeriodResult]:
        return [period for period in self.periods if period.phase == phase]

    def same_projection(self, other: "CalculationEngineOutput") -> bool:
        """Equal periods, validation and metrics, ignoring ``calculated_at``."""
        return (
            self.periods == other.periods
            and self.validation == other.validation
            and self.metrics == other.metrics
        )

    def to_frame(self) -> pd.DataFrame:
        """
        Headline figures as a DataFrame indexed by year.

        Adds the per-period validation flags so a table of results always
        shows which years passed.
        """
        rows = []
        for period in self.periods:
            row = period.summary()
            check = self.validation.check_for(period.year)
            row["balanced"] = check.balanced
            row["reconciled"] = check.reconciled
            rows.append(row)
        return pd.DataFrame(rows).set_index("year")

    def to_json(self, indent: Optional[int] = None) -> str:
        """JSON with decimals as text, for transport and persistence."""
        return self.model_dump_json(indent=indent)
