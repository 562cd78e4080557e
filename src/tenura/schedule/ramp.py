# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, field_validator, model_validator

from ..core.primitives import (
    DecimalBetween0And1,
    Model,
    PositiveInt,
    Year,
    round_half_up,
)


class EnrollmentRamp(Model):
    """
    Enrollment growth from an initial headcount to a steady-state target.

    Before ``start_year`` the ramp holds at ``initial_students``. Between the
    start and end years it moves linearly to ``target_students`` (rounded to
    whole students), and from ``end_year`` onwards it stays at the target.

    A ramp plan can replace the linear path: ``ramp_percentages[i]`` is the
    share of the target enrolled in year ``start_year + i``. Once the plan
    runs out the target applies.
    """

    initial_students: PositiveInt = 0
    target_students: PositiveInt
    start_year: Year
    end_year: Year
    ramp_percentages: Optional[List[DecimalBetween0And1]] = Field(
        default=None,
        description="Optional per-year share of the target, starting at start_year.",
    )

    @field_validator("ramp_percentages")
    @classmethod
    def validate_ramp_percentages(
        cls, v: Optional[List[Decimal]]
    ) -> Optional[List[Decimal]]:
        if v is not None and len(v) == 0:
            raise ValueError("ramp_percentages must not be empty when provided")
        return v

    @model_validator(mode="after")
    def check_window(self) -> "EnrollmentRamp":
        if self.end_year < self.start_year:
            raise ValueError(
                f"end_year ({self.end_year}) must not precede start_year ({self.start_year})"
            )
        return self

    def students_for(self, year: int) -> int:
        """Enrolled students in ``year`` before any capacity cap."""
        if year < self.start_year:
            return self.initial_students

        if self.ramp_percentages is not None:
            index = year - self.start_year
            if index < len(self.ramp_percentages):
                return round_half_up(
                    Decimal(self.target_students) * self.ramp_percentages[index]
                )
            return self.target_students

        if year >= self.end_year:
            return self.target_students

        span = Decimal(self.end_year - self.start_year)
        progress = Decimal(year - self.start_year) / span
        delta = Decimal(self.target_students - self.initial_students)
        return round_half_up(Decimal(self.initial_students) + delta * progress)

    def scaled(self, factor: Decimal) -> "EnrollmentRamp":
        """Copy with initial and target headcounts scaled by ``factor``."""
        return self.model_copy(
            update={
                "initial_students": round_half_up(
                    Decimal(self.initial_students) * factor
                ),
                "target_students": round_half_up(
                    Decimal(self.target_students) * factor
                ),
            }
        )
