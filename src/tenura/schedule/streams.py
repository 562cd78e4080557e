# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Curriculum streams and staffing.

A stream is one curriculum offered on the campus (e.g., the national
program and an IB program). Each stream has its own enrollment ramp,
capacity and tuition schedule and is resolved independently; campus-level
figures are the sum over streams.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import Field, model_validator

from ..core.primitives import (
    MONTHS_PER_YEAR,
    ZERO,
    GrowthDecimal,
    Model,
    PositiveDecimal,
    PositiveInt,
    PositiveIntGe1,
    Year,
    ceil_div,
    decimal_sum,
)
from .ramp import EnrollmentRamp
from .step import StepSchedule


class CurriculumStream(Model):
    """
    One curriculum stream: enrollment, capacity and annual tuition.

    Attributes:
        name: Stream label (e.g., "national", "ib")
        enabled: Disabled streams contribute nothing
        start_year: First year the stream enrolls students (None = always)
        capacity: Seat cap applied to the ramp (None = uncapped)
        enrollment: Enrollment ramp for this stream
        tuition: Annual tuition per student as a step schedule
    """

    name: str
    enabled: bool = True
    start_year: Optional[Year] = None
    capacity: Optional[PositiveInt] = None
    enrollment: EnrollmentRamp
    tuition: StepSchedule

    def is_active(self, year: int) -> bool:
        if not self.enabled:
            return False
        return self.start_year is None or year >= self.start_year

    def students_for(self, year: int) -> int:
        if not self.is_active(year):
            return 0
        students = self.enrollment.students_for(year)
        if self.capacity is not None:
            students = min(students, self.capacity)
        return students

    def tuition_for(self, year: int) -> Decimal:
        return self.tuition.value_for(year)

    def revenue_for(self, year: int) -> Decimal:
        return Decimal(self.students_for(year)) * self.tuition_for(year)


def total_students(streams: Sequence[CurriculumStream], year: int) -> int:
    return sum(stream.students_for(year) for stream in streams)


def tuition_revenue(streams: Sequence[CurriculumStream], year: int) -> Decimal:
    return decimal_sum(stream.revenue_for(year) for stream in streams)


class StaffRole(Model):
    """A staff category sized by a students-per-staff ratio."""

    name: str
    students_per_staff: PositiveIntGe1
    monthly_salary: PositiveDecimal = Field(
        ..., description="Average monthly salary at the plan's reference year."
    )

    def headcount_for(self, students: int) -> int:
        if students <= 0:
            return 0
        return ceil_div(students, self.students_per_staff)


class StaffingPlan(Model):
    """
    Staffing model: ratio-derived headcount times CPI-escalated salary.

    Salaries escalate in CPI steps (see ``StepSchedule``) anchored at
    ``reference_year``. Annual cost per role is
    ``ceil(students / ratio) x monthly_salary x 12 x CPI factor``.
    """

    roles: List[StaffRole] = Field(default_factory=list)
    cpi_rate: GrowthDecimal = Decimal("0")
    cpi_frequency_years: PositiveIntGe1 = 1
    reference_year: Year

    @model_validator(mode="after")
    def check_unique_roles(self) -> "StaffingPlan":
        names = [role.name for role in self.roles]
        if len(names) != len(set(names)):
            raise ValueError(f"Staff role names must be unique, got {names}")
        return self

    def salary_schedule(self, role: StaffRole) -> StepSchedule:
        """Monthly salary of ``role`` as a step schedule."""
        return StepSchedule(
            base_value=role.monthly_salary,
            growth_rate=self.cpi_rate,
            frequency_years=self.cpi_frequency_years,
            reference_year=self.reference_year,
        )

    def headcount_for(self, students: int) -> int:
        return sum(role.headcount_for(students) for role in self.roles)

    def cost_for(self, year: int, students: int) -> Decimal:
        """Total annual staff cost for ``students`` enrolled in ``year``."""
        if not self.roles:
            return ZERO
        return decimal_sum(
            Decimal(role.headcount_for(students))
            * self.salary_schedule(role).value_for(year)
            * MONTHS_PER_YEAR
            for role in self.roles
        )
