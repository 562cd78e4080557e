# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rate & Schedule Resolver

Turns time-varying assumptions (tuition growth steps, CPI steps, rent
escalation steps, enrollment ramp-up) into per-year values.
"""

from .ramp import EnrollmentRamp
from .step import StepSchedule, elapsed_steps
from .streams import (
    CurriculumStream,
    StaffingPlan,
    StaffRole,
    total_students,
    tuition_revenue,
)

__all__ = [
    # Step functions
    "StepSchedule",
    "elapsed_steps",
    # Enrollment
    "EnrollmentRamp",
    "CurriculumStream",
    "total_students",
    "tuition_revenue",
    # Staffing
    "StaffRole",
    "StaffingPlan",
]
