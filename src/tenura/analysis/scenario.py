# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
What-if scenarios.

A scenario derives a new ``ProjectionInput`` from a baseline without
touching it: enrollment is scaled, and growth rates are replaced while
their step frequencies are kept. Stream capacities are not scaled, so an
enrollment increase can be absorbed by the seat cap.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from pydantic import Field

from ..core.primitives import (
    ONE,
    DecimalBetween0And1,
    GrowthDecimal,
    Model,
    PositiveDecimal,
)
from ..periods import ProjectionInput

logger = logging.getLogger(__name__)


class ScenarioAdjustments(Model):
    """
    Adjustments applied on top of a baseline input.

    Attributes:
        enrollment_percent: Enrollment as a percentage of baseline (100 = unchanged)
        tuition_growth_rate: Replacement tuition growth rate for every stream
        cpi_rate: Replacement salary CPI rate
        rent_escalation_rate: Replacement escalation rate for escalating rent models
        other_opex_rate: Replacement other-opex share of revenue
        discount_rate: Replacement discount rate
    """

    enrollment_percent: PositiveDecimal = Decimal("100")
    tuition_growth_rate: Optional[GrowthDecimal] = None
    cpi_rate: Optional[GrowthDecimal] = None
    rent_escalation_rate: Optional[GrowthDecimal] = None
    other_opex_rate: Optional[DecimalBetween0And1] = None
    discount_rate: Optional[DecimalBetween0And1] = Field(default=None)

    @property
    def is_baseline(self) -> bool:
        return self == ScenarioAdjustments()


def apply_scenario(
    projection: ProjectionInput, adjustments: ScenarioAdjustments
) -> ProjectionInput:
    """Return a copy of ``projection`` with ``adjustments`` applied."""
    update = {}

    factor = adjustments.enrollment_percent / Decimal("100")
    streams = list(projection.streams)
    if factor != ONE:
        streams = [
            stream.model_copy(update={"enrollment": stream.enrollment.scaled(factor)})
            for stream in streams
        ]
    if adjustments.tuition_growth_rate is not None:
        streams = [
            stream.model_copy(
                update={
                    "tuition": stream.tuition.model_copy(
                        update={"growth_rate": adjustments.tuition_growth_rate}
                    )
                }
            )
            for stream in streams
        ]
    update["streams"] = streams

    if adjustments.cpi_rate is not None:
        update["staffing"] = projection.staffing.model_copy(
            update={"cpi_rate": adjustments.cpi_rate}
        )

    if adjustments.rent_escalation_rate is not None:
        rent_model = projection.rent_model
        if hasattr(rent_model, "escalation_rate"):
            update["rent_model"] = rent_model.model_copy(
                update={"escalation_rate": adjustments.rent_escalation_rate}
            )
        else:
            logger.debug(
                f"{rent_model.kind.value} rent has no escalation; "
                f"rent_escalation_rate ignored"
            )

    if adjustments.other_opex_rate is not None:
        update["other_opex_rate"] = adjustments.other_opex_rate

    if adjustments.discount_rate is not None:
        update["rates"] = projection.rates.model_copy(
            update={"discount_rate": adjustments.discount_rate}
        )

    return projection.model_copy(update=update)
