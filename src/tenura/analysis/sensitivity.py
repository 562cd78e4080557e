# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
One-at-a-time sensitivity analysis.

Each variable is moved by a relative change across ``[-range, +range]``
percent of its baseline value while everything else stays at baseline, and
one metric is read from each run. ``tornado`` ranks several variables by
the spread between their extreme points.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence

import pandas as pd

from ..core.primitives import ONE, ZERO
from ..periods import ProjectionInput
from .api import ProjectionEngine
from .results import CalculationEngineOutput
from .scenario import ScenarioAdjustments, apply_scenario

logger = logging.getLogger(__name__)

HUNDRED = Decimal("100")


class SensitivityVariable(str, Enum):
    ENROLLMENT = "enrollment"
    TUITION_GROWTH = "tuition_growth"
    CPI = "cpi"
    RENT_ESCALATION = "rent_escalation"
    OTHER_OPEX = "other_opex"
    DISCOUNT_RATE = "discount_rate"


class SensitivityMetric(str, Enum):
    NPV = "npv"
    IRR = "irr"
    PAYBACK = "payback"
    TOTAL_RENT = "total_rent"
    AVERAGE_EBITDA = "average_ebitda"
    PEAK_DEBT = "peak_debt"
    FINAL_CASH = "final_cash"
    NET_ANNUALIZED_VALUE = "net_annualized_value"


_METRIC_READERS: Dict[
    SensitivityMetric, Callable[[CalculationEngineOutput], Optional[Decimal]]
] = {
    SensitivityMetric.NPV: lambda out: out.metrics.npv,
    SensitivityMetric.IRR: lambda out: out.metrics.irr,
    SensitivityMetric.PAYBACK: lambda out: out.metrics.payback_period,
    SensitivityMetric.TOTAL_RENT: lambda out: out.metrics.total_rent,
    SensitivityMetric.AVERAGE_EBITDA: lambda out: out.metrics.average_ebitda,
    SensitivityMetric.PEAK_DEBT: lambda out: out.metrics.peak_debt,
    SensitivityMetric.FINAL_CASH: lambda out: out.metrics.final_cash,
    SensitivityMetric.NET_ANNUALIZED_VALUE: (
        lambda out: out.metrics.contract_value.net_annualized_value
    ),
}


def read_metric(
    output: CalculationEngineOutput, metric: SensitivityMetric
) -> Optional[Decimal]:
    return _METRIC_READERS[metric](output)


def _escalation_rate(projection: ProjectionInput) -> Optional[Decimal]:
    return getattr(projection.rent_model, "escalation_rate", None)


def adjustments_for(
    projection: ProjectionInput, variable: SensitivityVariable, change_percent: Decimal
) -> ScenarioAdjustments:
    """Scenario that moves ``variable`` by ``change_percent`` of its baseline."""
    multiplier = ONE + change_percent / HUNDRED

    if variable == SensitivityVariable.ENROLLMENT:
        return ScenarioAdjustments(enrollment_percent=HUNDRED * multiplier)
    if variable == SensitivityVariable.TUITION_GROWTH:
        # All streams move together, scaled from the first stream's rate
        return ScenarioAdjustments(
            tuition_growth_rate=projection.streams[0].tuition.growth_rate * multiplier
        )
    if variable == SensitivityVariable.CPI:
        return ScenarioAdjustments(cpi_rate=projection.staffing.cpi_rate * multiplier)
    if variable == SensitivityVariable.RENT_ESCALATION:
        rate = _escalation_rate(projection)
        if rate is None:
            return ScenarioAdjustments()
        return ScenarioAdjustments(rent_escalation_rate=rate * multiplier)
    if variable == SensitivityVariable.OTHER_OPEX:
        return ScenarioAdjustments(
            other_opex_rate=min(projection.other_opex_rate * multiplier, ONE)
        )
    if variable == SensitivityVariable.DISCOUNT_RATE:
        return ScenarioAdjustments(
            discount_rate=min(projection.rates.discount_rate * multiplier, ONE)
        )
    raise ValueError(f"Unsupported sensitivity variable: {variable}")


@dataclass(frozen=True)
class SensitivityPoint:
    change_percent: Decimal
    value: Optional[Decimal]


@dataclass(frozen=True)
class SensitivityResult:
    """Metric values across the tested range of one variable."""

    variable: SensitivityVariable
    metric: SensitivityMetric
    baseline: Optional[Decimal]
    points: List[SensitivityPoint] = field(default_factory=list)

    @property
    def negative_deviation(self) -> Optional[Decimal]:
        return self.points[0].value if self.points else None

    @property
    def positive_deviation(self) -> Optional[Decimal]:
        return self.points[-1].value if self.points else None

    @property
    def total_impact(self) -> Optional[Decimal]:
        """Absolute spread between the extreme points; None if either is undefined."""
        low, high = self.negative_deviation, self.positive_deviation
        if low is None or high is None:
            return None
        return abs(high - low)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "change_percent": [p.change_percent for p in self.points],
                self.metric.value: [p.value for p in self.points],
            }
        )


def change_range(range_percent: Decimal, points: int) -> List[Decimal]:
    """Evenly spaced changes from -range to +range inclusive."""
    if points < 2:
        raise ValueError(f"points must be at least 2, got {points}")
    if range_percent < ZERO:
        raise ValueError(f"range_percent must be non-negative, got {range_percent}")
    step = (2 * range_percent) / Decimal(points - 1)
    return [-range_percent + step * i for i in range(points)]


def run_sensitivity(
    projection: ProjectionInput,
    variable: SensitivityVariable,
    metric: SensitivityMetric = SensitivityMetric.NPV,
    range_percent: Decimal = Decimal("20"),
    points: int = 5,
    engine: Optional[ProjectionEngine] = None,
) -> SensitivityResult:
    """
    Measure ``metric`` while moving ``variable`` across its range.

    Args:
        projection: Baseline input
        variable: Assumption to move
        metric: Metric read from each run
        range_percent: Maximum relative change, in percent of baseline
        points: Number of evenly spaced points, including both extremes
        engine: Engine to run with (a cached engine avoids repeated work)
    """
    engine = engine or ProjectionEngine()
    baseline = read_metric(engine.run(projection), metric)

    results: List[SensitivityPoint] = []
    for change in change_range(Decimal(range_percent), points):
        scenario = apply_scenario(projection, adjustments_for(projection, variable, change))
        value = read_metric(engine.run(scenario), metric)
        results.append(SensitivityPoint(change_percent=change, value=value))
        logger.debug(f"{variable.value} {change:+}% -> {metric.value} {value}")

    return SensitivityResult(
        variable=variable, metric=metric, baseline=baseline, points=results
    )


def tornado(
    projection: ProjectionInput,
    variables: Sequence[SensitivityVariable],
    metric: SensitivityMetric = SensitivityMetric.NPV,
    range_percent: Decimal = Decimal("20"),
    engine: Optional[ProjectionEngine] = None,
) -> List[SensitivityResult]:
    """Sensitivity of each variable, largest impact first (undefined impacts last)."""
    engine = engine or ProjectionEngine()
    results = [
        run_sensitivity(
            projection, variable, metric, range_percent, points=5, engine=engine
        )
        for variable in variables
    ]
    return sorted(
        results,
        key=lambda r: (r.total_impact is None, -(r.total_impact or ZERO)),
    )
