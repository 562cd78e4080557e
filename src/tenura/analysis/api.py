# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection engine API

Public entry points for running a lease-proposal projection. A run checks
the configuration, simulates every year, validates the statements and
aggregates the metrics; a calculation cache, when supplied, wraps the
whole pipeline.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..core.primitives import ConfigurationError, EngineSettings
from ..periods import PeriodSimulator, ProjectionInput
from .cache import CalculationCache, fingerprint
from .metrics import MetricsAggregator
from .results import CalculationEngineOutput
from .validation import Validator

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def check_configuration(projection: ProjectionInput) -> None:
    """
    Reject an input that cannot be simulated.

    Raises:
        ConfigurationError: listing every problem found
    """
    problems = projection.configuration_problems()
    if problems:
        raise ConfigurationError(problems)


class ProjectionEngine:
    """
    Runs projections, optionally through a calculation cache.

    Args:
        settings: Engine settings (tolerance, IRR bracket); defaults apply when omitted
        cache: Cache shared by runs of this engine; None disables caching
        clock: Source of ``calculated_at`` timestamps

    Example:
        ```python
        engine = ProjectionEngine(cache=CalculationCache())
        output = engine.run(projection)
        if not output.is_validated:
            ...  # surface the inconsistency flags
        fresh = engine.run(projection, force_recalculation=True)
        ```
    """

    def __init__(
        self,
        settings: Optional[EngineSettings] = None,
        cache: Optional[CalculationCache] = None,
        clock: Optional[Clock] = None,
    ):
        self.settings = settings or EngineSettings()
        self.cache = cache
        self.clock = clock or utc_now
        self.validator = Validator(self.settings)
        self.aggregator = MetricsAggregator(self.settings)

    def fingerprint(self, projection: ProjectionInput) -> str:
        return fingerprint(projection, self.settings)

    def compute(
        self, projection: ProjectionInput, key: Optional[str] = None
    ) -> CalculationEngineOutput:
        """Run the full pipeline without touching the cache."""
        check_configuration(projection)
        key = key or self.fingerprint(projection)

        logger.info(
            f"Projecting {projection.first_year}-{projection.contract_end_year} "
            f"({projection.rent_model.kind.value} rent)"
        )
        periods = PeriodSimulator(projection).run()
        validation = self.validator.validate(periods)
        metrics = self.aggregator.aggregate(periods, projection.rates.discount_rate)

        if not validation.is_valid:
            logger.warning(
                f"Projection {key[:16]} failed consistency checks: "
                f"max balance difference {validation.max_balance_difference}, "
                f"max cash difference {validation.max_cash_difference}"
            )
        output = CalculationEngineOutput(
            periods=periods,
            validation=validation,
            metrics=metrics,
            calculated_at=self.clock(),
            fingerprint=key,
        )
        logger.info(
            f"Projection {key[:16]} complete: {len(periods)} periods, "
            f"NPV {metrics.npv:.2f}, validated={validation.is_valid}"
        )
        return output

    def run(
        self, projection: ProjectionInput, force_recalculation: bool = False
    ) -> CalculationEngineOutput:
        """
        Run a projection, using the cache when one is configured.

        Args:
            projection: Assumption snapshot to project
            force_recalculation: Invalidate any cached output for this input
                and compute a fresh one

        Raises:
            ConfigurationError: before any simulation, if the input is unusable
        """
        if self.cache is None:
            return self.compute(projection)

        key = self.fingerprint(projection)
        if force_recalculation:
            logger.info(f"Forced recalculation of {key[:16]}")
            self.cache.invalidate(key)
        return self.cache.get_or_compute(key, lambda: self.compute(projection, key))


def run(
    projection: ProjectionInput,
    settings: Optional[EngineSettings] = None,
    cache: Optional[CalculationCache] = None,
    force_recalculation: bool = False,
) -> CalculationEngineOutput:
    """
    Run a projection and return the output bundle.

    Workflow:
      1) Check the configuration (raises ConfigurationError before simulating)
      2) Simulate historical, transition and contract years
      3) Validate balance and cash reconciliation for every period
      4) Aggregate metrics over the contract years

    Args:
        projection: Assumption snapshot to project
        settings: Engine settings; defaults apply when omitted
        cache: Optional calculation cache wrapping the run
        force_recalculation: Bypass and refresh the cached output

    Returns:
        CalculationEngineOutput with periods, validation flags and metrics.
    """
    engine = ProjectionEngine(settings=settings, cache=cache)
    return engine.run(projection, force_recalculation=force_recalculation)
