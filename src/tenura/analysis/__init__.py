# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Projection analysis: engine API, validation, metrics, caching and what-if
tooling built on the period simulator.
"""

from .api import ProjectionEngine, check_configuration, run
from .cache import CacheStats, CalculationCache, fingerprint
from .calculations import FinancialCalculations
from .metrics import ContractValue, Metrics, MetricsAggregator
from .results import CalculationEngineOutput
from .scenario import ScenarioAdjustments, apply_scenario
from .sensitivity import (
    SensitivityMetric,
    SensitivityPoint,
    SensitivityResult,
    SensitivityVariable,
    run_sensitivity,
    tornado,
)
from .validation import PeriodCheck, ValidationIssue, ValidationResult, Validator

__all__ = [
    # Engine
    "ProjectionEngine",
    "check_configuration",
    "run",
    "CalculationEngineOutput",
    # Cache
    "CacheStats",
    "CalculationCache",
    "fingerprint",
    # Validation
    "PeriodCheck",
    "ValidationIssue",
    "ValidationResult",
    "Validator",
    # Metrics
    "ContractValue",
    "FinancialCalculations",
    "Metrics",
    "MetricsAggregator",
    # What-if
    "ScenarioAdjustments",
    "apply_scenario",
    "SensitivityMetric",
    "SensitivityPoint",
    "SensitivityResult",
    "SensitivityVariable",
    "run_sensitivity",
    "tornado",
]
