# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tenura Core Primitives

Building blocks shared by every engine component: the immutable model
base, constrained decimal types, enums, settings, decimal helpers and the
configuration error type.
"""

from .enums import (
    AssetOrigin,
    DepreciationMethod,
    OfferOrigin,
    PeriodPhase,
    ReinvestmentBasis,
    ReinvestmentSizing,
    RentModelKind,
    ValidationCheck,
)
from .errors import ConfigurationError
from .model import Model
from .money import (
    MONTHS_PER_YEAR,
    ONE,
    ZERO,
    ceil_div,
    decimal_sum,
    round_half_up,
    safe_divide,
    step_factor,
    to_decimal,
)
from .settings import EngineSettings, SystemRates, WorkingCapitalRatios
from .types import (
    DecimalBetween0And1,
    GrowthDecimal,
    PositiveDecimal,
    PositiveInt,
    PositiveIntGe1,
    Year,
)

__all__ = [
    # Base model and errors
    "Model",
    "ConfigurationError",
    # Enums
    "AssetOrigin",
    "DepreciationMethod",
    "OfferOrigin",
    "PeriodPhase",
    "ReinvestmentBasis",
    "ReinvestmentSizing",
    "RentModelKind",
    "ValidationCheck",
    # Settings
    "EngineSettings",
    "SystemRates",
    "WorkingCapitalRatios",
    # Types
    "DecimalBetween0And1",
    "GrowthDecimal",
    "PositiveDecimal",
    "PositiveInt",
    "PositiveIntGe1",
    "Year",
    # Decimal helpers
    "MONTHS_PER_YEAR",
    "ONE",
    "ZERO",
    "ceil_div",
    "decimal_sum",
    "round_half_up",
    "safe_divide",
    "step_factor",
    "to_decimal",
]
