# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tenura Core

Foundational building blocks for the projection engine. Every other
subpackage imports its models, settings and decimal helpers from here.
"""

from . import primitives
from .primitives import (
    ConfigurationError,
    EngineSettings,
    Model,
    PeriodPhase,
    RentModelKind,
    SystemRates,
    WorkingCapitalRatios,
)

__all__ = [
    "primitives",
    "ConfigurationError",
    "EngineSettings",
    "Model",
    "PeriodPhase",
    "RentModelKind",
    "SystemRates",
    "WorkingCapitalRatios",
]
