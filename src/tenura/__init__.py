# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
Tenura - Lease Proposal Financial Projection Engine

Projects 25 to 30 year financial outcomes of school-campus lease proposals
under different rent structures and operating assumptions, producing
reconciled yearly statements and investment metrics.

Key Entry Points:
- tenura.analysis.run() - Run a projection and get validated statements and metrics
- tenura.analysis.ProjectionEngine - Engine with an injectable calculation cache
- tenura.periods.ProjectionInput - The assumption snapshot for one run
- tenura.rent.* - Rent model variants
- tenura.capex.* - CapEx policies and the depreciation ledger

Example Usage:
    ```python
    from tenura.analysis import CalculationCache, ProjectionEngine

    engine = ProjectionEngine(cache=CalculationCache())
    output = engine.run(projection)
    print(output.metrics.npv, output.validation.is_valid)
    ```
"""

# Add a NullHandler so applications that do not configure logging see no
# "No handlers could be found" warnings. Applications configure their own
# handlers as needed.
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "analysis",
    "capex",
    "core",
    "periods",
    "proposals",
    "rent",
    "schedule",
]


_LAZY_MODULES = {
    "analysis": "tenura.analysis",
    "capex": "tenura.capex",
    "core": "tenura.core",
    "periods": "tenura.periods",
    "proposals": "tenura.proposals",
    "rent": "tenura.rent",
    "schedule": "tenura.schedule",
}


def __getattr__(name: str):
    module_path = _LAZY_MODULES.get(name)
    if module_path is None:
        raise AttributeError(f"module 'tenura' has no attribute '{name}'")
    module = importlib.import_module(module_path)
    globals()[name] = module
    return module
