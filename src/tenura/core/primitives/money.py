# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Decimal helpers used across the engine.

Amounts stay at full Decimal precision through the whole simulation; only
headcounts and student numbers are rounded. Rounding money for display is
left to the caller.
"""

from __future__ import annotations

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Union

Number = Union[Decimal, int, float, str]

ZERO = Decimal("0")
ONE = Decimal("1")
MONTHS_PER_YEAR = Decimal("12")


def to_decimal(value: Number) -> Decimal:
    """Convert a number to Decimal, going through ``str`` for floats."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest whole unit, halves away from zero."""
    return int(value.to_integral_value(rounding=ROUND_HALF_UP))


def ceil_div(numerator: int, denominator: int) -> int:
    """Integer ceiling division for headcount ratios."""
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    return int((Decimal(numerator) / Decimal(denominator)).to_integral_value(
        rounding=ROUND_CEILING
    ))


def step_factor(growth_rate: Decimal, steps: int) -> Decimal:
    """Compound factor ``(1 + g) ** steps`` for a whole number of steps."""
    if steps <= 0:
        return ONE
    return (ONE + growth_rate) ** steps


def safe_divide(numerator: Decimal, denominator: Decimal) -> Optional[Decimal]:
    """Return ``numerator / denominator`` or None when the denominator is zero."""
    if denominator == ZERO:
        return None
    return numerator / denominator


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)
