# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for the investment metrics. These functions are
pure (math-only) and independent of the period statements; the metrics
aggregator delegates to them so each formula has a single home.

Undefined results (no IRR root, no payback crossing, nothing invested) are
``None``; a metric is never reported as zero or a magic number to mean
"undefined".
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional, Sequence

import numpy as np
from pyxirr import npv as pyxirr_npv
from scipy.optimize import bisect

from ..core.primitives import ONE, ZERO, decimal_sum, safe_divide

logger = logging.getLogger(__name__)

PAYBACK_PLACES = Decimal("0.0001")
IRR_PLACES = Decimal("0.0000000001")


class FinancialCalculations:
    """
    Pure mathematical functions for the proposal metrics.

    Cash flows are annual and ordered; index 0 is the contract start year
    and is not discounted.
    """

    @staticmethod
    def calculate_npv(cash_flows: Sequence[Decimal], discount_rate: Decimal) -> Decimal:
        """
        Net present value with annual compounding from offset 0.

        Args:
            cash_flows: Annual cash flows, first at offset 0
            discount_rate: Annual discount rate as decimal (e.g., 0.08)

        Returns:
            NPV as Decimal (zero for an empty sequence)

        Example:
            ```python
            FinancialCalculations.calculate_npv(
                [Decimal("-1000"), Decimal("600"), Decimal("600")], Decimal("0.1")
            )  # Decimal('41.32...')
            ```
        """
        factor = ONE + discount_rate
        return decimal_sum(
            flow / factor**offset for offset, flow in enumerate(cash_flows)
        )

    @staticmethod
    def calculate_irr(
        cash_flows: Sequence[Decimal],
        lower_bound: float = -0.99,
        upper_bound: float = 10.0,
        max_iterations: int = 200,
        xtol: float = 1e-10,
    ) -> Optional[Decimal]:
        """
        Internal rate of return by bisection over a bounded bracket.

        The NPV objective is evaluated by PyXIRR on float flows and bracketed
        by ``scipy.optimize.bisect`` with a fixed iteration cap, so the
        result is deterministic for a given input.

        Returns:
            IRR as Decimal (rounded to 10 places) or None when undefined

        Edge Cases Handled:
            - Empty series → None
            - No sign change in the flows (all positive or all negative) → None
            - No sign change of NPV across the bracket → None
        """
        if len(cash_flows) < 2:
            return None

        flows = np.array([float(flow) for flow in cash_flows], dtype=float)
        if not ((flows < 0).any() and (flows > 0).any()):
            return None

        def objective(rate: float) -> float:
            return pyxirr_npv(rate, flows)

        low_value = objective(lower_bound)
        high_value = objective(upper_bound)
        if low_value == 0:
            return Decimal(repr(lower_bound)).quantize(IRR_PLACES)
        if high_value == 0:
            return Decimal(repr(upper_bound)).quantize(IRR_PLACES)
        if np.sign(low_value) == np.sign(high_value):
            logger.debug(
                f"No IRR sign change in [{lower_bound}, {upper_bound}]; undefined"
            )
            return None

        root = bisect(
            objective,
            lower_bound,
            upper_bound,
            xtol=xtol,
            maxiter=max_iterations,
            disp=False,
        )
        return Decimal(repr(float(root))).quantize(IRR_PLACES)

    @staticmethod
    def calculate_payback_period(cash_flows: Sequence[Decimal]) -> Optional[Decimal]:
        """
        Years until cumulative cash flow first reaches zero.

        Interpolates linearly within the crossing year:
        ``index + |cumulative before| / |flow|``, rounded to 4 places.

        Returns:
            Payback in years from offset 0, or None if never reached
        """
        cumulative = ZERO
        for index, flow in enumerate(cash_flows):
            prior = cumulative
            cumulative += flow
            if cumulative >= ZERO:
                if prior >= ZERO or flow == ZERO:
                    return Decimal(index)
                fraction = (abs(prior) / abs(flow)).quantize(PAYBACK_PLACES)
                return Decimal(index) + fraction
        return None

    @staticmethod
    def calculate_roi(
        net_income: Sequence[Decimal], capital_invested: Sequence[Decimal]
    ) -> Optional[Decimal]:
        """Cumulative net income / cumulative capital invested; None with no capital."""
        return safe_divide(decimal_sum(net_income), decimal_sum(capital_invested))

    @staticmethod
    def calculate_annualization_factor(rate: Decimal, years: int) -> Optional[Decimal]:
        """
        Capital recovery factor ``r / (1 - (1 + r) ** -n)``.

        Converts an NPV into an equivalent annual value. With a zero rate the
        factor is ``1 / n``.
        """
        if years <= 0:
            return None
        if rate == ZERO:
            return ONE / Decimal(years)
        return rate / (ONE - (ONE + rate) ** -years)
