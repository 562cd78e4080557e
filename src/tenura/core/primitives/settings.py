# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from decimal import Decimal

from pydantic import Field, model_validator

from .model import Model
from .types import DecimalBetween0And1, PositiveDecimal, PositiveIntGe1


class SystemRates(Model):
    """
    System-wide rates applied to every proposal.

    These are macro assumptions set by the organization rather than the
    negotiated terms of a single proposal. They feed interest, zakat, the
    minimum-cash covenant and the discounting of contract cash flows.

    Usage Examples:
        # Defaults: 2.5% zakat, 5% debt, 2% deposits, 8% discount, 1M minimum cash
        rates = SystemRates()

        # Stress case with expensive debt
        rates = SystemRates(debt_interest_rate=Decimal("0.09"))
    """

    zakat_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.025"),
        description="Zakat levy applied to the zakat base each year.",
    )
    debt_interest_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.05"),
        description="Annual rate charged on the opening debt balance.",
    )
    deposit_interest_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.02"),
        description="Annual rate earned on the opening cash balance.",
    )
    discount_rate: DecimalBetween0And1 = Field(
        default=Decimal("0.08"),
        description="Rate used to discount contract-period cash flows for NPV.",
    )
    minimum_cash_balance: PositiveDecimal = Field(
        default=Decimal("1000000"),
        description="Covenant floor; a shortfall below it is funded by debt.",
    )


class WorkingCapitalRatios(Model):
    """
    Working-capital balances as fractions of the period's activity.

    Receivables and deferred revenue scale with total revenue; prepaid
    expenses, payables and accruals scale with total operating expense
    (rent + staff + other opex). All ratios default to zero, in which case
    the balance sheet carries no working capital at all.
    """

    receivables_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Accounts receivable / revenue."
    )
    deferred_revenue_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Deferred revenue / revenue."
    )
    prepaid_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Prepaid expenses / operating expense."
    )
    payables_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Accounts payable / operating expense."
    )
    accrued_rate: DecimalBetween0And1 = Field(
        default=Decimal("0"), description="Accrued expenses / operating expense."
    )


class EngineSettings(Model):
    """
    Configuration settings for the projection engine itself.

    These control numerical behavior (validation tolerance, IRR search
    window) and the calculation cache. They never change the modeled
    economics, but they are part of the cache fingerprint because they can
    change the reported output.
    """

    tolerance: PositiveDecimal = Field(
        default=Decimal("0.01"),
        description="Absolute rounding residue accepted by the balance and cash checks.",
    )
    irr_lower_bound: float = Field(
        default=-0.99,
        gt=-1.0,
        description="Lower edge of the IRR bisection bracket.",
    )
    irr_upper_bound: float = Field(
        default=10.0,
        description="Upper edge of the IRR bisection bracket.",
    )
    irr_max_iterations: PositiveIntGe1 = Field(
        default=200,
        description="Iteration cap for the IRR bisection.",
    )
    irr_xtol: float = Field(
        default=1e-10,
        gt=0,
        description="Absolute bracket width at which the IRR search stops.",
    )
    cache_max_entries: PositiveIntGe1 = Field(
        default=100,
        description="Number of runs a calculation cache keeps before evicting the least recently used.",
    )

    @model_validator(mode="after")
    def check_irr_bracket(self) -> "EngineSettings":
        """The IRR bracket must be a non-empty interval."""
        if self.irr_upper_bound <= self.irr_lower_bound:
            raise ValueError(
                f"irr_upper_bound ({self.irr_upper_bound}) must exceed "
                f"irr_lower_bound ({self.irr_lower_bound})"
            )
        return self
