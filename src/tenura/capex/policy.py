# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""CapEx configuration: reinvestment policies, categories and manual assets."""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from pydantic import Field, model_validator

from ..core.primitives import (
    DecimalBetween0And1,
    Model,
    PositiveDecimal,
    PositiveIntGe1,
    ReinvestmentBasis,
    ReinvestmentSizing,
    Year,
)


class ReinvestmentPolicy(Model):
    """
    When and how much to reinvest automatically.

    A purchase is due in ``year`` when ``years_since = year - start_year`` is
    positive and a multiple of ``frequency_years``. The start year itself
    never triggers a purchase. When ``start_year`` is omitted the contract
    start year is used.

    Sizing is either a fixed ``amount`` or ``rate`` times a basis: the cost
    of the latest purchase in the same category, or the year's revenue.
    """

    frequency_years: PositiveIntGe1 = 5
    start_year: Optional[Year] = None
    sizing: ReinvestmentSizing = ReinvestmentSizing.FIXED
    amount: Optional[PositiveDecimal] = None
    rate: Optional[DecimalBetween0And1] = None
    basis: ReinvestmentBasis = ReinvestmentBasis.PRIOR_ASSET_COST

    @model_validator(mode="after")
    def check_sizing_parameters(self) -> "ReinvestmentPolicy":
        """Each sizing mode requires its own parameter."""
        if self.sizing == ReinvestmentSizing.FIXED and self.amount is None:
            raise ValueError("amount must be set when sizing is FIXED")
        if self.sizing == ReinvestmentSizing.PERCENT and self.rate is None:
            raise ValueError("rate must be set when sizing is PERCENT")
        return self

    def anchor_year(self, contract_start_year: int) -> int:
        return self.start_year if self.start_year is not None else contract_start_year

    def is_due(self, year: int, contract_start_year: int) -> bool:
        years_since = year - self.anchor_year(contract_start_year)
        return years_since > 0 and years_since % self.frequency_years == 0

    def purchase_amount(
        self, revenue: Decimal, prior_asset_cost: Optional[Decimal]
    ) -> Optional[Decimal]:
        """Size of a due purchase, or None when the basis is unavailable."""
        if self.sizing == ReinvestmentSizing.FIXED:
            return self.amount
        if self.basis == ReinvestmentBasis.REVENUE:
            return revenue * self.rate
        if prior_asset_cost is None:
            return None
        return prior_asset_cost * self.rate


class CapExCategory(Model):
    """An asset class with its own useful life and optional policy override."""

    name: str
    useful_life_years: PositiveIntGe1 = 10
    policy: Optional[ReinvestmentPolicy] = Field(
        default=None,
        description="Overrides the global reinvestment policy for this category.",
    )


class ManualAsset(Model):
    """A one-off purchase entered by the user."""

    name: Optional[str] = None
    category: str
    purchase_year: Year
    amount: PositiveDecimal
    useful_life_years: Optional[PositiveIntGe1] = Field(
        default=None, description="Defaults to the category's useful life."
    )


class CapExConfig(Model):
    """
    Capital expenditure configuration for a proposal.

    Attributes:
        auto_reinvest: Enables automatic reinvestment purchases
        policy: Global reinvestment policy, used by categories without one
        categories: Asset categories; names must be unique
        manual_assets: One-off purchases during the contract term
    """

    auto_reinvest: bool = False
    policy: Optional[ReinvestmentPolicy] = None
    categories: List[CapExCategory] = Field(
        default_factory=lambda: [CapExCategory(name="general")]
    )
    manual_assets: List[ManualAsset] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_categories(self) -> "CapExConfig":
        names = [category.name for category in self.categories]
        if len(names) != len(set(names)):
            raise ValueError(f"CapEx category names must be unique, got {names}")
        unknown = sorted(
            {asset.category for asset in self.manual_assets} - set(names)
        )
        if unknown:
            raise ValueError(f"Manual assets reference unknown categories: {unknown}")
        if self.auto_reinvest and self.policy is None:
            missing = [c.name for c in self.categories if c.policy is None]
            if missing:
                raise ValueError(
                    "auto_reinvest requires a global policy or a policy on every "
                    f"category; missing for {missing}"
                )
        return self

    def category(self, name: str) -> CapExCategory:
        for category in self.categories:
            if category.name == name:
                return category
        raise KeyError(name)

    def policy_for(self, category: CapExCategory) -> Optional[ReinvestmentPolicy]:
        if not self.auto_reinvest:
            return None
        return category.policy or self.policy
