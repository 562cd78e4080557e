# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Capital assets and straight-line depreciation.

Depreciation starts in the purchase year (full-year convention) and runs
for ``useful_life_years`` years. The final year takes whatever remains, so
accumulated depreciation lands exactly on the purchase amount and net book
value never goes below zero.
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from ..core.primitives import (
    ZERO,
    AssetOrigin,
    DepreciationMethod,
    Model,
    PositiveDecimal,
    PositiveIntGe1,
    Year,
)


class Asset(Model):
    """
    An owned capital item.

    Attributes:
        asset_id: Stable identifier (category, purchase year and sequence)
        category: Owning CapEx category
        purchase_year: Year of purchase; depreciation starts this year
        purchase_amount: Cost capitalized at purchase
        useful_life_years: Straight-line depreciation period
        origin: Manual entry or auto-reinvestment
    """

    asset_id: str
    category: str
    purchase_year: Year
    purchase_amount: PositiveDecimal
    useful_life_years: PositiveIntGe1
    origin: AssetOrigin = AssetOrigin.MANUAL

    @property
    def annual_depreciation(self) -> Decimal:
        return self.purchase_amount / Decimal(self.useful_life_years)

    @property
    def final_year(self) -> int:
        """Last year with a depreciation charge."""
        return self.purchase_year + self.useful_life_years - 1

    def accumulated_depreciation(self, year: int) -> Decimal:
        """Accumulated depreciation at the end of ``year``, capped at cost."""
        if year < self.purchase_year:
            return ZERO
        if year >= self.final_year:
            return self.purchase_amount
        years_charged = year - self.purchase_year + 1
        return min(self.annual_depreciation * years_charged, self.purchase_amount)

    def depreciation_for(self, year: int) -> Decimal:
        """Depreciation expense charged in ``year``; zero outside the useful life."""
        if year < self.purchase_year or year > self.final_year:
            return ZERO
        return self.accumulated_depreciation(year) - self.accumulated_depreciation(
            year - 1
        )

    def net_book_value(self, year: int) -> Decimal:
        """Book value at the end of ``year`` (zero before purchase)."""
        if year < self.purchase_year:
            return ZERO
        return max(self.purchase_amount - self.accumulated_depreciation(year), ZERO)

    def is_active(self, year: int) -> bool:
        return self.purchase_year <= year <= self.final_year

    def depreciation_method(self, threshold_year: int) -> DepreciationMethod:
        """Reporting label; purchases before ``threshold_year`` are legacy."""
        if self.purchase_year < threshold_year:
            return DepreciationMethod.LEGACY
        return DepreciationMethod.CURRENT


class LegacyAssetBase(Model):
    """
    PP&E carried over from the recorded years.

    Individual legacy assets are not tracked; the pool keeps depreciating at
    the last recorded annual charge until its opening net book value is
    used up.
    """

    gross_cost: PositiveDecimal
    accumulated_depreciation: PositiveDecimal = Decimal("0")
    annual_depreciation: PositiveDecimal = Field(
        default=Decimal("0"),
        description="Charge per year, typically the last recorded depreciation.",
    )
    first_year: Year = Field(
        ..., description="First projected year after the recorded history."
    )

    @property
    def opening_net_book_value(self) -> Decimal:
        return max(self.gross_cost - self.accumulated_depreciation, ZERO)

    def charged_through(self, year: int) -> Decimal:
        """Depreciation charged from ``first_year`` through ``year`` inclusive."""
        if year < self.first_year:
            return ZERO
        years = year - self.first_year + 1
        return min(self.annual_depreciation * years, self.opening_net_book_value)

    def depreciation_for(self, year: int) -> Decimal:
        return self.charged_through(year) - self.charged_through(year - 1)

    def net_book_value(self, year: int) -> Decimal:
        return self.opening_net_book_value - self.charged_through(year)

    def accumulated_through(self, year: int) -> Decimal:
        return self.accumulated_depreciation + self.charged_through(year)
