# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
CapEx & depreciation ledger.

The ledger is the simulator's mutable companion: it owns the growing list
of assets for one run, books manual and auto-reinvestment purchases as the
simulation reaches their year, and reports depreciation and book values
for the balance sheet. Each run builds its own ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Optional

import pandas as pd

from ..core.primitives import ZERO, AssetOrigin, decimal_sum
from .asset import Asset, LegacyAssetBase
from .policy import CapExCategory, CapExConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerYear:
    """Ledger totals at the end of one year."""

    year: int
    spend: Decimal
    depreciation: Decimal
    gross_cost: Decimal
    accumulated_depreciation: Decimal
    purchases: List[Asset] = field(default_factory=list)

    @property
    def net_book_value(self) -> Decimal:
        return self.gross_cost - self.accumulated_depreciation


@dataclass
class CapExLedger:
    """
    Runtime asset register for a single projection run.

    Args:
        config: CapEx configuration of the proposal
        contract_start_year: Anchor for reinvestment timing and method labels
        legacy: Opening PP&E carried from the recorded years, if any
    """

    config: CapExConfig
    contract_start_year: int
    legacy: Optional[LegacyAssetBase] = None
    assets: List[Asset] = field(default_factory=list)
    _sequence: Dict[str, int] = field(default_factory=dict, repr=False)

    def _next_id(self, category: str, year: int) -> str:
        self._sequence[category] = self._sequence.get(category, 0) + 1
        return f"{category}-{year}-{self._sequence[category]:03d}"

    def add_asset(
        self,
        category: CapExCategory,
        year: int,
        amount: Decimal,
        origin: AssetOrigin,
        useful_life_years: Optional[int] = None,
    ) -> Asset:
        asset = Asset(
            asset_id=self._next_id(category.name, year),
            category=category.name,
            purchase_year=year,
            purchase_amount=amount,
            useful_life_years=useful_life_years or category.useful_life_years,
            origin=origin,
        )
        self.assets.append(asset)
        logger.debug(
            f"Booked {origin.value} asset {asset.asset_id}: {amount} over "
            f"{asset.useful_life_years} years"
        )
        return asset

    def latest_cost(self, category: str) -> Optional[Decimal]:
        """Purchase amount of the most recent asset in ``category``."""
        for asset in reversed(self.assets):
            if asset.category == category:
                return asset.purchase_amount
        return None

    def book_purchases(self, year: int, revenue: Decimal) -> List[Asset]:
        """Book manual entries and due reinvestments for ``year``."""
        purchases: List[Asset] = []

        for manual in self.config.manual_assets:
            if manual.purchase_year != year:
                continue
            category = self.config.category(manual.category)
            purchases.append(
                self.add_asset(
                    category,
                    year,
                    manual.amount,
                    AssetOrigin.MANUAL,
                    manual.useful_life_years,
                )
            )

        for category in self.config.categories:
            policy = self.config.policy_for(category)
            if policy is None or not policy.is_due(year, self.contract_start_year):
                continue
            amount = policy.purchase_amount(revenue, self.latest_cost(category.name))
            if amount is None or amount <= ZERO:
                logger.debug(
                    f"Reinvestment due for '{category.name}' in {year} but no "
                    f"amount could be sized; skipped"
                )
                continue
            purchases.append(
                self.add_asset(category, year, amount, AssetOrigin.AUTO_REINVESTMENT)
            )

        return purchases

    def depreciation_for(self, year: int) -> Decimal:
        """Total depreciation expense across all assets active in ``year``."""
        legacy = self.legacy.depreciation_for(year) if self.legacy else ZERO
        return legacy + decimal_sum(a.depreciation_for(year) for a in self.assets)

    def gross_cost(self, year: int) -> Decimal:
        legacy = self.legacy.gross_cost if self.legacy else ZERO
        return legacy + decimal_sum(
            a.purchase_amount for a in self.assets if a.purchase_year <= year
        )

    def accumulated_depreciation(self, year: int) -> Decimal:
        legacy = self.legacy.accumulated_through(year) if self.legacy else ZERO
        return legacy + decimal_sum(
            a.accumulated_depreciation(year) for a in self.assets
        )

    def net_book_value(self, year: int) -> Decimal:
        return self.gross_cost(year) - self.accumulated_depreciation(year)

    def snapshot(self, year: int) -> LedgerYear:
        """Totals for ``year`` without booking anything."""
        purchases = [a for a in self.assets if a.purchase_year == year]
        return LedgerYear(
            year=year,
            spend=decimal_sum(a.purchase_amount for a in purchases),
            depreciation=self.depreciation_for(year),
            gross_cost=self.gross_cost(year),
            accumulated_depreciation=self.accumulated_depreciation(year),
            purchases=purchases,
        )

    def record_year(self, year: int, revenue: Decimal) -> LedgerYear:
        """Book ``year``'s purchases and return the year's totals."""
        self.book_purchases(year, revenue)
        return self.snapshot(year)

    def schedule(self) -> pd.DataFrame:
        """Asset register as a DataFrame, one row per asset."""
        columns = [
            "asset_id",
            "category",
            "purchase_year",
            "purchase_amount",
            "useful_life_years",
            "origin",
            "method",
        ]
        rows = [
            {
                "asset_id": asset.asset_id,
                "category": asset.category,
                "purchase_year": asset.purchase_year,
                "purchase_amount": asset.purchase_amount,
                "useful_life_years": asset.useful_life_years,
                "origin": asset.origin.value,
                "method": asset.depreciation_method(self.contract_start_year).value,
            }
            for asset in self.assets
        ]
        return pd.DataFrame(rows, columns=columns)
