# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from decimal import Decimal

import pytest
from pydantic import ValidationError

from tenura.capex import Asset, LegacyAssetBase
from tenura.core.primitives import DepreciationMethod


@pytest.fixture
def asset() -> Asset:
    return Asset(
        asset_id="general-2028-001",
        category="general",
        purchase_year=2028,
        purchase_amount=Decimal("1000000"),
        useful_life_years=10,
    )


class TestStraightLine:
    def test_book_value_after_first_year(self, asset):
        assert asset.depreciation_for(2028) == Decimal("100000")
        assert asset.net_book_value(2028) == Decimal("900000")

    def test_fully_depreciated_after_useful_life(self, asset):
        assert asset.final_year == 2037
        assert asset.net_book_value(2037) == Decimal("0")
        assert asset.accumulated_depreciation(2037) == Decimal("1000000")

    def test_no_depreciation_after_useful_life(self, asset):
        assert asset.depreciation_for(2038) == Decimal("0")
        assert asset.net_book_value(2045) == Decimal("0")

    def test_nothing_before_purchase(self, asset):
        assert asset.depreciation_for(2027) == Decimal("0")
        assert asset.net_book_value(2027) == Decimal("0")
        assert not asset.is_active(2027)

    def test_uneven_amount_lands_on_cost(self):
        asset = Asset(
            asset_id="it-2028-001",
            category="it",
            purchase_year=2028,
            purchase_amount=Decimal("1000000"),
            useful_life_years=3,
        )
        total = sum(asset.depreciation_for(year) for year in range(2028, 2032))
        assert total == Decimal("1000000")
        assert asset.net_book_value(2030) == Decimal("0")

    def test_depreciation_method_label(self, asset):
        assert asset.depreciation_method(2028) == DepreciationMethod.CURRENT
        assert asset.depreciation_method(2030) == DepreciationMethod.LEGACY

    def test_useful_life_must_be_positive(self):
        with pytest.raises(ValidationError):
            Asset(
                asset_id="x",
                category="general",
                purchase_year=2028,
                purchase_amount=1,
                useful_life_years=0,
            )


class TestLegacyAssetBase:
    @pytest.fixture
    def legacy(self) -> LegacyAssetBase:
        return LegacyAssetBase(
            gross_cost=Decimal("10500000"),
            accumulated_depreciation=Decimal("9000000"),
            annual_depreciation=Decimal("500000"),
            first_year=2025,
        )

    def test_depreciates_until_exhausted(self, legacy):
        assert legacy.opening_net_book_value == Decimal("1500000")
        assert [legacy.depreciation_for(y) for y in range(2025, 2029)] == [
            Decimal("500000"),
            Decimal("500000"),
            Decimal("500000"),
            Decimal("0"),
        ]
        assert legacy.net_book_value(2030) == Decimal("0")

    def test_accumulated_through(self, legacy):
        assert legacy.accumulated_through(2024) == Decimal("9000000")
        assert legacy.accumulated_through(2026) == Decimal("10000000")
