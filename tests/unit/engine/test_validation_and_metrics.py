# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import logging
from decimal import Decimal

import pytest

from tenura.analysis import FinancialCalculations, MetricsAggregator, Validator
from tenura.capex import CapExConfig, ManualAsset
from tenura.core.primitives import EngineSettings, ValidationCheck
from tenura.periods import PeriodSimulator


@pytest.fixture
def periods(sample_projection):
    return PeriodSimulator(sample_projection).run()


def with_cash(period, delta):
    sheet = period.balance_sheet
    return period.model_copy(
        update={"balance_sheet": sheet.model_copy(update={"cash": sheet.cash + delta})}
    )


class TestValidator:
    def test_clean_series_passes(self, periods):
        result = Validator().validate(periods)

        assert result.is_valid
        assert result.issues == []
        assert result.max_balance_difference <= Decimal("0.01")
        assert len(result.periods) == len(periods)

    def test_flags_unbalanced_period(self, periods, caplog):
        tampered = list(periods)
        tampered[7] = with_cash(tampered[7], Decimal("5"))

        with caplog.at_level(logging.WARNING, logger="tenura.analysis.validation"):
            result = Validator().validate(tampered)

        assert not result.is_valid
        assert not result.all_periods_balanced
        assert result.check_for(tampered[7].year).passed is False
        assert ValidationCheck.BALANCE_SHEET in {issue.check for issue in result.issues}
        assert "balance_sheet check failed" in caplog.text

    def test_flags_unreconciled_cash_flow(self, periods):
        tampered = list(periods)
        flow = tampered[8].cash_flow
        tampered[8] = tampered[8].model_copy(
            update={"cash_flow": flow.model_copy(update={"operating": flow.operating + 1})}
        )

        result = Validator().validate(tampered)

        assert result.all_periods_balanced
        assert not result.all_cash_flows_reconciled
        assert result.max_cash_difference == Decimal("1")

    def test_historical_periods_are_reconciled(self, periods):
        result = Validator().validate(periods)
        assert result.check_for(2023).reconciled
        assert result.check_for(2024).reconciled

        tampered = list(periods)
        flow = tampered[1].cash_flow
        tampered[1] = tampered[1].model_copy(
            update={"cash_flow": flow.model_copy(update={"operating": Decimal("9")})}
        )

        result = Validator().validate(tampered)

        assert not result.all_cash_flows_reconciled
        assert not result.check_for(2024).reconciled

    def test_tolerance_from_settings(self, periods):
        tampered = list(periods)
        tampered[7] = with_cash(tampered[7], Decimal("0.5"))

        assert not Validator().validate(tampered).is_valid
        relaxed = Validator(EngineSettings(tolerance=Decimal("1")))
        assert relaxed.validate(tampered).is_valid


class TestMetricsAggregator:
    def test_contract_years_only(self, periods):
        metrics = MetricsAggregator().aggregate(periods, Decimal("0.08"))
        contract = MetricsAggregator.contract_periods(periods)

        assert len(contract) == 10
        assert metrics.total_rent == sum(p.profit_and_loss.rent for p in contract)
        assert metrics.total_ebitda == sum(p.profit_and_loss.ebitda for p in contract)
        assert metrics.average_ebitda == metrics.total_ebitda / 10
        assert metrics.final_cash == periods[-1].balance_sheet.cash

    def test_npv_matches_free_cash_flow(self, periods):
        metrics = MetricsAggregator().aggregate(periods, Decimal("0.08"))
        flows = list(MetricsAggregator.free_cash_flows(periods))

        assert metrics.npv == FinancialCalculations.calculate_npv(flows, Decimal("0.08"))
        assert metrics.discount_rate == Decimal("0.08")

    def test_positive_flows_have_no_irr(self, periods):
        """Without an investment there is no sign change, so IRR is undefined."""
        metrics = MetricsAggregator().aggregate(periods, Decimal("0.08"))

        assert metrics.irr is None
        assert metrics.payback_period == Decimal("0")
        assert metrics.roi is None
        assert metrics.peak_debt == Decimal("0")

    def test_investment_gives_irr_and_payback(self, projection_factory):
        projection = projection_factory(
            contract_years=10,
            capex=CapExConfig(
                manual_assets=[
                    ManualAsset(
                        category="general",
                        purchase_year=2028,
                        amount=Decimal("100000000"),
                    )
                ]
            ),
        )
        periods = PeriodSimulator(projection).run()
        metrics = MetricsAggregator().aggregate(periods, Decimal("0.08"))

        assert metrics.irr is not None
        assert metrics.payback_period is not None
        assert metrics.payback_period > Decimal("1")
        assert metrics.roi is not None
        assert metrics.peak_debt > Decimal("0")

    def test_contract_value(self, periods):
        value = MetricsAggregator().aggregate(periods, Decimal("0.08")).contract_value

        assert value.net_tenant_surplus == value.ebitda_npv - value.rent_npv
        assert value.net_annualized_value == (
            value.annualized_ebitda - value.annualized_rent
        )

    def test_empty_series_rejected(self):
        with pytest.raises(ValueError):
            MetricsAggregator().aggregate([], Decimal("0.08"))

    def test_free_cash_flow_series(self, periods):
        series = MetricsAggregator.free_cash_flows(periods)
        assert list(series.index) == list(range(2028, 2038))
