# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
End-to-end projection scenarios over full contract terms.

These run the whole pipeline (configuration check, simulation, validation,
metrics) and pin the headline behaviors a proposal reviewer relies on.
"""

import threading
import time
from decimal import Decimal

import pytest

from tenura.analysis import CalculationCache, ProjectionEngine
from tenura.capex import CapExConfig, ManualAsset, ReinvestmentPolicy
from tenura.core.primitives import ConfigurationError, PeriodPhase
from tenura.periods import PeriodSimulator
from tenura.rent import FixedEscalationRent, RevenueShareRent


@pytest.fixture
def engine() -> ProjectionEngine:
    return ProjectionEngine(cache=CalculationCache())


class TestHeadlineScenarios:
    def test_fixed_escalation_steps(self, engine, projection_factory):
        output = engine.run(projection_factory())
        rents = [output.period(year).profit_and_loss.rent for year in range(2028, 2032)]

        assert rents == [
            Decimal("5000000"),
            Decimal("5000000"),
            Decimal("5250000"),
            Decimal("5250000"),
        ]
        assert len(output.phase_periods(PeriodPhase.DYNAMIC)) == 30
        assert output.is_validated

    def test_revenue_share_of_period_revenue(
        self, engine, projection_factory, stream_factory
    ):
        projection = projection_factory(
            rent_model=RevenueShareRent(share_rate=Decimal("0.10")),
            streams=[stream_factory(initial_students=625, target_students=625)],
        )
        output = engine.run(projection)
        first_year = output.period(2028).profit_and_loss

        assert first_year.revenue == Decimal("20000000")
        assert first_year.rent == Decimal("2000000")

    def test_asset_depreciates_to_zero(self, projection_factory):
        projection = projection_factory(
            capex=CapExConfig(
                manual_assets=[
                    ManualAsset(
                        category="general",
                        purchase_year=2028,
                        amount=Decimal("1000000"),
                        useful_life_years=10,
                    )
                ]
            )
        )
        simulator = PeriodSimulator(projection)
        periods = {p.year: p for p in simulator.run()}
        asset = simulator.ledger.assets[0]

        assert asset.net_book_value(2028) == Decimal("900000")
        assert asset.net_book_value(2037) == Decimal("0")
        assert asset.depreciation_for(2038) == Decimal("0")
        # The carried-over pool is exhausted by 2037, leaving only this asset
        assert periods[2037].profit_and_loss.depreciation == Decimal("100000")
        assert periods[2038].profit_and_loss.depreciation == Decimal("0")
        assert periods[2038].balance_sheet.net_ppe == Decimal("0")

    def test_negative_free_cash_flow_has_undefined_irr_and_payback(
        self, engine, projection_factory
    ):
        projection = projection_factory(
            rent_model=FixedEscalationRent(base_rent=Decimal("200000000"))
        )
        output = engine.run(projection)
        flows = [p.cash_flow.free_cash_flow for p in output.phase_periods(PeriodPhase.DYNAMIC)]

        assert all(flow < 0 for flow in flows)
        assert output.metrics.irr is None
        assert output.metrics.payback_period is None
        assert output.is_validated

    def test_forced_recalculation_after_input_change(self, engine, projection_factory):
        projection = projection_factory()
        first = engine.run(projection)

        changed = projection.model_copy(
            update={
                "rates": projection.rates.model_copy(
                    update={"discount_rate": Decimal("0.11")}
                )
            }
        )
        second = engine.run(changed, force_recalculation=True)

        assert second is not first
        assert not second.same_projection(first)
        assert second.metrics.npv < first.metrics.npv
        assert second.validation.is_valid
        # The untouched entry for the original input is still served
        assert engine.run(projection) is first


class TestConfigurationErrors:
    def test_rent_reference_after_contract_end(self, engine, projection_factory):
        projection = projection_factory(
            contract_years=25,
            rent_model=FixedEscalationRent(
                base_rent=Decimal("5000000"), reference_year=2060
            ),
        )
        with pytest.raises(ConfigurationError, match="reference_year 2060"):
            engine.run(projection)
        assert len(engine.cache) == 0

    def test_all_problems_reported_together(self, engine, projection_factory):
        projection = projection_factory(
            contract_years=25,
            rent_model=RevenueShareRent(share_rate=Decimal("0")),
            capex=CapExConfig(
                manual_assets=[ManualAsset(category="general", purchase_year=2070, amount=1)]
            ),
        )
        with pytest.raises(ConfigurationError) as excinfo:
            engine.run(projection)
        assert len(excinfo.value.problems) == 2


class TestDeterminism:
    def test_separate_engines_agree(self, projection_factory):
        projection = projection_factory()
        first = ProjectionEngine().run(projection)
        second = ProjectionEngine().run(projection)

        assert first.same_projection(second)
        assert first.fingerprint == second.fingerprint

    def test_concurrent_runs_compute_once(self, projection_factory):
        calls = []

        class CountingEngine(ProjectionEngine):
            def compute(self, projection, key=None):
                calls.append(1)
                time.sleep(0.2)
                return super().compute(projection, key)

        engine = CountingEngine(cache=CalculationCache())
        projection = projection_factory(contract_years=25)
        outputs = []

        def worker():
            outputs.append(engine.run(projection))

        threads = [threading.Thread(target=worker) for _ in range(6)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join(timeout=30)

        assert len(calls) == 1
        assert len(outputs) == 6
        assert all(output is outputs[0] for output in outputs)


class TestMonotonicity:
    def test_npv_falls_as_discount_rate_rises(self, engine, projection_factory):
        base = projection_factory()
        npvs = []
        for rate in ("0.04", "0.08", "0.12"):
            rates = base.rates.model_copy(update={"discount_rate": Decimal(rate)})
            npvs.append(engine.run(base.model_copy(update={"rates": rates})).metrics.npv)

        assert npvs[0] > npvs[1] > npvs[2]

    def test_more_frequent_reinvestment_depreciates_more(self, engine, projection_factory):
        def total_depreciation(frequency: int) -> Decimal:
            projection = projection_factory(
                capex=CapExConfig(
                    auto_reinvest=True,
                    policy=ReinvestmentPolicy(
                        frequency_years=frequency, amount=Decimal("2000000")
                    ),
                )
            )
            output = engine.run(projection)
            return sum(
                p.profit_and_loss.depreciation
                for p in output.phase_periods(PeriodPhase.DYNAMIC)
            )

        assert total_depreciation(3) > total_depreciation(5) > total_depreciation(10)
