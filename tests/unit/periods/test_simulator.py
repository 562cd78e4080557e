# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from decimal import Decimal

import pytest
from pydantic import ValidationError

from tenura.capex import CapExConfig, ManualAsset
from tenura.core.primitives import PeriodPhase
from tenura.periods import PeriodSimulator, operating_lines
from tenura.rent import FixedEscalationRent, RevenueShareRent


class TestProjectionInput:
    def test_timeline(self, sample_projection):
        assert sample_projection.first_year == 2023
        assert sample_projection.contract_end_year == 2037
        assert list(sample_projection.years) == list(range(2023, 2038))

    def test_pre_contract_years_must_be_contiguous(self, sample_projection):
        transition = list(sample_projection.transition_years)
        with pytest.raises(ValidationError, match="contiguous"):
            sample_projection.model_validate(
                {
                    **sample_projection.model_dump(),
                    "transition_years": [t.model_dump() for t in transition[1:]],
                }
            )

    def test_contract_must_follow_pre_contract_years(self, sample_projection):
        with pytest.raises(ValidationError, match="immediately precede"):
            sample_projection.model_validate(
                {**sample_projection.model_dump(), "contract_start_year": 2030}
            )

    def test_stream_names_unique(self, projection_factory, stream_factory):
        with pytest.raises(ValidationError, match="unique"):
            projection_factory(streams=[stream_factory(), stream_factory()])

    def test_configuration_problems(self, sample_projection):
        broken = sample_projection.model_copy(
            update={
                "staffing": sample_projection.staffing.model_copy(
                    update={"reference_year": 2060}
                ),
                "capex": CapExConfig(
                    manual_assets=[
                        ManualAsset(category="general", purchase_year=2026, amount=1)
                    ]
                ),
            }
        )
        problems = broken.configuration_problems()

        assert len(problems) == 2
        assert any("staffing reference_year 2060" in p for p in problems)
        assert any("falls outside the contract" in p for p in problems)

    def test_valid_input_has_no_problems(self, sample_projection):
        assert sample_projection.configuration_problems() == []


class TestPeriodSimulator:
    @pytest.fixture
    def periods(self, sample_projection):
        return PeriodSimulator(sample_projection).run()

    def test_one_period_per_year_in_order(self, periods):
        assert [p.year for p in periods] == list(range(2023, 2038))
        phases = [p.phase for p in periods]
        assert phases[:2] == [PeriodPhase.HISTORICAL] * 2
        assert phases[2:5] == [PeriodPhase.TRANSITION] * 3
        assert phases[5:] == [PeriodPhase.DYNAMIC] * 10

    def test_statements_tie(self, periods, check_identities):
        check_identities(periods)

    def test_first_contract_year(self, periods):
        pl = periods[5].profit_and_loss

        assert periods[5].year == 2028
        assert pl.students == 1100
        assert pl.revenue == Decimal("35200000")
        assert pl.rent == Decimal("5000000")
        assert pl.staff_costs == Decimal("12708000")
        assert pl.other_opex == Decimal("3520000")

    def test_balances_carry_forward(self, periods):
        for prior, current in zip(periods, periods[1:]):
            assert current.cash_flow.opening_cash == prior.balance_sheet.cash

    def test_transition_years_hold_debt(self, periods):
        for period in periods[2:5]:
            assert period.cash_flow.capex == Decimal("0")
            assert period.cash_flow.financing == Decimal("0")

    def test_run_only_once(self, sample_projection):
        simulator = PeriodSimulator(sample_projection)
        simulator.run()
        with pytest.raises(RuntimeError):
            simulator.run()

    def test_minimum_cash_funded_by_debt(self, projection_factory, check_identities):
        projection = projection_factory(
            contract_years=10,
            rent_model=FixedEscalationRent(base_rent=Decimal("80000000")),
        )
        periods = PeriodSimulator(projection).run()
        contract = [p for p in periods if p.phase == PeriodPhase.DYNAMIC]

        assert all(p.cash_flow.debt_drawn > 0 for p in contract)
        assert all(p.balance_sheet.cash == Decimal("1000000") for p in contract)
        assert contract[-1].balance_sheet.debt > contract[0].balance_sheet.debt
        check_identities(periods)

    def test_manual_capex_booked(self, projection_factory):
        projection = projection_factory(
            contract_years=10,
            capex=CapExConfig(
                manual_assets=[
                    ManualAsset(
                        category="general", purchase_year=2030, amount=Decimal("2000000")
                    )
                ]
            ),
        )
        simulator = PeriodSimulator(projection)
        periods = simulator.run()
        period = next(p for p in periods if p.year == 2030)

        assert period.cash_flow.capex == Decimal("2000000")
        assert period.cash_flow.investing == Decimal("-2000000")
        assert len(simulator.ledger.assets) == 1

    def test_revenue_share_uses_total_revenue(self, projection_factory):
        projection = projection_factory(
            contract_years=5,
            rent_model=RevenueShareRent(share_rate=Decimal("0.10")),
            other_revenue_ratio=Decimal("0.05"),
        )
        lines = operating_lines(2028, projection)

        assert lines.other_revenue == Decimal("1760000")
        assert lines.rent == Decimal("3696000")
