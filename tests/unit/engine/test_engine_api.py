# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from tenura.analysis import (
    CalculationCache,
    ProjectionEngine,
    check_configuration,
    run,
)
from tenura.analysis import api as engine_api
from tenura.core.primitives import ConfigurationError, PeriodPhase


class FakeClock:
    """Monotonic clock advancing one second per call."""

    def __init__(self):
        self.calls = 0

    def __call__(self) -> datetime:
        self.calls += 1
        return datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(seconds=self.calls)


def test_run_returns_validated_output(sample_projection):
    output = run(sample_projection)

    assert output.is_validated
    assert output.validation.all_periods_balanced
    assert output.validation.all_cash_flows_reconciled
    assert output.years == list(range(2023, 2038))
    assert output.fingerprint.startswith("calc:")


def test_configuration_error_raised_before_simulating(sample_projection, monkeypatch):
    broken = sample_projection.model_copy(
        update={
            "staffing": sample_projection.staffing.model_copy(
                update={"reference_year": 2099}
            )
        }
    )

    def fail(*args, **kwargs):
        raise AssertionError("simulator must not run")

    monkeypatch.setattr(engine_api, "PeriodSimulator", fail)
    with pytest.raises(ConfigurationError) as excinfo:
        run(broken)
    assert "staffing reference_year 2099" in str(excinfo.value)


def test_check_configuration_passes_valid_input(sample_projection):
    check_configuration(sample_projection)


class TestCachedEngine:
    def test_repeat_run_served_from_cache(self, sample_projection):
        engine = ProjectionEngine(cache=CalculationCache())

        first = engine.run(sample_projection)
        second = engine.run(sample_projection)

        assert second is first
        assert engine.cache.stats().hits == 1

    def test_forced_recalculation_replaces_entry(self, sample_projection):
        clock = FakeClock()
        engine = ProjectionEngine(cache=CalculationCache(), clock=clock)

        first = engine.run(sample_projection)
        fresh = engine.run(sample_projection, force_recalculation=True)

        assert fresh is not first
        assert fresh.calculated_at > first.calculated_at
        assert fresh.same_projection(first)
        assert engine.run(sample_projection) is fresh

    def test_changed_input_misses_cache(self, sample_projection):
        engine = ProjectionEngine(cache=CalculationCache())
        first = engine.run(sample_projection)

        changed = sample_projection.model_copy(
            update={
                "rates": sample_projection.rates.model_copy(
                    update={"discount_rate": Decimal("0.12")}
                )
            }
        )
        second = engine.run(changed, force_recalculation=True)

        assert second.fingerprint != first.fingerprint
        assert second.metrics.npv != first.metrics.npv
        assert len(engine.cache) == 2

    def test_engine_without_cache_always_computes(self, sample_projection):
        engine = ProjectionEngine()
        assert engine.run(sample_projection) is not engine.run(sample_projection)

    def test_module_run_uses_supplied_cache(self, sample_projection):
        cache = CalculationCache()
        first = run(sample_projection, cache=cache)
        assert run(sample_projection, cache=cache) is first


class TestOutput:
    @pytest.fixture
    def output(self, sample_engine, sample_projection):
        return sample_engine.run(sample_projection)

    def test_period_lookup(self, output):
        assert output.period(2028).phase == PeriodPhase.DYNAMIC
        with pytest.raises(KeyError):
            output.period(2090)

    def test_phase_periods(self, output):
        assert len(output.phase_periods(PeriodPhase.TRANSITION)) == 3
        assert len(output.phase_periods(PeriodPhase.DYNAMIC)) == 10

    def test_to_frame(self, output):
        frame = output.to_frame()

        assert list(frame.index) == output.years
        assert frame["balanced"].all()
        assert frame["reconciled"].all()
        assert frame.loc[2028, "phase"] == "dynamic"

    def test_json_keeps_decimals_as_text(self, output):
        payload = json.loads(output.to_json())

        assert isinstance(payload["metrics"]["npv"], str)
        assert Decimal(payload["metrics"]["npv"]) == output.metrics.npv
        assert len(payload["periods"]) == 15

    def test_round_trip(self, output):
        restored = type(output).model_validate_json(output.to_json())
        assert restored == output

    def test_periods_must_be_contiguous(self, output):
        with pytest.raises(ValueError):
            type(output)(
                periods=[output.periods[0], output.periods[2]],
                validation=output.validation,
                metrics=output.metrics,
                calculated_at=output.calculated_at,
                fingerprint=output.fingerprint,
            )
