# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period simulator: the year-by-year main loop.

Walks the timeline once, historical years first, then transition years,
then every contract year, carrying the prior year's closing balances into
the next year. Produces exactly one ``PeriodResult`` per year, in order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..capex import CapExLedger
from .dynamic import simulate_dynamic_year
from .historical import build_historical_period, legacy_asset_base
from .inputs import ProjectionInput
from .statements import PeriodResult
from .transition import simulate_transition_year

logger = logging.getLogger(__name__)


@dataclass
class PeriodSimulator:
    """
    Simulates every year of a projection input.

    Each simulator owns its ledger and period list, so concurrent runs do
    not share state. Call ``run`` once; the ledger stays available for
    inspection afterwards.
    """

    projection: ProjectionInput
    ledger: CapExLedger = field(init=False)
    periods: List[PeriodResult] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.ledger = CapExLedger(
            config=self.projection.capex,
            contract_start_year=self.projection.contract_start_year,
            legacy=legacy_asset_base(self.projection.historical_years[-1]),
        )

    @property
    def last_period(self) -> Optional[PeriodResult]:
        return self.periods[-1] if self.periods else None

    def run(self) -> List[PeriodResult]:
        """Simulate all years and return the ordered period list."""
        if self.periods:
            raise RuntimeError("PeriodSimulator.run() may only be called once")

        projection = self.projection
        for record in projection.historical_years:
            self.periods.append(build_historical_period(record, self.last_period))

        for config in projection.transition_years:
            self.periods.append(
                simulate_transition_year(
                    config,
                    self.last_period,
                    self.ledger,
                    projection.rates,
                    projection.working_capital,
                    projection.other_revenue_ratio,
                )
            )

        for year in projection.contract_year_range:
            self.periods.append(
                simulate_dynamic_year(year, projection, self.last_period, self.ledger)
            )

        logger.debug(
            f"Simulated {len(self.periods)} periods "
            f"({self.periods[0].year}-{self.periods[-1].year}), "
            f"{len(self.ledger.assets)} assets booked"
        )
        return self.periods
