# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period Simulator

Historical, transition and dynamic years combined into one ordered series
of reconciled statements.
"""

from .accounting import OperatingLines, close_period, zakat_for
from .dynamic import operating_lines, simulate_dynamic_year
from .financing import CashSettlement, hold_debt, opening_interest, settle_cash
from .historical import HistoricalYear, build_historical_period, legacy_asset_base
from .inputs import ProjectionInput
from .simulator import PeriodSimulator
from .statements import BalanceSheet, CashFlow, PeriodResult, ProfitAndLoss
from .transition import TransitionYear, simulate_transition_year

__all__ = [
    # Inputs
    "HistoricalYear",
    "ProjectionInput",
    "TransitionYear",
    # Statements
    "BalanceSheet",
    "CashFlow",
    "PeriodResult",
    "ProfitAndLoss",
    # Simulation
    "PeriodSimulator",
    "OperatingLines",
    "build_historical_period",
    "close_period",
    "legacy_asset_base",
    "operating_lines",
    "simulate_dynamic_year",
    "simulate_transition_year",
    "zakat_for",
    # Financing
    "CashSettlement",
    "hold_debt",
    "opening_interest",
    "settle_cash",
]
