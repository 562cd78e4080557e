# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Historical years: recorded figures, not simulated.

The statements are taken as recorded. The cash flow statement is derived
from the change against the prior recorded year; any movement not
explained by operations or fixed-asset additions (owner contributions,
distributions, debt movements) is reported as financing. The first
recorded year has no prior year, so its flows are zero.
"""

from __future__ import annotations

from typing import Optional

from pydantic import model_validator

from ..capex import LegacyAssetBase
from ..core.primitives import ZERO, Model, PeriodPhase, Year
from .statements import BalanceSheet, CashFlow, PeriodResult, ProfitAndLoss


class HistoricalYear(Model):
    """Recorded statements for one historical year."""

    year: Year
    profit_and_loss: ProfitAndLoss
    balance_sheet: BalanceSheet

    @model_validator(mode="after")
    def check_ppe(self) -> "HistoricalYear":
        bs = self.balance_sheet
        if bs.accumulated_depreciation > bs.gross_ppe:
            raise ValueError(
                f"{self.year}: accumulated depreciation ({bs.accumulated_depreciation}) "
                f"exceeds gross PP&E ({bs.gross_ppe})"
            )
        return self


def build_historical_period(
    record: HistoricalYear, prior: Optional[PeriodResult]
) -> PeriodResult:
    """Wrap a recorded year as a ``PeriodResult`` with a derived cash flow."""
    pl = record.profit_and_loss
    bs = record.balance_sheet

    if prior is None:
        cash_flow = CashFlow(opening_cash=bs.cash, closing_cash=bs.cash)
    else:
        before = prior.balance_sheet
        working_capital_change = (
            -(bs.accounts_receivable - before.accounts_receivable)
            - (bs.prepaid_expenses - before.prepaid_expenses)
            + (bs.accounts_payable - before.accounts_payable)
            + (bs.accrued_expenses - before.accrued_expenses)
            + (bs.deferred_revenue - before.deferred_revenue)
        )
        operating = pl.net_income + pl.depreciation + working_capital_change
        capex = bs.gross_ppe - before.gross_ppe
        investing = -capex
        financing = bs.cash - before.cash - operating - investing
        debt_change = bs.debt - before.debt
        cash_flow = CashFlow(
            opening_cash=before.cash,
            operating=operating,
            investing=investing,
            financing=financing,
            closing_cash=bs.cash,
            capex=capex,
            debt_drawn=max(debt_change, ZERO),
            debt_repaid=max(-debt_change, ZERO),
            cumulative_free_cash_flow=(
                prior.cash_flow.cumulative_free_cash_flow + operating + investing
            ),
        )

    return PeriodResult(
        year=record.year,
        phase=PeriodPhase.HISTORICAL,
        profit_and_loss=pl,
        balance_sheet=bs,
        cash_flow=cash_flow,
    )


def legacy_asset_base(last: HistoricalYear) -> LegacyAssetBase:
    """Opening PP&E pool continuing from the last recorded year."""
    bs = last.balance_sheet
    return LegacyAssetBase(
        gross_cost=bs.gross_ppe,
        accumulated_depreciation=bs.accumulated_depreciation,
        annual_depreciation=max(last.profit_and_loss.depreciation, ZERO),
        first_year=last.year + 1,
    )

