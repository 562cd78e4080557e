# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial statement records for one projected year.

Every phase (historical, transition, dynamic) produces the same three
statements. Sign conventions: expenses are positive amounts on the P&L;
on the cash flow statement inflows are positive and outflows negative.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from ..core.primitives import ZERO, Model, PeriodPhase, Year


class ProfitAndLoss(Model):
    """Income statement for one year."""

    students: int = 0
    tuition_revenue: Decimal = ZERO
    other_revenue: Decimal = ZERO
    rent: Decimal = ZERO
    staff_costs: Decimal = ZERO
    other_opex: Decimal = ZERO
    depreciation: Decimal = ZERO
    interest_expense: Decimal = ZERO
    interest_income: Decimal = ZERO
    zakat: Decimal = ZERO

    @property
    def revenue(self) -> Decimal:
        return self.tuition_revenue + self.other_revenue

    @property
    def operating_expenses(self) -> Decimal:
        return self.rent + self.staff_costs + self.other_opex

    @property
    def ebitda(self) -> Decimal:
        return self.revenue - self.operating_expenses

    @property
    def ebit(self) -> Decimal:
        return self.ebitda - self.depreciation

    @property
    def net_interest(self) -> Decimal:
        """Net interest cost (expense less income)."""
        return self.interest_expense - self.interest_income

    @property
    def earnings_before_zakat(self) -> Decimal:
        return self.ebit - self.net_interest

    @property
    def net_income(self) -> Decimal:
        return self.earnings_before_zakat - self.zakat


class BalanceSheet(Model):
    """Closing balances for one year."""

    cash: Decimal = ZERO
    accounts_receivable: Decimal = ZERO
    prepaid_expenses: Decimal = ZERO
    gross_ppe: Decimal = ZERO
    accumulated_depreciation: Decimal = ZERO
    accounts_payable: Decimal = ZERO
    accrued_expenses: Decimal = ZERO
    deferred_revenue: Decimal = ZERO
    debt: Decimal = ZERO
    equity: Decimal = ZERO

    @property
    def net_ppe(self) -> Decimal:
        return self.gross_ppe - self.accumulated_depreciation

    @property
    def total_assets(self) -> Decimal:
        return (
            self.cash + self.accounts_receivable + self.prepaid_expenses + self.net_ppe
        )

    @property
    def working_capital_liabilities(self) -> Decimal:
        return self.accounts_payable + self.accrued_expenses + self.deferred_revenue

    @property
    def total_liabilities(self) -> Decimal:
        return self.working_capital_liabilities + self.debt

    @property
    def balance_difference(self) -> Decimal:
        """Assets less liabilities and equity; zero when the sheet balances."""
        return self.total_assets - (self.total_liabilities + self.equity)


class CashFlow(Model):
    """Cash flow statement for one year, indirect method."""

    opening_cash: Decimal = ZERO
    operating: Decimal = ZERO
    investing: Decimal = ZERO
    financing: Decimal = ZERO
    closing_cash: Decimal = ZERO
    capex: Decimal = ZERO
    debt_drawn: Decimal = ZERO
    debt_repaid: Decimal = ZERO
    cumulative_free_cash_flow: Decimal = ZERO

    @property
    def net_change(self) -> Decimal:
        return self.operating + self.investing + self.financing

    @property
    def free_cash_flow(self) -> Decimal:
        return self.operating + self.investing

    @property
    def reconciliation_difference(self) -> Decimal:
        """Opening cash plus flows, less closing cash; zero when reconciled."""
        return self.opening_cash + self.net_change - self.closing_cash


class PeriodResult(Model):
    """One projected year: phase plus the three statements."""

    year: Year
    phase: PeriodPhase
    profit_and_loss: ProfitAndLoss
    balance_sheet: BalanceSheet
    cash_flow: CashFlow

    def summary(self) -> Dict[str, Any]:
        """Flat row of headline figures, used for tabular export."""
        pl = self.profit_and_loss
        bs = self.balance_sheet
        cf = self.cash_flow
        return {
            "year": self.year,
            "phase": self.phase.value,
            "students": pl.students,
            "revenue": pl.revenue,
            "rent": pl.rent,
            "staff_costs": pl.staff_costs,
            "other_opex": pl.other_opex,
            "ebitda": pl.ebitda,
            "depreciation": pl.depreciation,
            "net_interest": pl.net_interest,
            "zakat": pl.zakat,
            "net_income": pl.net_income,
            "cash": bs.cash,
            "net_ppe": bs.net_ppe,
            "total_assets": bs.total_assets,
            "debt": bs.debt,
            "equity": bs.equity,
            "operating_cash_flow": cf.operating,
            "investing_cash_flow": cf.investing,
            "financing_cash_flow": cf.financing,
            "free_cash_flow": cf.free_cash_flow,
            "capex": cf.capex,
            "cumulative_free_cash_flow": cf.cumulative_free_cash_flow,
        }
