# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Period close: from operating figures to reconciled statements.

Transition and dynamic years share the same close. Given the year's
operating lines (revenue, rent, staff, other opex), the ledger totals and
the opening balance sheet, the close adds interest, zakat and working
capital, derives the cash flow and settles cash against the covenant.

The closing balance sheet is built only from opening balances plus the
year's flows, so a balanced opening sheet stays balanced.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal

from ..capex import LedgerYear
from ..core.primitives import ZERO, PeriodPhase, SystemRates, WorkingCapitalRatios
from .financing import CashSettlement, hold_debt, opening_interest, settle_cash
from .statements import BalanceSheet, CashFlow, PeriodResult, ProfitAndLoss

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OperatingLines:
    """Operating figures of one year, before depreciation and financing."""

    students: int
    tuition_revenue: Decimal
    other_revenue: Decimal
    rent: Decimal
    staff_costs: Decimal
    other_opex: Decimal


def zakat_for(
    earnings_before_zakat: Decimal,
    opening_equity: Decimal,
    closing_net_ppe: Decimal,
    rates: SystemRates,
) -> Decimal:
    """
    Zakat on the year's net asset base.

    The base is equity before zakat (opening equity plus the year's earnings
    before zakat) less net fixed assets, floored at zero.
    """
    base = opening_equity + earnings_before_zakat - closing_net_ppe
    return max(base, ZERO) * rates.zakat_rate


def close_period(
    year: int,
    phase: PeriodPhase,
    lines: OperatingLines,
    opening: BalanceSheet,
    ledger_year: LedgerYear,
    rates: SystemRates,
    working_capital: WorkingCapitalRatios,
    prior_cumulative_fcf: Decimal,
    allow_financing: bool = True,
) -> PeriodResult:
    """
    Close one simulated year into a ``PeriodResult``.

    Args:
        year: Calendar year being closed
        phase: TRANSITION or DYNAMIC
        lines: Operating lines for the year
        opening: Prior year's closing balance sheet
        ledger_year: CapEx ledger totals for the year
        rates: System rates (interest, zakat, minimum cash)
        working_capital: Working-capital ratios
        prior_cumulative_fcf: Running free cash flow through the prior year
        allow_financing: When False, debt is held constant (bridge years)

    Returns:
        PeriodResult with consistent P&L, balance sheet and cash flow.
    """
    interest_expense, interest_income = opening_interest(
        opening.cash, opening.debt, rates
    )
    pl = ProfitAndLoss(
        students=lines.students,
        tuition_revenue=lines.tuition_revenue,
        other_revenue=lines.other_revenue,
        rent=lines.rent,
        staff_costs=lines.staff_costs,
        other_opex=lines.other_opex,
        depreciation=ledger_year.depreciation,
        interest_expense=interest_expense,
        interest_income=interest_income,
    )
    zakat = zakat_for(
        pl.earnings_before_zakat, opening.equity, ledger_year.net_book_value, rates
    )
    pl = pl.model_copy(update={"zakat": zakat})

    revenue = pl.revenue
    opex = pl.operating_expenses
    receivables = revenue * working_capital.receivables_rate
    deferred = revenue * working_capital.deferred_revenue_rate
    prepaid = opex * working_capital.prepaid_rate
    payables = opex * working_capital.payables_rate
    accrued = opex * working_capital.accrued_rate

    working_capital_change = (
        -(receivables - opening.accounts_receivable)
        - (prepaid - opening.prepaid_expenses)
        + (payables - opening.accounts_payable)
        + (accrued - opening.accrued_expenses)
        + (deferred - opening.deferred_revenue)
    )
    operating = pl.net_income + pl.depreciation + working_capital_change
    investing = -ledger_year.spend
    pre_financing_cash = opening.cash + operating + investing

    settlement: CashSettlement
    if allow_financing:
        settlement = settle_cash(
            pre_financing_cash, opening.debt, rates.minimum_cash_balance
        )
    else:
        settlement = hold_debt(pre_financing_cash, opening.debt)

    if settlement.drawn > ZERO:
        logger.debug(f"{year}: drew {settlement.drawn} to restore minimum cash")

    balance_sheet = BalanceSheet(
        cash=settlement.closing_cash,
        accounts_receivable=receivables,
        prepaid_expenses=prepaid,
        gross_ppe=ledger_year.gross_cost,
        accumulated_depreciation=ledger_year.accumulated_depreciation,
        accounts_payable=payables,
        accrued_expenses=accrued,
        deferred_revenue=deferred,
        debt=settlement.closing_debt,
        equity=opening.equity + pl.net_income,
    )
    free_cash_flow = operating + investing
    cash_flow = CashFlow(
        opening_cash=opening.cash,
        operating=operating,
        investing=investing,
        financing=settlement.financing,
        closing_cash=settlement.closing_cash,
        capex=ledger_year.spend,
        debt_drawn=settlement.drawn,
        debt_repaid=settlement.repaid,
        cumulative_free_cash_flow=prior_cumulative_fcf + free_cash_flow,
    )
    return PeriodResult(
        year=year,
        phase=phase,
        profit_and_loss=pl,
        balance_sheet=balance_sheet,
        cash_flow=cash_flow,
    )
