# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Cash and debt carry-forward under the minimum-cash covenant.

Each contract year ends with a settlement step:
- a shortfall below the minimum cash balance is funded by drawing debt,
  exactly enough to restore the minimum;
- a surplus above the minimum repays outstanding debt first;
- whatever surplus remains stays in cash as an interest-earning deposit.

Interest is charged on opening balances, so the settlement never feeds
back into the year's own interest and no circular solve is needed.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Tuple

from ..core.primitives import ZERO, SystemRates


@dataclass(frozen=True)
class CashSettlement:
    """
    Result of settling one year's cash against the covenant.

    Attributes:
        drawn: New debt drawn this year
        repaid: Debt repaid from surplus cash this year
        closing_cash: Cash after settlement
        closing_debt: Debt after settlement
    """

    drawn: Decimal
    repaid: Decimal
    closing_cash: Decimal
    closing_debt: Decimal

    @property
    def financing(self) -> Decimal:
        """Net financing cash flow (draws less repayments)."""
        return self.drawn - self.repaid


def settle_cash(
    pre_financing_cash: Decimal, opening_debt: Decimal, minimum_cash: Decimal
) -> CashSettlement:
    """
    Apply the minimum-cash covenant to the cash left after operations and CapEx.

    Args:
        pre_financing_cash: Opening cash + operating CF + investing CF
        opening_debt: Debt outstanding at the start of the year
        minimum_cash: Covenant floor

    Returns:
        CashSettlement with draws, repayments and closing balances.
    """
    if pre_financing_cash < minimum_cash:
        drawn = minimum_cash - pre_financing_cash
        return CashSettlement(
            drawn=drawn,
            repaid=ZERO,
            closing_cash=minimum_cash,
            closing_debt=opening_debt + drawn,
        )

    surplus = pre_financing_cash - minimum_cash
    repaid = min(surplus, max(opening_debt, ZERO))
    return CashSettlement(
        drawn=ZERO,
        repaid=repaid,
        closing_cash=pre_financing_cash - repaid,
        closing_debt=opening_debt - repaid,
    )


def hold_debt(pre_financing_cash: Decimal, opening_debt: Decimal) -> CashSettlement:
    """Settlement with no financing activity; debt is carried unchanged."""
    return CashSettlement(
        drawn=ZERO,
        repaid=ZERO,
        closing_cash=pre_financing_cash,
        closing_debt=opening_debt,
    )


def opening_interest(
    opening_cash: Decimal, opening_debt: Decimal, rates: SystemRates
) -> Tuple[Decimal, Decimal]:
    """Interest expense and deposit income for the year, on opening balances.

    Only cash above the minimum balance is on deposit.
    """
    expense = max(opening_debt, ZERO) * rates.debt_interest_rate
    deposit = max(opening_cash - rates.minimum_cash_balance, ZERO)
    income = deposit * rates.deposit_interest_rate
    return expense, income
