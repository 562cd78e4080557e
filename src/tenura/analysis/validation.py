# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Internal-consistency checks over a finished period series.

Two identities must hold for every period, within a fixed rounding
tolerance:

- balance sheet:   total assets == total liabilities + equity
- cash flow:       opening cash + operating + investing + financing == closing cash

Historical cash flows are derived from recorded balances and are checked
like every other period. A failed check means the simulation arithmetic is
wrong; it is reported (and logged) but never raised, so callers always get
the full output and decide how to surface it.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from pydantic import Field

from ..core.primitives import (
    ZERO,
    EngineSettings,
    Model,
    ValidationCheck,
    Year,
)
from ..periods import PeriodResult

logger = logging.getLogger(__name__)


class PeriodCheck(Model):
    """Both consistency checks for one period."""

    year: Year
    balanced: bool
    reconciled: bool
    balance_difference: Decimal
    cash_difference: Decimal

    @property
    def passed(self) -> bool:
        return self.balanced and self.reconciled


class ValidationIssue(Model):
    year: Year
    check: ValidationCheck
    difference: Decimal


class ValidationResult(Model):
    """
    Outcome of validating a period series.

    ``all_periods_balanced`` and ``all_cash_flows_reconciled`` are the AND of
    the per-period checks. ``False`` flags a modeling defect, not a user
    input error.
    """

    all_periods_balanced: bool
    all_cash_flows_reconciled: bool
    max_balance_difference: Decimal = ZERO
    max_cash_difference: Decimal = ZERO
    tolerance: Decimal
    periods: List[PeriodCheck] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.all_periods_balanced and self.all_cash_flows_reconciled

    @property
    def issues(self) -> List[ValidationIssue]:
        found: List[ValidationIssue] = []
        for check in self.periods:
            if not check.balanced:
                found.append(
                    ValidationIssue(
                        year=check.year,
                        check=ValidationCheck.BALANCE_SHEET,
                        difference=check.balance_difference,
                    )
                )
            if not check.reconciled:
                found.append(
                    ValidationIssue(
                        year=check.year,
                        check=ValidationCheck.CASH_RECONCILIATION,
                        difference=check.cash_difference,
                    )
                )
        return found

    def check_for(self, year: int) -> PeriodCheck:
        for check in self.periods:
            if check.year == year:
                return check
        raise KeyError(year)


def check_period(period: PeriodResult, tolerance: Decimal) -> PeriodCheck:
    balance_difference = abs(period.balance_sheet.balance_difference)
    cash_difference = abs(period.cash_flow.reconciliation_difference)
    return PeriodCheck(
        year=period.year,
        balanced=balance_difference <= tolerance,
        reconciled=cash_difference <= tolerance,
        balance_difference=balance_difference,
        cash_difference=cash_difference,
    )


class Validator:
    """Runs the balance and reconciliation checks over a period series."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    def validate(self, periods: Sequence[PeriodResult]) -> ValidationResult:
        tolerance = self.settings.tolerance
        checks = [check_period(period, tolerance) for period in periods]

        result = ValidationResult(
            all_periods_balanced=all(c.balanced for c in checks),
            all_cash_flows_reconciled=all(c.reconciled for c in checks),
            max_balance_difference=max(
                (c.balance_difference for c in checks), default=ZERO
            ),
            max_cash_difference=max((c.cash_difference for c in checks), default=ZERO),
            tolerance=tolerance,
            periods=checks,
        )
        for issue in result.issues:
            logger.warning(
                f"{issue.year}: {issue.check.value} check failed "
                f"(difference {issue.difference}, tolerance {tolerance})"
            )
        return result
