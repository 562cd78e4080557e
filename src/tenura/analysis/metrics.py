# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Metrics aggregation over a finished period series.

Investment metrics use the contract years only: free cash flow
(operating + investing) of each contract year, offset 0 at the contract
start. Balance extrema (peak debt, final cash) span the whole series.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

import pandas as pd

from ..core.primitives import (
    ZERO,
    EngineSettings,
    Model,
    PeriodPhase,
    decimal_sum,
)
from ..periods import PeriodResult
from .calculations import FinancialCalculations

logger = logging.getLogger(__name__)


class ContractValue(Model):
    """
    Discounted and annualized contract-period values.

    ``net_annualized_value`` (annualized EBITDA less annualized rent) puts
    proposals with different contract lengths on the same footing; higher
    is better for the tenant.
    """

    rent_npv: Decimal
    ebitda_npv: Decimal
    net_tenant_surplus: Decimal
    annualization_factor: Optional[Decimal] = None
    annualized_ebitda: Optional[Decimal] = None
    annualized_rent: Optional[Decimal] = None
    net_annualized_value: Optional[Decimal] = None


class Metrics(Model):
    """
    Scalar metrics derived from the period series and the discount rate.

    ``irr``, ``payback_period`` and ``roi`` are None when undefined.
    """

    npv: Decimal
    irr: Optional[Decimal] = None
    payback_period: Optional[Decimal] = None
    roi: Optional[Decimal] = None
    total_rent: Decimal
    total_ebitda: Decimal
    average_ebitda: Decimal
    total_net_income: Decimal
    peak_debt: Decimal
    final_cash: Decimal
    discount_rate: Decimal
    contract_value: ContractValue


class MetricsAggregator:
    """Reduces a period series into ``Metrics``."""

    def __init__(self, settings: Optional[EngineSettings] = None):
        self.settings = settings or EngineSettings()

    @staticmethod
    def contract_periods(periods: Sequence[PeriodResult]) -> List[PeriodResult]:
        return [p for p in periods if p.phase == PeriodPhase.DYNAMIC]

    @staticmethod
    def free_cash_flows(periods: Sequence[PeriodResult]) -> pd.Series:
        """Contract-year free cash flow as a Series indexed by year."""
        contract = MetricsAggregator.contract_periods(periods)
        return pd.Series(
            [p.cash_flow.free_cash_flow for p in contract],
            index=pd.Index([p.year for p in contract], name="year"),
            name="free_cash_flow",
            dtype=object,
        )

    def aggregate(
        self, periods: Sequence[PeriodResult], discount_rate: Decimal
    ) -> Metrics:
        if not periods:
            raise ValueError("Cannot aggregate metrics over an empty period series")

        contract = self.contract_periods(periods)
        flows = list(self.free_cash_flows(periods))
        rents = [p.profit_and_loss.rent for p in contract]
        ebitdas = [p.profit_and_loss.ebitda for p in contract]
        net_incomes = [p.profit_and_loss.net_income for p in contract]
        capex = [p.cash_flow.capex for p in contract]

        settings = self.settings
        irr = FinancialCalculations.calculate_irr(
            flows,
            lower_bound=settings.irr_lower_bound,
            upper_bound=settings.irr_upper_bound,
            max_iterations=settings.irr_max_iterations,
            xtol=settings.irr_xtol,
        )
        if irr is None:
            logger.warning("IRR undefined for this projection (no sign change)")

        total_ebitda = decimal_sum(ebitdas)
        metrics = Metrics(
            npv=FinancialCalculations.calculate_npv(flows, discount_rate),
            irr=irr,
            payback_period=FinancialCalculations.calculate_payback_period(flows),
            roi=FinancialCalculations.calculate_roi(net_incomes, capex),
            total_rent=decimal_sum(rents),
            total_ebitda=total_ebitda,
            average_ebitda=total_ebitda / len(contract) if contract else ZERO,
            total_net_income=decimal_sum(net_incomes),
            peak_debt=max(p.balance_sheet.debt for p in periods),
            final_cash=periods[-1].balance_sheet.cash,
            discount_rate=discount_rate,
            contract_value=self.contract_value(rents, ebitdas, discount_rate),
        )
        logger.debug(
            f"Metrics: NPV {metrics.npv}, IRR {metrics.irr}, "
            f"payback {metrics.payback_period}"
        )
        return metrics

    @staticmethod
    def contract_value(
        rents: Sequence[Decimal], ebitdas: Sequence[Decimal], discount_rate: Decimal
    ) -> ContractValue:
        rent_npv = FinancialCalculations.calculate_npv(rents, discount_rate)
        ebitda_npv = FinancialCalculations.calculate_npv(ebitdas, discount_rate)
        factor = FinancialCalculations.calculate_annualization_factor(
            discount_rate, len(rents)
        )
        if factor is None:
            return ContractValue(
                rent_npv=rent_npv,
                ebitda_npv=ebitda_npv,
                net_tenant_surplus=ebitda_npv - rent_npv,
            )
        annualized_ebitda = ebitda_npv * factor
        annualized_rent = rent_npv * factor
        return ContractValue(
            rent_npv=rent_npv,
            ebitda_npv=ebitda_npv,
            net_tenant_surplus=ebitda_npv - rent_npv,
            annualization_factor=factor,
            annualized_ebitda=annualized_ebitda,
            annualized_rent=annualized_rent,
            net_annualized_value=annualized_ebitda - annualized_rent,
        )
