# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rent models for lease proposals.

The four pricing variants form a closed tagged union: a proposal carries
exactly one of them, and each variant declares only the parameters it
needs. Every variant answers the same question through ``annual_rent``:
what does the tenant pay in a given contract year, given that year's
revenue.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from ..core.primitives import (
    ZERO,
    DecimalBetween0And1,
    GrowthDecimal,
    Model,
    PositiveDecimal,
    PositiveIntGe1,
    RentModelKind,
    Year,
)
from ..schedule import StepSchedule


class RentModelBase(Model):
    """Shared behavior for rent variants."""

    @property
    def kind(self) -> RentModelKind:
        return RentModelKind(self.model)

    def annual_rent(
        self, year: int, revenue: Decimal, contract_start_year: int
    ) -> Decimal:
        raise NotImplementedError


class EscalatingRentMixin:
    """Base rent escalated in steps from a reference year."""

    def escalation_schedule(
        self, base_rent: Decimal, contract_start_year: int
    ) -> StepSchedule:
        reference = getattr(self, "reference_year", None) or contract_start_year
        return StepSchedule(
            base_value=base_rent,
            growth_rate=self.escalation_rate,
            frequency_years=self.escalation_frequency,
            reference_year=reference,
        )


class FixedEscalationRent(EscalatingRentMixin, RentModelBase):
    """
    Base rent escalated by a fixed rate at a fixed frequency.

    Example:
        >>> rent = FixedEscalationRent(base_rent=5_000_000, escalation_rate="0.05",
        ...                            escalation_frequency=2)
        >>> rent.annual_rent(2029, revenue=Decimal(0), contract_start_year=2028)
        Decimal('5000000')
        >>> rent.annual_rent(2030, revenue=Decimal(0), contract_start_year=2028)
        Decimal('5250000.00')
    """

    model: Literal["fixed_escalation"] = "fixed_escalation"
    base_rent: PositiveDecimal = Field(
        ..., description="Annual rent in the reference year."
    )
    escalation_rate: GrowthDecimal = Decimal("0")
    escalation_frequency: PositiveIntGe1 = 1
    reference_year: Optional[Year] = Field(
        default=None,
        description="Year the base rent applies; defaults to the contract start.",
    )

    def annual_rent(
        self, year: int, revenue: Decimal, contract_start_year: int
    ) -> Decimal:
        return self.escalation_schedule(self.base_rent, contract_start_year).value_for(year)


class RevenueShareRent(RentModelBase):
    """
    Rent as a share of the period's total revenue.

    No floor or cap unless ``minimum_guarantee`` is given, in which case the
    tenant pays the larger of the share and the guarantee.
    """

    model: Literal["revenue_share"] = "revenue_share"
    share_rate: DecimalBetween0And1 = Field(
        ..., description="Share of total revenue paid as rent (e.g., 0.10)."
    )
    minimum_guarantee: Optional[PositiveDecimal] = Field(
        default=None, description="Annual floor on the rent, if any."
    )

    def annual_rent(
        self, year: int, revenue: Decimal, contract_start_year: int
    ) -> Decimal:
        share = revenue * self.share_rate
        if self.minimum_guarantee is None:
            return share
        return max(share, self.minimum_guarantee)


class PartnerInvestmentRent(EscalatingRentMixin, RentModelBase):
    """
    Rent as a yield on the partner's notional investment in land and building.

    ``investment = land_area x land_price_per_sqm + built_up_area x
    construction_cost_per_sqm``. First contract year rent is
    ``investment x yield_rate``, escalated in steps thereafter.
    """

    model: Literal["partner_investment"] = "partner_investment"
    land_area: PositiveDecimal = Field(..., description="Land area in m2.")
    land_price_per_sqm: PositiveDecimal
    built_up_area: PositiveDecimal = Field(..., description="Built-up area in m2.")
    construction_cost_per_sqm: PositiveDecimal
    yield_rate: DecimalBetween0And1
    escalation_rate: GrowthDecimal = Decimal("0")
    escalation_frequency: PositiveIntGe1 = 1

    @property
    def investment(self) -> Decimal:
        return (
            self.land_area * self.land_price_per_sqm
            + self.built_up_area * self.construction_cost_per_sqm
        )

    @property
    def base_rent(self) -> Decimal:
        return self.investment * self.yield_rate

    def annual_rent(
        self, year: int, revenue: Decimal, contract_start_year: int
    ) -> Decimal:
        return self.escalation_schedule(self.base_rent, contract_start_year).value_for(year)


class HybridRent(EscalatingRentMixin, RentModelBase):
    """
    Escalating base rent plus a share of revenue above a threshold.

    ``rent = escalated base + share_rate x max(0, revenue - revenue_threshold)``
    """

    model: Literal["hybrid"] = "hybrid"
    base_rent: PositiveDecimal
    escalation_rate: GrowthDecimal = Decimal("0")
    escalation_frequency: PositiveIntGe1 = 1
    share_rate: DecimalBetween0And1
    revenue_threshold: PositiveDecimal = Field(
        ..., description="Revenue above which the share applies."
    )
    reference_year: Optional[Year] = None

    def annual_rent(
        self, year: int, revenue: Decimal, contract_start_year: int
    ) -> Decimal:
        base = self.escalation_schedule(self.base_rent, contract_start_year).value_for(year)
        excess = max(revenue - self.revenue_threshold, ZERO)
        return base + excess * self.share_rate


# The discriminated union for any rent variant
RentModel = Annotated[
    Union[FixedEscalationRent, RevenueShareRent, PartnerInvestmentRent, HybridRent],
    Field(discriminator="model"),
]
