# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class PeriodPhase(str, Enum):
    """
    Phase of a projected year.

    Each phase draws its figures from a different source but produces the
    same statement shape:
    - HISTORICAL: recorded figures, not simulated
    - TRANSITION: explicit bridge-year configuration, no CapEx or debt moves
    - DYNAMIC: full simulation over the contract term
    """

    HISTORICAL = "historical"
    TRANSITION = "transition"
    DYNAMIC = "dynamic"


class RentModelKind(str, Enum):
    """Closed set of rent pricing variants. Exactly one is active per proposal."""

    FIXED_ESCALATION = "fixed_escalation"
    REVENUE_SHARE = "revenue_share"
    PARTNER_INVESTMENT = "partner_investment"
    HYBRID = "hybrid"


class DepreciationMethod(str, Enum):
    """Reporting label derived from purchase year vs. the contract start."""

    LEGACY = "legacy"  # Purchased before the contract start
    CURRENT = "current"


class AssetOrigin(str, Enum):
    """How an asset entered the ledger."""

    MANUAL = "manual"
    AUTO_REINVESTMENT = "auto_reinvestment"


class ReinvestmentSizing(str, Enum):
    FIXED = "fixed"
    PERCENT = "percent"


class ReinvestmentBasis(str, Enum):
    """Reference amount for percentage-sized reinvestment."""

    PRIOR_ASSET_COST = "prior_asset_cost"  # Latest purchase in the same category
    REVENUE = "revenue"  # Total revenue of the purchase year


class ValidationCheck(str, Enum):
    BALANCE_SHEET = "balance_sheet"
    CASH_RECONCILIATION = "cash_reconciliation"


class OfferOrigin(str, Enum):
    """Which side of a negotiation authored an offer."""

    OUR_OFFER = "our_offer"
    THEIR_COUNTER = "their_counter"
