# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
CapEx & Depreciation Ledger

Capital assets (manual and auto-reinvested), straight-line depreciation,
net book values and the reinvestment policies that trigger purchases.
"""

from .asset import Asset, LegacyAssetBase
from .ledger import CapExLedger, LedgerYear
from .policy import CapExCategory, CapExConfig, ManualAsset, ReinvestmentPolicy

__all__ = [
    # Assets
    "Asset",
    "LegacyAssetBase",
    # Configuration
    "CapExCategory",
    "CapExConfig",
    "ManualAsset",
    "ReinvestmentPolicy",
    # Ledger
    "CapExLedger",
    "LedgerYear",
]
