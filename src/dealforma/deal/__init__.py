# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Deal
Public API for the dealforma.deal subpackage.

Single-lot underwriting (deal sheet engine, sensitivity analysis and the
quick deal screen) and the multi-tier GP/LP distribution waterfall.
"""

from .analyzer import (
    RATING_COLORS,
    QuickDealAnalyzer,
    QuickDealInputs,
    QuickDealResult,
    QuickDealSettings,
)
from .calculator import DealSheetEngine
from .inputs import DealSheetInputs
from .results import DealSheetResult, SensitivityResult
from .sensitivity import SensitivityAnalyzer, breakeven_asp, minimum_margin_asp
from .waterfall import (
    AnyWaterfallTier,
    CatchUpTier,
    DistributionWaterfall,
    PreferredReturnTier,
    ProfitSplitTier,
    ReturnOfCapitalTier,
    WaterfallInputs,
    WaterfallInvestor,
    WaterfallInvestorSummary,
    WaterfallLineItem,
    WaterfallResult,
    WaterfallTierTotal,
)

__all__ = [
    # Deal sheet
    "DealSheetEngine",
    "DealSheetInputs",
    "DealSheetResult",
    # Sensitivity
    "SensitivityAnalyzer",
    "SensitivityResult",
    "breakeven_asp",
    "minimum_margin_asp",
    # Quick deal screen
    "QuickDealAnalyzer",
    "QuickDealInputs",
    "QuickDealResult",
    "QuickDealSettings",
    "RATING_COLORS",
    # Distribution waterfall
    "DistributionWaterfall",
    "WaterfallInputs",
    "WaterfallInvestor",
    "AnyWaterfallTier",
    "ReturnOfCapitalTier",
    "PreferredReturnTier",
    "CatchUpTier",
    "ProfitSplitTier",
    "WaterfallResult",
    "WaterfallLineItem",
    "WaterfallTierTotal",
    "WaterfallInvestorSummary",
]
