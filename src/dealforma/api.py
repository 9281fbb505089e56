# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma API

Function entry points over the engines. Every call is pure: the same
inputs and settings always produce the same result, and nothing is cached
between calls.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from .core.primitives import GlobalSettings
from .deal import (
    DealSheetEngine,
    DealSheetInputs,
    DealSheetResult,
    DistributionWaterfall,
    QuickDealAnalyzer,
    QuickDealInputs,
    QuickDealResult,
    QuickDealSettings,
    SensitivityAnalyzer,
    SensitivityResult,
    WaterfallInputs,
    WaterfallResult,
)
from .development import (
    CommunityProformaEngine,
    CommunityProformaInputs,
    CommunityProformaResults,
    LotDevelopmentProformaEngine,
    LotDevProformaInputs,
    LotDevProformaResults,
    LotPurchaseProformaEngine,
    LotPurchaseProformaInputs,
    LotPurchaseProformaResults,
)

logger = logging.getLogger(__name__)


def calculate_deal_sheet(
    inputs: DealSheetInputs, settings: Optional[GlobalSettings] = None
) -> DealSheetResult:
    """
    Underwrite a single-lot deal.

    Args:
        inputs: Deal sheet assumptions
        settings: Optional global settings; defaults are used if not provided

    Returns:
        DealSheetResult labelled "Base"
    """
    if settings is None:
        settings = GlobalSettings()
    return DealSheetEngine(settings=settings).calculate(inputs)


def run_sensitivity_analysis(
    inputs: DealSheetInputs, settings: Optional[GlobalSettings] = None
) -> SensitivityResult:
    """
    Run the base deal and its five sensitivity scenarios, and solve the
    breakeven and minimum-margin sales prices.

    Raises:
        InvalidRateError: If the selling cost rate leaves no revenue for a solve
    """
    if settings is None:
        settings = GlobalSettings()
    return SensitivityAnalyzer(settings=settings).analyze(inputs)


def analyze_quick_deal(
    inputs: QuickDealInputs,
    fee_overrides: Optional[Dict[str, float]] = None,
    settings: Optional[QuickDealSettings] = None,
) -> QuickDealResult:
    """
    Screen a single spec home on annualized return on equity.

    Args:
        inputs: Quick deal assumptions
        fee_overrides: Replacement amounts for named fee line items
        settings: Optional quick deal settings; defaults are used if not provided

    Raises:
        ValueError: If an override names an unknown fee
    """
    if settings is None:
        settings = QuickDealSettings()
    return QuickDealAnalyzer(settings=settings).analyze(inputs, fee_overrides)


def calculate_community_proforma(inputs: CommunityProformaInputs) -> CommunityProformaResults:
    """Two-phase community proforma with its LP waterfall."""
    return CommunityProformaEngine().calculate(inputs)


def calculate_lot_development_proforma(inputs: LotDevProformaInputs) -> LotDevProformaResults:
    return LotDevelopmentProformaEngine().calculate(inputs)


def calculate_lot_purchase_proforma(
    inputs: LotPurchaseProformaInputs,
) -> LotPurchaseProformaResults:
    return LotPurchaseProformaEngine().calculate(inputs)


def calculate_waterfall(inputs: WaterfallInputs) -> WaterfallResult:
    """Distribute one cash amount across investors through the tier stack."""
    result = DistributionWaterfall().calculate(inputs)
    if result.remaining_undistributed > 0:
        logger.info(
            f"Waterfall left ${result.remaining_undistributed:,.2f} undistributed "
            f"of ${inputs.total_distributable:,.2f}"
        )
    return result
