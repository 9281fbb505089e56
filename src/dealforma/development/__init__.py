# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Development

Multi-lot development proformas: the two-phase community proforma with its
LP/GP waterfall, the horizontal lot development proforma, and the lot
purchase (takedown) proforma.
"""

from .community import (
    CommunityProformaEngine,
    CommunityProformaInputs,
    CommunityProformaResults,
    LPWaterfall,
    Phase1Results,
    Phase2PerHome,
    Phase2ProjectTotals,
)
from .lot_development import (
    LotDevAbsorption,
    LotDevelopmentProformaEngine,
    LotDevProformaInputs,
    LotDevProformaResults,
    LotDevReturns,
    LotDevSourcesUses,
)
from .lot_purchase import (
    LotPurchaseProformaEngine,
    LotPurchaseProformaInputs,
    LotPurchaseProformaResults,
    PerHomeEconomics,
    ProjectSummary,
    TakedownTranche,
)

__all__ = [
    # Community
    "CommunityProformaEngine",
    "CommunityProformaInputs",
    "CommunityProformaResults",
    "Phase1Results",
    "Phase2PerHome",
    "Phase2ProjectTotals",
    "LPWaterfall",
    # Lot development
    "LotDevelopmentProformaEngine",
    "LotDevProformaInputs",
    "LotDevProformaResults",
    "LotDevSourcesUses",
    "LotDevReturns",
    "LotDevAbsorption",
    # Lot purchase
    "LotPurchaseProformaEngine",
    "LotPurchaseProformaInputs",
    "LotPurchaseProformaResults",
    "TakedownTranche",
    "PerHomeEconomics",
    "ProjectSummary",
]
