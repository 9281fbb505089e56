# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

import importlib
import logging

"""
dealforma - Real Estate Development Deal Economics

Pure, deterministic underwriting for single-lot builds and multi-lot
communities: contract fee rules, loan-to-cost financing, verdicts,
sensitivity and breakeven solves, community and lot proformas, and GP/LP
distribution waterfalls.

Key Entry Points:
- dealforma.calculate_deal_sheet() - Single-lot underwriting
- dealforma.run_sensitivity_analysis() - Scenarios and breakeven prices
- dealforma.analyze_quick_deal() - First-pass buy/hold/pass screen
- dealforma.calculate_community_proforma() - Two-phase community economics
- dealforma.calculate_waterfall() - Tiered GP/LP distribution

Example Usage:
    ```python
    import dealforma
    from dealforma.deal import DealSheetInputs

    result = dealforma.calculate_deal_sheet(
        DealSheetInputs(lot_purchase_price=80_000, asset_sales_price=450_000)
    )
    print(f"Margin: {result.net_profit_margin:.2%} ({result.profit_verdict.value})")
    ```
"""

# Library logging stays silent unless the application configures handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())


# Public API surface (lazy-loaded on first attribute access)
__all__ = [  # noqa: F822 - lazy loading
    "core",
    "deal",
    "debt",
    "development",
    "fees",
    "utils",
    "calculate_deal_sheet",
    "run_sensitivity_analysis",
    "analyze_quick_deal",
    "calculate_community_proforma",
    "calculate_lot_development_proforma",
    "calculate_lot_purchase_proforma",
    "calculate_waterfall",
]


_LAZY_MODULES = {
    "core": "dealforma.core",
    "deal": "dealforma.deal",
    "debt": "dealforma.debt",
    "development": "dealforma.development",
    "fees": "dealforma.fees",
    "utils": "dealforma.utils",
}

_API_FUNCTIONS = {
    "calculate_deal_sheet",
    "run_sensitivity_analysis",
    "analyze_quick_deal",
    "calculate_community_proforma",
    "calculate_lot_development_proforma",
    "calculate_lot_purchase_proforma",
    "calculate_waterfall",
}


def __getattr__(name: str):
    if name in _API_FUNCTIONS:
        value = getattr(importlib.import_module("dealforma.api"), name)
    elif name in _LAZY_MODULES:
        value = importlib.import_module(_LAZY_MODULES[name])
    else:
        raise AttributeError(f"module 'dealforma' has no attribute '{name}'")
    globals()[name] = value
    return value
