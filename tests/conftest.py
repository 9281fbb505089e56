# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for dealforma tests.

`deal_inputs` is the reference single-lot deal used across the deal sheet,
sensitivity and API tests:

    lot basis 83,000 + contract 255,000 + fixed fees 35,900 + site work 15,000
    = total project cost 388,900; net profit ~3,719.97 on a 450,000 sale.
"""

from __future__ import annotations

from datetime import date

import pytest

from dealforma.core.primitives import GlobalSettings
from dealforma.deal import (
    CatchUpTier,
    DealSheetInputs,
    PreferredReturnTier,
    ProfitSplitTier,
    ReturnOfCapitalTier,
    WaterfallInvestor,
)


@pytest.fixture
def deal_inputs() -> DealSheetInputs:
    return DealSheetInputs(
        lot_purchase_price=80_000,
        closing_costs=3_000,
        sticks_bricks=180_000,
        upgrades=25_000,
        soft_costs=10_000,
        land_prep=5_000,
        site_work_total=15_000,
        asset_sales_price=450_000,
        selling_concessions=5_000,
    )


@pytest.fixture
def settings() -> GlobalSettings:
    return GlobalSettings()


@pytest.fixture
def standard_tiers():
    """Four-tier American waterfall: capital, 8% pref, 20% catch-up, 20/80 split."""
    return [
        ReturnOfCapitalTier(tier_order=1),
        PreferredReturnTier(tier_order=2, pref_rate=0.08),
        CatchUpTier(tier_order=3, catch_up_pct=0.20),
        ProfitSplitTier(tier_order=4, gp_split_pct=0.20, lp_split_pct=0.80),
    ]


def _make_investor(
    investment_id: str,
    called_amount: float,
    is_gp: bool = False,
    contribution_date: date = date(2025, 1, 1),
    **prior,
) -> WaterfallInvestor:
    """Build an investor position with sensible defaults."""
    return WaterfallInvestor(
        investment_id=investment_id,
        investor_name=investment_id.upper(),
        is_gp=is_gp,
        called_amount=called_amount,
        contribution_date=contribution_date,
        **prior,
    )


@pytest.fixture
def lp_a() -> WaterfallInvestor:
    return _make_investor("lp-a", 500_000)


@pytest.fixture
def lp_b() -> WaterfallInvestor:
    return _make_investor("lp-b", 500_000)


@pytest.fixture
def gp() -> WaterfallInvestor:
    return _make_investor("gp-1", 100_000, is_gp=True)


@pytest.fixture
def make_investor():
    """Factory for ad-hoc investor positions."""
    return _make_investor
