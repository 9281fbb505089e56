# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum


class OwnershipRelation(str, Enum):
    """
    Relationship between the builder and the owner of the asset.

    Gates fee-schedule line items that only apply to related-party owned
    deals (e.g. the asset management fee). Modeled as a tagged policy rather
    than a boolean so further owner tiers can be added without touching call
    sites.
    """

    INDEPENDENT = "Independent"
    RELATED_PARTY = "Related Party"

    @classmethod
    def from_flag(cls, is_related_owner: bool) -> "OwnershipRelation":
        """Map the persisted `is_rch_related_owner` flag onto the policy."""
        return cls.RELATED_PARTY if is_related_owner else cls.INDEPENDENT


class VerdictEnum(str, Enum):
    """Categorical verdict shared by the profit and land classifications."""

    STRONG = "STRONG"
    ACCEPTABLE = "ACCEPTABLE"
    CAUTION = "CAUTION"
    NO_GO = "NO GO"


class DealRatingEnum(str, Enum):
    """Buy/hold/pass rating from the quick deal analyzer's annualized ROI."""

    STRONG_BUY = "Strong Buy"
    BUY = "Buy"
    HOLD = "Hold"
    PASS = "Pass"


class SensitivityScenarioEnum(str, Enum):
    """Named scenarios produced by the sensitivity analysis."""

    BASE = "Base"
    BEST_CASE = "Best Case"
    WORST_CASE = "Worst Case"
    COST_OVERRUN_10 = "Cost Overrun +10%"
    ASP_DECLINE_10 = "ASP Decline -10%"
    DELAY_30_DAYS = "Delay +30 Days"


class WaterfallTierEnum(str, Enum):
    """Distribution waterfall tiers, in their conventional order."""

    RETURN_OF_CAPITAL = "return_of_capital"
    PREFERRED_RETURN = "preferred_return"
    CATCH_UP = "catch_up"
    PROFIT_SPLIT = "profit_split"


class DayCountConvention(str, Enum):
    """Day count conventions used when accruing interest and returns."""

    ACTUAL_360 = "Actual/360"
    ACTUAL_365 = "Actual/365"
    MONTHS_12 = "Months/12"
