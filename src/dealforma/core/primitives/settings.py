# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Organization-level configuration for the underwriting engines.

Fee schedules, fee formula constants, verdict thresholds and sensitivity
scenario assumptions are configuration, not engine logic. Every public entry
point accepts an optional `GlobalSettings`; omitting it uses the defaults
below.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List

from pydantic import Field, field_validator

from .classification import BucketClassifier
from .enums import OwnershipRelation, VerdictEnum
from .model import Model
from .types import FloatBetween0And1, PositiveFloat, PositiveInt

_ALL_OWNERS = frozenset(OwnershipRelation)


class FeeLineItem(Model):
    """A flat per-house fee and the owner relationships it applies to."""

    key: str = Field(..., description="Stable identifier (e.g. 'pm_fee')")
    label: str = Field(..., description="Display label")
    amount: PositiveFloat = Field(..., description="Flat amount per house")
    applies_to: FrozenSet[OwnershipRelation] = Field(
        default=_ALL_OWNERS,
        description="Owner relationships for which this line item is charged",
    )

    def applies(self, ownership: OwnershipRelation) -> bool:
        return ownership in self.applies_to


def _default_fee_line_items() -> List[FeeLineItem]:
    return [
        FeeLineItem(key="builder_fee", label="Builder Fee", amount=15_000),
        FeeLineItem(
            key="am_fee",
            label="Asset Management Fee",
            amount=5_000,
            applies_to=frozenset({OwnershipRelation.RELATED_PARTY}),
        ),
        FeeLineItem(
            key="builder_warranty", label="Builder Warranty Reserve", amount=5_000
        ),
        FeeLineItem(
            key="builders_risk", label="Builder's Risk Insurance", amount=1_500
        ),
        FeeLineItem(key="po_fee", label="PO Fee", amount=3_000),
        FeeLineItem(key="bookkeeping", label="Bookkeeping", amount=1_500),
        FeeLineItem(key="pm_fee", label="Project Management Fee", amount=3_500),
        FeeLineItem(
            key="utilities", label="Utilities During Construction", amount=1_400
        ),
    ]


class FeeSchedule(Model):
    """
    Fixed per-house fee schedule.

    Usage Examples:
        # Default schedule
        schedule = FeeSchedule()
        schedule.total(OwnershipRelation.RELATED_PARTY)  # 35,900

        # Negotiated builder fee on a single deal
        schedule = FeeSchedule().with_overrides(builder_fee=20_000)
    """

    line_items: List[FeeLineItem] = Field(default_factory=_default_fee_line_items)

    @field_validator("line_items")
    @classmethod
    def validate_unique_keys(cls, v: List[FeeLineItem]) -> List[FeeLineItem]:
        keys = [item.key for item in v]
        if len(keys) != len(set(keys)):
            raise ValueError(f"Fee schedule keys must be unique, got {keys}")
        return v

    def line_items_for(self, ownership: OwnershipRelation) -> List[FeeLineItem]:
        """Line items charged for the given owner relationship."""
        return [item for item in self.line_items if item.applies(ownership)]

    def amounts_for(self, ownership: OwnershipRelation) -> Dict[str, float]:
        return {item.key: item.amount for item in self.line_items_for(ownership)}

    def total(self, ownership: OwnershipRelation) -> float:
        return sum(item.amount for item in self.line_items_for(ownership))

    def with_overrides(self, **amounts: float) -> "FeeSchedule":
        """Return a copy with the named line item amounts replaced."""
        unknown = set(amounts) - {item.key for item in self.line_items}
        if unknown:
            raise ValueError(f"Unknown fee schedule keys: {sorted(unknown)}")
        return FeeSchedule(
            line_items=[
                item.model_copy(update={"amount": amounts[item.key]})
                if item.key in amounts
                else item
                for item in self.line_items
            ]
        )


class FeeSettings(Model):
    """Contract fee formula constants and the fixed per-house schedule."""

    builder_fee_floor: PositiveFloat = Field(
        default=25_000, description="Minimum builder fee regardless of job size"
    )
    builder_fee_rate: FloatBetween0And1 = Field(
        default=0.10, description="Builder fee as a share of sections 1-5"
    )
    contingency_cap: PositiveFloat = Field(
        default=10_000, description="Maximum contingency regardless of job size"
    )
    contingency_rate: FloatBetween0And1 = Field(
        default=0.05, description="Contingency as a share of sections 1-5"
    )
    schedule: FeeSchedule = Field(default_factory=FeeSchedule)


def _default_profit_classifier() -> BucketClassifier:
    return BucketClassifier(
        floor_label=VerdictEnum.NO_GO,
        thresholds=[
            (0.05, VerdictEnum.CAUTION),
            (0.07, VerdictEnum.ACCEPTABLE),
            (0.10, VerdictEnum.STRONG),
        ],
    )


def _default_land_classifier() -> BucketClassifier:
    return BucketClassifier(
        floor_label=VerdictEnum.STRONG,
        thresholds=[
            (0.20, VerdictEnum.ACCEPTABLE),
            (0.25, VerdictEnum.CAUTION),
            (0.30, VerdictEnum.NO_GO),
        ],
    )


class VerdictSettings(Model):
    """Threshold tables for the net profit margin and land cost ratio verdicts."""

    profit: BucketClassifier = Field(default_factory=_default_profit_classifier)
    land: BucketClassifier = Field(default_factory=_default_land_classifier)


class SensitivitySettings(Model):
    """
    Perturbations applied by the sensitivity analysis.

    Cost multipliers scale every construction cost input (sections 1-5, site
    work and other site costs); lot acquisition costs are left unchanged.
    """

    best_case_cost_multiplier: PositiveFloat = 0.95
    best_case_asp_multiplier: PositiveFloat = 1.05
    worst_case_cost_multiplier: PositiveFloat = 1.10
    worst_case_asp_multiplier: PositiveFloat = 0.90
    worst_case_extra_days: PositiveInt = 30
    cost_overrun_multiplier: PositiveFloat = 1.10
    asp_decline_multiplier: PositiveFloat = 0.90
    delay_days: PositiveInt = 30
    target_margin: FloatBetween0And1 = Field(
        default=0.05,
        description="Net profit margin solved for by the minimum ASP calculation",
    )


# --- Main Global Settings Class ---


class GlobalSettings(Model):
    """Global engine settings, grouped by functional area."""

    fees: FeeSettings = Field(default_factory=FeeSettings)
    verdicts: VerdictSettings = Field(default_factory=VerdictSettings)
    sensitivity: SensitivitySettings = Field(default_factory=SensitivitySettings)
