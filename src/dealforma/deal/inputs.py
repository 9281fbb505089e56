# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal sheet inputs.

One immutable record holding every acquisition, construction, sale and
financing assumption for a single-lot deal. Defaults mirror the standard
underwriting assumptions used when a deal sheet is first opened.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Tuple

from pydantic import Field

from ..core.primitives import (
    FloatBetween0And1,
    Model,
    OwnershipRelation,
    PositiveFloat,
    PositiveInt,
)


class DealSheetInputs(Model):
    """
    Single-asset underwriting assumptions.

    Example:
        ```python
        inputs = DealSheetInputs(
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
        ```
    """

    # Construction inputs scaled together by cost sensitivity scenarios
    CONSTRUCTION_COST_FIELDS: ClassVar[Tuple[str, ...]] = (
        "sticks_bricks",
        "upgrades",
        "soft_costs",
        "land_prep",
        "site_specific",
        "site_work_total",
        "other_site_costs",
    )

    # === LOT ACQUISITION ===
    lot_purchase_price: PositiveFloat = Field(default=0.0, description="Lot purchase price")
    closing_costs: PositiveFloat = Field(default=0.0, description="Lot closing costs")
    acquisition_commission: PositiveFloat = Field(
        default=0.0, description="Commission paid on lot acquisition"
    )
    acquisition_bonus: PositiveFloat = Field(
        default=0.0, description="Bonus paid on lot acquisition"
    )
    other_lot_costs: PositiveFloat = Field(default=0.0, description="Other lot costs")

    # === CONTRACT SECTIONS 1-5 ===
    sticks_bricks: PositiveFloat = Field(default=0.0, description="Base house build cost")
    upgrades: PositiveFloat = Field(default=0.0, description="Upgrade package cost")
    soft_costs: PositiveFloat = Field(
        default=0.0, description="Permits, impact fees and other municipality soft costs"
    )
    land_prep: PositiveFloat = Field(default=0.0, description="Land preparation")
    site_specific: PositiveFloat = Field(default=0.0, description="Site-specific costs")

    # === SITE WORK ===
    site_work_total: PositiveFloat = Field(default=0.0, description="Total site work")
    other_site_costs: PositiveFloat = Field(default=0.0, description="Other site costs")

    # === OWNERSHIP ===
    ownership: OwnershipRelation = Field(
        default=OwnershipRelation.RELATED_PARTY,
        description="Owner relationship; gates related-party fee schedule items",
    )

    # === SALE ===
    asset_sales_price: PositiveFloat = Field(
        default=0.0, description="Anticipated sales price of the finished home"
    )
    selling_cost_rate: FloatBetween0And1 = Field(
        default=0.085, description="Selling costs as a share of the sales price"
    )
    selling_concessions: PositiveFloat = Field(
        default=0.0, description="Seller concessions at closing"
    )

    # === FINANCING ===
    ltc_ratio: FloatBetween0And1 = Field(default=0.85, description="Loan-to-cost ratio")
    interest_rate: FloatBetween0And1 = Field(
        default=0.10, description="Annual construction loan interest rate"
    )
    cost_of_capital_rate: FloatBetween0And1 = Field(
        default=0.16, description="Annual cost of capital on equity"
    )
    project_duration_days: PositiveInt = Field(
        default=120, description="Project duration in elapsed days"
    )

    @property
    def is_related_owner(self) -> bool:
        return self.ownership == OwnershipRelation.RELATED_PARTY

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "DealSheetInputs":
        """
        Build inputs from a persisted deal sheet record.

        Accepts the stored column names (`is_rch_related_owner`,
        `cost_of_capital`), ignores unrelated columns (ids, names, computed
        outputs) and treats `None` as "use the default".
        """
        data = {key: value for key, value in record.items() if value is not None}

        if "cost_of_capital" in data:
            data.setdefault("cost_of_capital_rate", data.pop("cost_of_capital"))
        if "is_rch_related_owner" in data:
            data.setdefault(
                "ownership",
                OwnershipRelation.from_flag(bool(data.pop("is_rch_related_owner"))),
            )

        known = {key: value for key, value in data.items() if key in cls.model_fields}
        return cls(**known)

    def with_scaled_costs(self, multiplier: float) -> "DealSheetInputs":
        """Copy with every construction cost input scaled by `multiplier`."""
        return self.model_copy(
            update={
                name: getattr(self, name) * multiplier
                for name in self.CONSTRUCTION_COST_FIELDS
            }
        )
