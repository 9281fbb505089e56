# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Distribution Waterfall

Allocates one cash distribution across GP and LP investors through an
ordered, American-style tier stack:

1. Return of capital: pro-rata to each investor's unreturned capital
2. Preferred return: LPs only, Actual/365 accrual from contribution date
3. GP catch-up: GPs receive until they hold the catch-up share of profits
4. Profit split: remaining cash split into GP and LP pools

Each tier consumes from what remains after the previous tier. Prior
distributions recorded on each investor make multi-round distributions pick
up where the last round left off. Amounts are rounded to cents; a tier's
rounding residual is assigned to its first line item.

Example:
    ```python
    result = DistributionWaterfall().calculate(
        WaterfallInputs(
            distribution_date=date(2026, 1, 1),
            total_distributable=1_500_000,
            investors=[gp, lp],
            tiers=[
                ReturnOfCapitalTier(tier_order=1),
                PreferredReturnTier(tier_order=2, pref_rate=0.08),
                CatchUpTier(tier_order=3, catch_up_pct=0.20),
                ProfitSplitTier(tier_order=4, gp_split_pct=0.20, lp_split_pct=0.80),
            ],
        )
    )
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, List, Literal, Sequence, Tuple, Union

import pandas as pd
from pydantic import Field, field_validator, model_validator
from typing_extensions import Annotated

from ..core.primitives import (
    FloatBetween0And1,
    Model,
    PositiveFloat,
    WaterfallTierEnum,
)
from ..debt import Actual365Accrual
from ..utils import round_currency

logger = logging.getLogger(__name__)


# =============================================================================
# INPUTS
# =============================================================================


class WaterfallInvestor(Model):
    """An investment position with its distribution history."""

    investment_id: str = Field(..., description="Unique position identifier")
    investor_name: str = Field(..., description="Investor display name")
    is_gp: bool = Field(default=False, description="General partner position")
    called_amount: PositiveFloat = Field(..., description="Capital called to date")
    contribution_date: date = Field(..., description="Date capital was contributed")
    prior_return_of_capital: PositiveFloat = 0.0
    prior_preferred_return: PositiveFloat = 0.0
    prior_catch_up: PositiveFloat = 0.0
    prior_profit_split: PositiveFloat = 0.0

    @property
    def unreturned_capital(self) -> float:
        return max(0.0, self.called_amount - self.prior_return_of_capital)


class ReturnOfCapitalTier(Model):
    tier_name: Literal["return_of_capital"] = "return_of_capital"
    tier_order: int = Field(..., description="Processing order (ascending)")


class PreferredReturnTier(Model):
    tier_name: Literal["preferred_return"] = "preferred_return"
    tier_order: int = Field(..., description="Processing order (ascending)")
    pref_rate: FloatBetween0And1 = Field(
        default=0.0, description="Annual preferred return rate on called capital"
    )


class CatchUpTier(Model):
    tier_name: Literal["catch_up"] = "catch_up"
    tier_order: int = Field(..., description="Processing order (ascending)")
    catch_up_pct: float = Field(
        default=0.0,
        ge=0,
        lt=1,
        description="Share of cumulative profits the GP catches up to",
    )


class ProfitSplitTier(Model):
    tier_name: Literal["profit_split"] = "profit_split"
    tier_order: int = Field(..., description="Processing order (ascending)")
    gp_split_pct: FloatBetween0And1 = 0.0
    lp_split_pct: FloatBetween0And1 = 1.0

    @model_validator(mode="after")
    def validate_split(self) -> "ProfitSplitTier":
        """GP and LP pools cannot distribute more than what remains."""
        total = self.gp_split_pct + self.lp_split_pct
        if total > 1.0 + 1e-9:
            raise ValueError(
                f"GP split ({self.gp_split_pct:.1%}) + LP split ({self.lp_split_pct:.1%}) "
                "cannot exceed 100%"
            )
        return self


# The discriminated union for any waterfall tier
AnyWaterfallTier = Annotated[
    Union[ReturnOfCapitalTier, PreferredReturnTier, CatchUpTier, ProfitSplitTier],
    Field(discriminator="tier_name"),
]


class WaterfallInputs(Model):
    """One distribution event."""

    distribution_date: date
    total_distributable: float = Field(..., description="Cash available to distribute")
    investors: List[WaterfallInvestor] = Field(default_factory=list)
    tiers: List[AnyWaterfallTier] = Field(default_factory=list)

    @field_validator("investors")
    @classmethod
    def validate_unique_positions(
        cls, v: List[WaterfallInvestor]
    ) -> List[WaterfallInvestor]:
        ids = [investor.investment_id for investor in v]
        if len(ids) != len(set(ids)):
            raise ValueError("Investment ids must be unique")
        return v

    @field_validator("tiers")
    @classmethod
    def validate_unique_tier_orders(cls, v: List[AnyWaterfallTier]) -> List[AnyWaterfallTier]:
        orders = [tier.tier_order for tier in v]
        if len(orders) != len(set(orders)):
            raise ValueError(f"Tier orders must be unique, got {orders}")
        return v


# =============================================================================
# RESULTS
# =============================================================================


class WaterfallLineItem(Model):
    investment_id: str
    investor_name: str
    is_gp: bool
    tier_name: WaterfallTierEnum
    tier_order: int
    amount: float


class WaterfallTierTotal(Model):
    tier_name: WaterfallTierEnum
    tier_order: int
    total: float


class WaterfallInvestorSummary(Model):
    """Per-investor amounts from this distribution, by tier."""

    investment_id: str
    investor_name: str
    is_gp: bool
    return_of_capital: float = 0.0
    preferred_return: float = 0.0
    catch_up: float = 0.0
    profit_split: float = 0.0
    total: float = 0.0


class WaterfallResult(Model):
    total_distributed: float
    remaining_undistributed: float
    tier_breakdown: List[WaterfallTierTotal]
    investors: List[WaterfallInvestorSummary]
    line_items: List[WaterfallLineItem]

    def investor(self, investment_id: str) -> WaterfallInvestorSummary:
        """Summary for one position."""
        for summary in self.investors:
            if summary.investment_id == investment_id:
                return summary
        raise KeyError(investment_id)

    def tier_total(self, tier_name: WaterfallTierEnum) -> float:
        return sum(t.total for t in self.tier_breakdown if t.tier_name == tier_name)

    def to_dataframe(self) -> pd.DataFrame:
        """Line items as a DataFrame (one row per investor per tier)."""
        columns = list(WaterfallLineItem.model_fields)
        if not self.line_items:
            return pd.DataFrame(columns=columns)
        df = pd.DataFrame([item.model_dump() for item in self.line_items], columns=columns)
        df["tier_name"] = df["tier_name"].map(lambda tier: tier.value)
        return df


# =============================================================================
# CALCULATOR
# =============================================================================


def _allocate(
    weighted: Sequence[Tuple[WaterfallInvestor, float]],
    available: float,
    tier: WaterfallTierEnum,
    tier_order: int,
) -> Tuple[List[WaterfallLineItem], float]:
    """
    Split `available` across investors in proportion to their weights.

    Zero-weight investors and zero shares produce no line item. The rounding
    residual goes to the first line item so the tier consumes exactly
    `available`.
    """
    total_weight = sum(weight for _, weight in weighted)
    if available <= 0 or total_weight <= 0:
        return [], 0.0

    shares: List[Tuple[WaterfallInvestor, float]] = []
    for investor, weight in weighted:
        if weight <= 0:
            continue
        share = round_currency(weight / total_weight * available)
        if share > 0:
            shares.append((investor, share))

    consumed = sum(share for _, share in shares)
    residual = round_currency(available - consumed)
    if residual != 0 and shares:
        first_investor, first_share = shares[0]
        shares[0] = (first_investor, round_currency(first_share + residual))
        consumed = available

    items = [
        WaterfallLineItem(
            investment_id=investor.investment_id,
            investor_name=investor.investor_name,
            is_gp=investor.is_gp,
            tier_name=tier,
            tier_order=tier_order,
            amount=share,
        )
        for investor, share in shares
    ]
    return items, round_currency(consumed)


def _capital_weights(
    investors: Sequence[WaterfallInvestor],
) -> List[Tuple[WaterfallInvestor, float]]:
    """Called-capital weights, or equal weights when no capital was called."""
    total = sum(investor.called_amount for investor in investors)
    if total > 0:
        return [(investor, investor.called_amount) for investor in investors]
    return [(investor, 1.0) for investor in investors]


@dataclass
class DistributionWaterfall:
    """
    Tiered GP/LP distribution calculator.

    Attributes:
        pref_accrual: Day-count convention for LP preferred returns
    """

    pref_accrual: Actual365Accrual = field(default_factory=Actual365Accrual)

    def _return_of_capital(
        self, investors: Sequence[WaterfallInvestor], remaining: float, tier_order: int
    ) -> Tuple[List[WaterfallLineItem], float]:
        needs = [(investor, investor.unreturned_capital) for investor in investors]
        total_need = sum(need for _, need in needs)
        return _allocate(
            needs,
            min(remaining, total_need),
            WaterfallTierEnum.RETURN_OF_CAPITAL,
            tier_order,
        )

    def _preferred_return(
        self,
        investors: Sequence[WaterfallInvestor],
        remaining: float,
        tier: PreferredReturnTier,
        distribution_date: date,
    ) -> Tuple[List[WaterfallLineItem], float]:
        if tier.pref_rate <= 0:
            return [], 0.0

        needs = []
        for investor in investors:
            if investor.is_gp:
                continue
            days = max(0, (distribution_date - investor.contribution_date).days)
            accrued = self.pref_accrual.accrue(investor.called_amount, tier.pref_rate, days)
            needs.append(
                (investor, max(0.0, round_currency(accrued - investor.prior_preferred_return)))
            )

        total_need = sum(need for _, need in needs)
        return _allocate(
            needs,
            min(remaining, total_need),
            WaterfallTierEnum.PREFERRED_RETURN,
            tier.tier_order,
        )

    def _catch_up(
        self,
        investors: Sequence[WaterfallInvestor],
        remaining: float,
        tier: CatchUpTier,
        profits_so_far: float,
    ) -> Tuple[List[WaterfallLineItem], float]:
        gps = [investor for investor in investors if investor.is_gp]
        if tier.catch_up_pct <= 0 or not gps:
            return [], 0.0

        # GP share of all profits distributed so far reaches catch_up_pct
        target = round_currency(
            profits_so_far * tier.catch_up_pct / (1 - tier.catch_up_pct)
        )
        prior = sum(investor.prior_catch_up for investor in gps)
        need = max(0.0, round_currency(target - prior))
        return _allocate(
            _capital_weights(gps),
            min(remaining, need),
            WaterfallTierEnum.CATCH_UP,
            tier.tier_order,
        )

    def _profit_split(
        self,
        investors: Sequence[WaterfallInvestor],
        remaining: float,
        tier: ProfitSplitTier,
    ) -> Tuple[List[WaterfallLineItem], float]:
        items: List[WaterfallLineItem] = []
        consumed = 0.0
        pools = [
            ([inv for inv in investors if inv.is_gp], tier.gp_split_pct),
            ([inv for inv in investors if not inv.is_gp], tier.lp_split_pct),
        ]
        # A pool with no recipients stays undistributed
        for members, pct in pools:
            if not members:
                continue
            pool_items, pool_consumed = _allocate(
                _capital_weights(members),
                round_currency(remaining * pct),
                WaterfallTierEnum.PROFIT_SPLIT,
                tier.tier_order,
            )
            items.extend(pool_items)
            consumed += pool_consumed
        return items, round_currency(consumed)

    def _summaries(
        self,
        investors: Sequence[WaterfallInvestor],
        line_items: Sequence[WaterfallLineItem],
    ) -> List[WaterfallInvestorSummary]:
        totals: Dict[str, Dict[str, float]] = {
            investor.investment_id: {tier.value: 0.0 for tier in WaterfallTierEnum}
            for investor in investors
        }
        for item in line_items:
            by_tier = totals[item.investment_id]
            by_tier[item.tier_name.value] = round_currency(
                by_tier[item.tier_name.value] + item.amount
            )

        return [
            WaterfallInvestorSummary(
                investment_id=investor.investment_id,
                investor_name=investor.investor_name,
                is_gp=investor.is_gp,
                total=round_currency(sum(totals[investor.investment_id].values())),
                **totals[investor.investment_id],
            )
            for investor in investors
        ]

    def calculate(self, inputs: WaterfallInputs) -> WaterfallResult:
        """Distribute `inputs.total_distributable` through the tier stack."""
        investors = inputs.investors
        total = inputs.total_distributable

        if total <= 0 or not investors or not inputs.tiers:
            logger.debug("Nothing to distribute: no cash, investors or tiers")
            return WaterfallResult(
                total_distributed=0.0,
                remaining_undistributed=total,
                tier_breakdown=[],
                investors=self._summaries(investors, []),
                line_items=[],
            )

        line_items: List[WaterfallLineItem] = []
        tier_breakdown: List[WaterfallTierTotal] = []
        remaining = total
        # Profits distributed in earlier tiers drive the catch-up target
        profits_so_far = 0.0

        for tier in sorted(inputs.tiers, key=lambda t: t.tier_order):
            if remaining <= 0:
                break

            if isinstance(tier, ReturnOfCapitalTier):
                items, consumed = self._return_of_capital(
                    investors, remaining, tier.tier_order
                )
            elif isinstance(tier, PreferredReturnTier):
                items, consumed = self._preferred_return(
                    investors, remaining, tier, inputs.distribution_date
                )
                profits_so_far += consumed
            elif isinstance(tier, CatchUpTier):
                items, consumed = self._catch_up(investors, remaining, tier, profits_so_far)
                profits_so_far += consumed
            else:
                items, consumed = self._profit_split(investors, remaining, tier)

            line_items.extend(items)
            remaining = round_currency(remaining - consumed)
            tier_breakdown.append(
                WaterfallTierTotal(
                    tier_name=WaterfallTierEnum(tier.tier_name),
                    tier_order=tier.tier_order,
                    total=consumed,
                )
            )
            logger.debug(
                f"Tier {tier.tier_order} ({tier.tier_name}): distributed ${consumed:,.2f}, "
                f"${remaining:,.2f} remaining"
            )

        return WaterfallResult(
            total_distributed=round_currency(total - remaining),
            remaining_undistributed=round_currency(remaining),
            tier_breakdown=tier_breakdown,
            investors=self._summaries(investors, line_items),
            line_items=line_items,
        )
