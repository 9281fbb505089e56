# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Quick Deal Analyzer

A first-pass screen for a single spec home, ahead of the full deal sheet.
Costs are land, hard costs and a flat per-house fee schedule (contingency
included as a flat line item); the loan accrues interest over a term in
months and the deal is rated on annualized return on equity:

    total_project_cost = purchase_price + hard_costs + fixed_costs
    interest_expense   = loan_amount * interest_rate * months / 12
    net_profit         = asset_sales_price - concessions
                         - total_project_cost - interest_expense
    roi                = net_profit / equity_required
    annualized_roi     = roi * 12 / months

Ratings (lower bound inclusive):
    >= 25%  Strong Buy
    >= 15%  Buy
    >= 8%   Hold
    below   Pass
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import pandas as pd
from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import (
    BucketClassifier,
    DayCountConvention,
    DealRatingEnum,
    FeeLineItem,
    FeeSchedule,
    FeeSettings,
    FloatBetween0And1,
    Model,
    OwnershipRelation,
    PositiveFloat,
)
from ..debt import AnyAccrual, AverageBalanceMonthlyAccrual, equity_required, loan_amount

logger = logging.getLogger(__name__)

RATING_COLORS: Dict[DealRatingEnum, str] = {
    DealRatingEnum.STRONG_BUY: "#4A7A5B",
    DealRatingEnum.BUY: "#48BB78",
    DealRatingEnum.HOLD: "#C4841D",
    DealRatingEnum.PASS: "#B84040",
}

_QUICK_DEAL_FEE_KEYS = (
    "builder_fee",
    "builder_warranty",
    "builders_risk",
    "po_fee",
    "pm_fee",
    "utilities",
)


def _default_quick_deal_schedule() -> FeeSchedule:
    """Standard per-house fees without bookkeeping or AM, plus capped contingency."""
    items: List[FeeLineItem] = [
        item for item in FeeSchedule().line_items if item.key in _QUICK_DEAL_FEE_KEYS
    ]
    items.append(
        FeeLineItem(
            key="contingency",
            label="Contingency",
            amount=FeeSettings().contingency_cap,
        )
    )
    return FeeSchedule(line_items=items)


def _default_rating_classifier() -> BucketClassifier:
    return BucketClassifier(
        floor_label=DealRatingEnum.PASS,
        thresholds=[
            (0.08, DealRatingEnum.HOLD),
            (0.15, DealRatingEnum.BUY),
            (0.25, DealRatingEnum.STRONG_BUY),
        ],
    )


def _default_interest_accrual() -> AverageBalanceMonthlyAccrual:
    # The quick screen assumes the loan is fully drawn for the whole term
    return AverageBalanceMonthlyAccrual(average_balance_factor=1.0)


class QuickDealSettings(Model):
    """Fee schedule, rating thresholds and interest convention for the quick screen."""

    schedule: FeeSchedule = Field(default_factory=_default_quick_deal_schedule)
    rating: BucketClassifier = Field(default_factory=_default_rating_classifier)
    interest_accrual: AnyAccrual = Field(default_factory=_default_interest_accrual)


class QuickDealInputs(Model):
    """Headline assumptions for a quick single-home screen."""

    purchase_price: PositiveFloat = Field(..., description="Lot purchase price")
    site_work: PositiveFloat = 0.0
    base_build_cost: PositiveFloat = 0.0
    upgrade_package: PositiveFloat = 0.0
    asset_sales_price: PositiveFloat = Field(..., description="Anticipated sales price")
    concessions: PositiveFloat = 0.0
    duration_months: PositiveFloat = Field(..., description="Build and sell term in months")
    interest_rate: FloatBetween0And1 = Field(..., description="Annual loan rate")
    ltc_ratio: FloatBetween0And1 = Field(..., description="Loan-to-cost ratio")
    ownership: OwnershipRelation = OwnershipRelation.INDEPENDENT


class QuickDealResult(Model):
    """Cost, financing, profit and rating figures from one quick screen."""

    # Costs
    land_cost: float
    hard_costs: float
    fixed_costs: float
    fees: Dict[str, float]
    total_project_cost: float

    # Financing
    loan_amount: float
    equity_required: float
    interest_expense: float

    # Revenue and profit
    gross_revenue: float
    net_revenue: float
    gross_profit: float
    net_profit: float

    # Margins and returns
    gross_margin: float
    net_margin: float
    roi: float
    annualized_roi: float

    verdict: DealRatingEnum
    verdict_color: str

    def to_series(self) -> pd.Series:
        """Flat series of the scalar figures; per-fee amounts are left out."""
        data = self.model_dump(exclude={"fees"})
        data["verdict"] = self.verdict.value
        return pd.Series(data, name="Quick Deal", dtype=object)


@dataclass
class QuickDealAnalyzer:
    """
    Quick screen for a single spec home.

    Example:
        >>> result = QuickDealAnalyzer().analyze(inputs, fee_overrides={"builder_fee": 20_000})
        >>> result.verdict
        <DealRatingEnum.STRONG_BUY: 'Strong Buy'>
    """

    settings: QuickDealSettings = field(default_factory=QuickDealSettings)

    def _accrual_period(self, duration_months: float) -> float:
        """Term in the unit the configured accrual expects."""
        accrual = self.settings.interest_accrual
        if accrual.day_count is DayCountConvention.MONTHS_12:
            return duration_months
        return duration_months * accrual.DAYS_IN_YEAR / 12

    def analyze(
        self,
        inputs: QuickDealInputs,
        fee_overrides: Optional[Dict[str, float]] = None,
    ) -> QuickDealResult:
        """
        Screen one deal.

        Args:
            inputs: Quick deal assumptions
            fee_overrides: Replacement amounts for named fee line items; every
                other line item keeps its scheduled amount

        Raises:
            ValueError: If an override names a fee the schedule does not have
        """
        schedule = self.settings.schedule
        if fee_overrides:
            schedule = schedule.with_overrides(**fee_overrides)
        fees = schedule.amounts_for(inputs.ownership)

        land_cost = inputs.purchase_price
        hard_costs = inputs.site_work + inputs.base_build_cost + inputs.upgrade_package
        fixed_costs = sum(fees.values())
        total_project_cost = land_cost + hard_costs + fixed_costs

        loan = loan_amount(total_project_cost, inputs.ltc_ratio)
        equity = equity_required(total_project_cost, loan)
        interest_expense = self.settings.interest_accrual.accrue(
            loan, inputs.interest_rate, self._accrual_period(inputs.duration_months)
        )

        gross_revenue = inputs.asset_sales_price
        net_revenue = gross_revenue - inputs.concessions
        gross_profit = net_revenue - total_project_cost
        net_profit = gross_profit - interest_expense

        roi = FinancialCalculations.safe_ratio(net_profit, equity)
        annualized_roi = (
            roi * (12 / inputs.duration_months) if inputs.duration_months > 0 else 0.0
        )
        verdict = self.settings.rating.classify(annualized_roi)

        logger.debug(
            f"Quick deal: cost ${total_project_cost:,.0f}, interest "
            f"${interest_expense:,.2f} ({self.settings.interest_accrual.day_count.value}), "
            f"annualized ROI {annualized_roi:.2%} -> {verdict.value}"
        )

        return QuickDealResult(
            land_cost=land_cost,
            hard_costs=hard_costs,
            fixed_costs=fixed_costs,
            fees=fees,
            total_project_cost=total_project_cost,
            loan_amount=loan,
            equity_required=equity,
            interest_expense=interest_expense,
            gross_revenue=gross_revenue,
            net_revenue=net_revenue,
            gross_profit=gross_profit,
            net_profit=net_profit,
            gross_margin=FinancialCalculations.safe_ratio(gross_profit, gross_revenue),
            net_margin=FinancialCalculations.safe_ratio(net_profit, gross_revenue),
            roi=roi,
            annualized_roi=annualized_roi,
            verdict=verdict,
            verdict_color=RATING_COLORS[verdict],
        )
