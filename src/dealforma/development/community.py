# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Community Proforma Engine

Two-phase economics for a multi-lot community:

- Phase 1 (horizontal): land, horizontal development, A&E and carry per
  lot plus flat amenity and monument costs, contingency, per-lot CM and
  developer fees, and an interest reserve on half the hard cost balance.
  Funded by senior debt at the bank loan-to-cost and LP equity; the gross
  margin on lot sales rolls forward to the GP.
- Phase 2 (vertical): per-home construction economics with construction
  interest on an average-balance monthly accrual, multiplied across every
  lot. Homes are assumed homogeneous across the community.
- LP waterfall: a single-tier split. The LP fund capitalizes lot purchases
  net of the GP's rolled equity, earns a flat accruing return over the
  investment period, and the GP share is a fixed split of what remains of
  phase 2 profit after that return.

`lp_pref_return` and `lp_buyout_irr` are carried on the inputs for
reporting but do not drive the single-tier waterfall.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pandas as pd
from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt
from ..debt import AverageBalanceMonthlyAccrual

logger = logging.getLogger(__name__)

# Phase 1 interest reserve: half of the hard cost balance outstanding on average
INTEREST_RESERVE_DRAW_FACTOR = 0.5


class CommunityProformaInputs(Model):
    """Assumptions for a two-phase community development."""

    # === PHASE 1: HORIZONTAL DEVELOPMENT ===
    total_lots: PositiveInt = Field(..., description="Number of lots in the community")
    land_value_per_lot: PositiveFloat = 0.0
    horizontal_dev_per_lot: PositiveFloat = 0.0
    ae_per_lot: PositiveFloat = Field(
        default=0.0, description="Architecture and engineering per lot"
    )
    amenity_package: PositiveFloat = Field(default=0.0, description="Flat amenity cost")
    monument_sign: PositiveFloat = Field(default=0.0, description="Flat monument sign cost")
    carry_costs_per_lot: PositiveFloat = 0.0
    contingency_pct: FloatBetween0And1 = 0.0
    cm_fee_per_lot: PositiveFloat = Field(
        default=0.0, description="Construction management fee per lot"
    )
    developer_fee_per_lot: PositiveFloat = 0.0
    lot_sales_price: PositiveFloat = Field(
        default=0.0, description="Price at which finished lots transfer to phase 2"
    )
    bank_ltc: FloatBetween0And1 = 0.0
    bank_interest_rate: FloatBetween0And1 = 0.0
    lp_pref_return: FloatBetween0And1 = 0.0
    lp_buyout_irr: FloatBetween0And1 = 0.0

    # === PHASE 2: VERTICAL CONSTRUCTION ===
    home_sales_price: PositiveFloat = 0.0
    selling_costs_pct: FloatBetween0And1 = 0.0
    seller_concession: PositiveFloat = 0.0
    vertical_cost: PositiveFloat = Field(default=0.0, description="Vertical cost per home")
    construction_interest_rate: FloatBetween0And1 = 0.0
    construction_months: PositiveFloat = 0.0
    lp_accruing_return_rate: FloatBetween0And1 = 0.0
    lp_investment_period_months: PositiveFloat = 0.0
    gp_split_pct: FloatBetween0And1 = 0.0


class Phase1Results(Model):
    land_acquisition: float
    horizontal_dev: float
    ae: float
    carry_costs: float
    subtotal_hard: float
    contingency: float
    total_hard_plus_contingency: float
    cm_fee: float
    developer_fee: float
    interest_reserve: float
    total_uses: float
    senior_debt: float
    lp_equity: float
    lot_sales_proceeds: float
    gross_margin: float


class Phase2PerHome(Model):
    lot_cost: float
    construction_interest: float
    selling_costs: float
    total_cost_per_home: float
    per_home_profit: float
    per_home_margin: float


class Phase2ProjectTotals(Model):
    total_revenue: float
    total_costs: float
    total_profit: float


class LPWaterfall(Model):
    gp_rolled_equity: float
    total_lot_cost: float
    sl_fund_lp_capital: float
    lp_accrued_return: float
    total_lp_payout: float
    gross_profit_from_sales: float
    remaining_to_gps: float
    gp_share: float


class CommunityProformaResults(Model):
    phase1: Phase1Results
    phase2_per_home: Phase2PerHome
    phase2_totals: Phase2ProjectTotals
    waterfall: LPWaterfall

    def to_dataframe(self) -> pd.DataFrame:
        """Long-form table: one row per (section, line) with its value."""
        sections = {
            "phase1": self.phase1,
            "phase2_per_home": self.phase2_per_home,
            "phase2_totals": self.phase2_totals,
            "waterfall": self.waterfall,
        }
        rows = [
            {"section": section, "line": line, "value": value}
            for section, record in sections.items()
            for line, value in record.model_dump().items()
        ]
        return pd.DataFrame(rows, columns=["section", "line", "value"])


@dataclass
class CommunityProformaEngine:
    """
    Stateless community proforma calculator.

    Attributes:
        construction_accrual: Phase 2 construction interest convention
    """

    construction_accrual: AverageBalanceMonthlyAccrual = field(
        default_factory=AverageBalanceMonthlyAccrual
    )

    def _phase1(self, p: CommunityProformaInputs) -> Phase1Results:
        lots = p.total_lots
        land_acquisition = lots * p.land_value_per_lot
        horizontal_dev = lots * p.horizontal_dev_per_lot
        ae = lots * p.ae_per_lot
        carry_costs = lots * p.carry_costs_per_lot
        subtotal_hard = (
            land_acquisition
            + horizontal_dev
            + ae
            + p.amenity_package
            + p.monument_sign
            + carry_costs
        )
        contingency = subtotal_hard * p.contingency_pct
        total_hard_plus_contingency = subtotal_hard + contingency
        cm_fee = lots * p.cm_fee_per_lot
        developer_fee = lots * p.developer_fee_per_lot
        interest_reserve = (
            total_hard_plus_contingency * p.bank_interest_rate * INTEREST_RESERVE_DRAW_FACTOR
        )
        total_uses = total_hard_plus_contingency + cm_fee + developer_fee + interest_reserve

        senior_debt = total_uses * p.bank_ltc
        lp_equity = total_uses - senior_debt
        lot_sales_proceeds = lots * p.lot_sales_price

        return Phase1Results(
            land_acquisition=land_acquisition,
            horizontal_dev=horizontal_dev,
            ae=ae,
            carry_costs=carry_costs,
            subtotal_hard=subtotal_hard,
            contingency=contingency,
            total_hard_plus_contingency=total_hard_plus_contingency,
            cm_fee=cm_fee,
            developer_fee=developer_fee,
            interest_reserve=interest_reserve,
            total_uses=total_uses,
            senior_debt=senior_debt,
            lp_equity=lp_equity,
            lot_sales_proceeds=lot_sales_proceeds,
            gross_margin=lot_sales_proceeds - total_uses,
        )

    def _phase2_per_home(self, p: CommunityProformaInputs) -> Phase2PerHome:
        lot_cost = p.lot_sales_price
        construction_interest = self.construction_accrual.accrue(
            p.vertical_cost, p.construction_interest_rate, p.construction_months
        )
        selling_costs = p.home_sales_price * p.selling_costs_pct
        total_cost_per_home = (
            lot_cost + p.vertical_cost + construction_interest + selling_costs + p.seller_concession
        )
        per_home_profit = p.home_sales_price - total_cost_per_home

        return Phase2PerHome(
            lot_cost=lot_cost,
            construction_interest=construction_interest,
            selling_costs=selling_costs,
            total_cost_per_home=total_cost_per_home,
            per_home_profit=per_home_profit,
            per_home_margin=FinancialCalculations.safe_ratio(
                per_home_profit, p.home_sales_price
            ),
        )

    def _waterfall(
        self,
        p: CommunityProformaInputs,
        phase1: Phase1Results,
        totals: Phase2ProjectTotals,
    ) -> LPWaterfall:
        # A land-development loss rolls forward as zero, never as negative equity
        gp_rolled_equity = max(0.0, phase1.gross_margin)
        total_lot_cost = p.total_lots * p.lot_sales_price
        sl_fund_lp_capital = total_lot_cost - gp_rolled_equity
        lp_accrued_return = (
            sl_fund_lp_capital * p.lp_accruing_return_rate * (p.lp_investment_period_months / 12)
        )
        remaining_to_gps = totals.total_profit - lp_accrued_return

        return LPWaterfall(
            gp_rolled_equity=gp_rolled_equity,
            total_lot_cost=total_lot_cost,
            sl_fund_lp_capital=sl_fund_lp_capital,
            lp_accrued_return=lp_accrued_return,
            total_lp_payout=sl_fund_lp_capital + lp_accrued_return,
            gross_profit_from_sales=totals.total_profit,
            remaining_to_gps=remaining_to_gps,
            gp_share=remaining_to_gps * p.gp_split_pct,
        )

    def calculate(self, inputs: CommunityProformaInputs) -> CommunityProformaResults:
        """Run phase 1, phase 2 and the LP waterfall for one community."""
        phase1 = self._phase1(inputs)
        per_home = self._phase2_per_home(inputs)

        total_revenue = inputs.total_lots * inputs.home_sales_price
        total_costs = inputs.total_lots * per_home.total_cost_per_home
        totals = Phase2ProjectTotals(
            total_revenue=total_revenue,
            total_costs=total_costs,
            total_profit=total_revenue - total_costs,
        )
        waterfall = self._waterfall(inputs, phase1, totals)

        logger.debug(
            f"Community proforma ({inputs.total_lots} lots): total uses "
            f"${phase1.total_uses:,.0f}, gross margin ${phase1.gross_margin:,.0f}, "
            f"phase 2 profit ${totals.total_profit:,.0f}, GP share ${waterfall.gp_share:,.0f}"
        )

        return CommunityProformaResults(
            phase1=phase1,
            phase2_per_home=per_home,
            phase2_totals=totals,
            waterfall=waterfall,
        )
