# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lot purchase proforma.

Finished lots are bought from a developer in takedown tranches and homes
are built and sold on them. Per-home economics use Actual/360 construction
interest on the loan-to-cost share of hard costs; project totals scale the
per-home figures across every lot.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

import pandas as pd
from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt
from ..debt import Actual360Accrual

logger = logging.getLogger(__name__)


class LotPurchaseProformaInputs(Model):
    total_lots: PositiveInt
    takedown_tranches: PositiveInt = 1
    lots_per_tranche: PositiveInt = 0
    lot_cost_per_lot: PositiveFloat = 0.0
    deposit_per_lot: PositiveFloat = 0.0
    vertical_cost: PositiveFloat = 0.0
    upgrades: PositiveFloat = 0.0
    municipality_soft_costs: PositiveFloat = 0.0
    fixed_per_house_fees: PositiveFloat = Field(
        default=0.0, description="Fixed per-house fee schedule total"
    )
    asp_per_home: PositiveFloat = 0.0
    selling_cost_pct: FloatBetween0And1 = 0.0
    seller_concession: PositiveFloat = 0.0
    ltc_ratio: FloatBetween0And1 = 0.0
    interest_rate: FloatBetween0And1 = 0.0
    project_duration_days: PositiveInt = 0
    absorption_homes_per_month: PositiveFloat = 0.0


class TakedownTranche(Model):
    tranche: int
    lots: int
    total_cost: float
    deposit: float


class PerHomeEconomics(Model):
    total_cost_per_home: float
    selling_costs: float
    construction_interest: float
    total_all_in_cost: float
    profit_per_home: float
    margin_per_home: float


class ProjectSummary(Model):
    total_equity: float
    total_revenue: float
    total_costs: float
    total_profit: float
    project_roi: float
    equity_multiple: float
    sellout_months: int


class LotPurchaseProformaResults(Model):
    tranches: List[TakedownTranche]
    per_home: PerHomeEconomics
    project: ProjectSummary

    def tranches_dataframe(self) -> pd.DataFrame:
        """Takedown schedule, one row per tranche."""
        columns = list(TakedownTranche.model_fields)
        return pd.DataFrame(
            [tranche.model_dump() for tranche in self.tranches], columns=columns
        ).set_index("tranche")


@dataclass
class LotPurchaseProformaEngine:
    """
    Stateless lot purchase calculator.

    Attributes:
        construction_accrual: Construction interest convention
    """

    construction_accrual: Actual360Accrual = field(default_factory=Actual360Accrual)

    def _tranches(self, p: LotPurchaseProformaInputs) -> List[TakedownTranche]:
        tranches = []
        for i in range(p.takedown_tranches):
            is_last = i == p.takedown_tranches - 1
            lots = p.total_lots - p.lots_per_tranche * i if is_last else p.lots_per_tranche
            # Over-allocated earlier tranches leave nothing for the last
            lots = max(0, lots)
            tranches.append(
                TakedownTranche(
                    tranche=i + 1,
                    lots=lots,
                    total_cost=lots * p.lot_cost_per_lot,
                    deposit=lots * p.deposit_per_lot,
                )
            )
        return tranches

    def calculate(self, inputs: LotPurchaseProformaInputs) -> LotPurchaseProformaResults:
        p = inputs
        total_cost_per_home = (
            p.lot_cost_per_lot
            + p.vertical_cost
            + p.upgrades
            + p.municipality_soft_costs
            + p.fixed_per_house_fees
        )
        selling_costs = p.asp_per_home * p.selling_cost_pct
        construction_interest = self.construction_accrual.accrue(
            total_cost_per_home * p.ltc_ratio, p.interest_rate, p.project_duration_days
        )
        total_all_in_cost = (
            total_cost_per_home + selling_costs + p.seller_concession + construction_interest
        )
        profit_per_home = p.asp_per_home - total_all_in_cost

        total_equity = p.total_lots * total_cost_per_home * (1 - p.ltc_ratio)
        total_revenue = p.total_lots * p.asp_per_home
        total_costs = p.total_lots * total_all_in_cost
        total_profit = total_revenue - total_costs

        results = LotPurchaseProformaResults(
            tranches=self._tranches(p),
            per_home=PerHomeEconomics(
                total_cost_per_home=total_cost_per_home,
                selling_costs=selling_costs,
                construction_interest=construction_interest,
                total_all_in_cost=total_all_in_cost,
                profit_per_home=profit_per_home,
                margin_per_home=FinancialCalculations.safe_ratio(
                    profit_per_home, p.asp_per_home
                ),
            ),
            project=ProjectSummary(
                total_equity=total_equity,
                total_revenue=total_revenue,
                total_costs=total_costs,
                total_profit=total_profit,
                project_roi=FinancialCalculations.safe_ratio(total_profit, total_equity),
                equity_multiple=FinancialCalculations.equity_multiple(
                    total_equity, total_profit
                ),
                sellout_months=FinancialCalculations.periods_to_absorb(
                    p.total_lots, p.absorption_homes_per_month
                ),
            ),
        )

        logger.debug(
            f"Lot purchase ({p.total_lots} lots): profit per home ${profit_per_home:,.0f}, "
            f"project profit ${total_profit:,.0f}"
        )
        return results
