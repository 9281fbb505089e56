# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Lot development proforma.

Horizontal-only deal: acquire raw land, entitle and develop it, and sell
finished lots. Produces sources & uses, returns on LP equity, and a simple
absorption schedule based on a constant lot sales pace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from pydantic import Field

from ..core.calculations import FinancialCalculations
from ..core.primitives import FloatBetween0And1, Model, PositiveFloat, PositiveInt
from .community import INTEREST_RESERVE_DRAW_FACTOR

logger = logging.getLogger(__name__)


class LotDevProformaInputs(Model):
    total_lots: PositiveInt
    phases: PositiveInt = 1
    lots_per_phase: PositiveInt = 0
    land_acquisition_cost: PositiveFloat = Field(
        default=0.0, description="Total land acquisition cost (not per lot)"
    )
    horizontal_dev_per_lot: PositiveFloat = 0.0
    entitlement_costs: PositiveFloat = 0.0
    amenity_costs: PositiveFloat = 0.0
    carry_costs_per_lot: PositiveFloat = 0.0
    contingency_pct: FloatBetween0And1 = 0.0
    developer_fee_per_lot: PositiveFloat = 0.0
    cm_fee_per_lot: PositiveFloat = 0.0
    lot_sales_price: PositiveFloat = 0.0
    bank_ltc: FloatBetween0And1 = 0.0
    bank_interest_rate: FloatBetween0And1 = 0.0
    lp_pref_return: FloatBetween0And1 = 0.0
    absorption_lots_per_month: PositiveFloat = 0.0


class LotDevSourcesUses(Model):
    horizontal_dev: float
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


class LotDevReturns(Model):
    total_revenue: float
    gross_profit: float
    profit_margin: float
    equity_multiple: float


class LotDevAbsorption(Model):
    absorption_months: int
    breakeven_lots: int
    breakeven_month: int


class LotDevProformaResults(Model):
    sources_uses: LotDevSourcesUses
    returns: LotDevReturns
    absorption: LotDevAbsorption


@dataclass
class LotDevelopmentProformaEngine:
    """Stateless lot development calculator."""

    def calculate(self, inputs: LotDevProformaInputs) -> LotDevProformaResults:
        p = inputs
        horizontal_dev = p.total_lots * p.horizontal_dev_per_lot
        carry_costs = p.total_lots * p.carry_costs_per_lot
        subtotal_hard = (
            p.land_acquisition_cost
            + horizontal_dev
            + p.entitlement_costs
            + p.amenity_costs
            + carry_costs
        )
        contingency = subtotal_hard * p.contingency_pct
        total_hard_plus_contingency = subtotal_hard + contingency
        cm_fee = p.total_lots * p.cm_fee_per_lot
        developer_fee = p.total_lots * p.developer_fee_per_lot
        interest_reserve = (
            total_hard_plus_contingency * p.bank_interest_rate * INTEREST_RESERVE_DRAW_FACTOR
        )
        total_uses = total_hard_plus_contingency + cm_fee + developer_fee + interest_reserve
        senior_debt = total_uses * p.bank_ltc
        lp_equity = total_uses - senior_debt

        total_revenue = p.total_lots * p.lot_sales_price
        gross_profit = total_revenue - total_uses

        breakeven_lots = (
            FinancialCalculations.periods_to_absorb(total_uses, p.lot_sales_price)
            if total_uses > 0
            else 0
        )

        results = LotDevProformaResults(
            sources_uses=LotDevSourcesUses(
                horizontal_dev=horizontal_dev,
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
            ),
            returns=LotDevReturns(
                total_revenue=total_revenue,
                gross_profit=gross_profit,
                profit_margin=FinancialCalculations.safe_ratio(gross_profit, total_revenue),
                equity_multiple=FinancialCalculations.equity_multiple(lp_equity, gross_profit),
            ),
            absorption=LotDevAbsorption(
                absorption_months=FinancialCalculations.periods_to_absorb(
                    p.total_lots, p.absorption_lots_per_month
                ),
                breakeven_lots=breakeven_lots,
                breakeven_month=FinancialCalculations.periods_to_absorb(
                    breakeven_lots, p.absorption_lots_per_month
                ),
            ),
        )

        logger.debug(
            f"Lot development ({p.total_lots} lots): total uses ${total_uses:,.0f}, "
            f"gross profit ${gross_profit:,.0f}, breakeven at lot {breakeven_lots}"
        )
        return results
