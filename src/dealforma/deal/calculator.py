# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal Sheet Engine

Single-lot underwriting: composes the contract fee rules and loan-to-cost
financing into a full cost roll-up, sale proceeds, net profit, margins and
categorical verdicts.

Pipeline, in order:
1. Total lot basis (purchase price plus acquisition costs)
2. Sections 1-5 construction subtotal
3. Builder fee (floor) and contingency (cap) on sections 1-5
4. Total contract cost
5. Fixed per-house fees for the owner relationship
6. Total project cost
7-9. Loan, equity, Actual/360 interest and cost of capital
10-12. Selling costs, net proceeds, net profit
13-14. Net profit margin and land cost ratio (0.0 without a sales price)
15-16. Profit and land verdicts

Example:
    ```python
    from dealforma.deal import DealSheetEngine, DealSheetInputs

    result = DealSheetEngine().calculate(DealSheetInputs(...))
    print(f"Net profit: ${result.net_profit:,.0f} ({result.profit_verdict.value})")
    ```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.calculations import FinancialCalculations
from ..core.primitives import GlobalSettings, SensitivityScenarioEnum
from ..debt import FinancingCalculator
from ..fees import builder_fee, contingency, fixed_per_house_fee
from .inputs import DealSheetInputs
from .results import DealSheetResult

logger = logging.getLogger(__name__)


@dataclass
class DealSheetEngine:
    """
    Stateless deal sheet calculator.

    Attributes:
        settings: Fee, verdict and sensitivity configuration
    """

    settings: GlobalSettings = field(default_factory=GlobalSettings)
    financing: FinancingCalculator = field(default_factory=FinancingCalculator)

    def calculate(
        self, inputs: DealSheetInputs, label: str = SensitivityScenarioEnum.BASE.value
    ) -> DealSheetResult:
        """
        Underwrite one deal.

        Args:
            inputs: Deal sheet assumptions
            label: Scenario label carried on the result

        Returns:
            DealSheetResult with every derived figure
        """
        fee_settings = self.settings.fees

        total_lot_basis = (
            inputs.lot_purchase_price
            + inputs.closing_costs
            + inputs.acquisition_commission
            + inputs.acquisition_bonus
            + inputs.other_lot_costs
        )

        sections_1_to_5 = (
            inputs.sticks_bricks
            + inputs.upgrades
            + inputs.soft_costs
            + inputs.land_prep
            + inputs.site_specific
        )
        fee = builder_fee(sections_1_to_5, fee_settings)
        reserve = contingency(sections_1_to_5, fee_settings)
        total_contract_cost = sections_1_to_5 + fee + reserve

        total_fixed_per_house = fixed_per_house_fee(inputs.ownership, fee_settings.schedule)

        site_costs = inputs.site_work_total + inputs.other_site_costs
        total_project_cost = (
            total_lot_basis + total_contract_cost + total_fixed_per_house + site_costs
        )

        financing = self.financing.calculate(
            total_project_cost=total_project_cost,
            ltc_ratio=inputs.ltc_ratio,
            interest_rate=inputs.interest_rate,
            cost_of_capital_rate=inputs.cost_of_capital_rate,
            duration_days=inputs.project_duration_days,
        )
        total_all_in = total_project_cost + financing.total_carry

        asp = inputs.asset_sales_price
        selling_costs = asp * inputs.selling_cost_rate
        net_proceeds = asp - selling_costs - inputs.selling_concessions
        net_profit = net_proceeds - total_all_in

        if asp <= 0:
            logger.debug(
                f"{label}: no asset sales price set; margin and land ratio reported as 0"
            )
        net_profit_margin = FinancialCalculations.safe_ratio(net_profit, asp)
        land_cost_ratio = FinancialCalculations.safe_ratio(
            total_lot_basis + site_costs, asp
        )

        verdicts = self.settings.verdicts
        profit_verdict = verdicts.profit.classify(net_profit_margin)
        land_verdict = verdicts.land.classify(land_cost_ratio)

        logger.debug(
            f"{label}: total project cost ${total_project_cost:,.0f}, "
            f"net profit ${net_profit:,.2f} ({net_profit_margin:.2%}, {profit_verdict.value}), "
            f"land cost ratio {land_cost_ratio:.2%} ({land_verdict.value})"
        )

        return DealSheetResult(
            label=label,
            total_lot_basis=total_lot_basis,
            sections_1_to_5=sections_1_to_5,
            builder_fee=fee,
            contingency=reserve,
            total_contract_cost=total_contract_cost,
            total_fixed_per_house=total_fixed_per_house,
            total_project_cost=total_project_cost,
            loan_amount=financing.loan_amount,
            equity_required=financing.equity_required,
            interest_cost=financing.interest_cost,
            cost_of_capital_amount=financing.cost_of_capital_amount,
            total_all_in=total_all_in,
            selling_costs=selling_costs,
            net_proceeds=net_proceeds,
            net_profit=net_profit,
            net_profit_margin=net_profit_margin,
            land_cost_ratio=land_cost_ratio,
            profit_verdict=profit_verdict,
            land_verdict=land_verdict,
        )
