# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Deal sheet result records.

Flat, immutable roll-ups produced by the deal sheet engine and the
sensitivity analysis. They contain no calculation logic beyond simple
aggregations and pandas conversions for reporting layers.
"""

from __future__ import annotations

from typing import Dict

import pandas as pd
from pydantic import Field

from ..core.primitives import Model, SensitivityScenarioEnum, VerdictEnum


class DealSheetResult(Model):
    """
    Complete single-asset underwriting result.

    Every figure derives from one `DealSheetInputs`. `net_profit_margin` and
    `land_cost_ratio` are 0.0 when there is no sales price; that 0.0 means
    "not applicable", not break-even.
    """

    label: str = Field(
        default=SensitivityScenarioEnum.BASE.value,
        description="Scenario this result was computed for",
    )

    # Costs
    total_lot_basis: float
    sections_1_to_5: float
    builder_fee: float
    contingency: float
    total_contract_cost: float
    total_fixed_per_house: float
    total_project_cost: float

    # Financing
    loan_amount: float
    equity_required: float
    interest_cost: float
    cost_of_capital_amount: float
    total_all_in: float

    # Sale
    selling_costs: float
    net_proceeds: float

    # Bottom line
    net_profit: float
    net_profit_margin: float
    land_cost_ratio: float
    profit_verdict: VerdictEnum
    land_verdict: VerdictEnum

    def to_series(self) -> pd.Series:
        """Flat series of every figure, named by scenario label."""
        data = self.model_dump(exclude={"label"})
        data["profit_verdict"] = self.profit_verdict.value
        data["land_verdict"] = self.land_verdict.value
        return pd.Series(data, name=self.label, dtype=object)


class SensitivityResult(Model):
    """
    Scenario results around a base deal plus closed-form solved prices.

    `breakeven_asp` is the sales price at which net profit is zero;
    `minimum_asp_5pct` is the sales price at which net profit margin is 5%.
    """

    base: DealSheetResult
    best_case: DealSheetResult
    worst_case: DealSheetResult
    cost_overrun_10: DealSheetResult
    asp_decline_10: DealSheetResult
    delay_30_days: DealSheetResult
    breakeven_asp: float
    minimum_asp_5pct: float

    @property
    def scenarios(self) -> Dict[str, DealSheetResult]:
        """All scenario results keyed by label, base first."""
        results = [
            self.base,
            self.best_case,
            self.worst_case,
            self.cost_overrun_10,
            self.asp_decline_10,
            self.delay_30_days,
        ]
        return {result.label: result for result in results}

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per scenario with the headline figures.

        Columns: total_project_cost, total_all_in, net_profit,
        net_profit_margin, profit_verdict.
        """
        rows = {
            label: {
                "total_project_cost": result.total_project_cost,
                "total_all_in": result.total_all_in,
                "net_profit": result.net_profit,
                "net_profit_margin": result.net_profit_margin,
                "profit_verdict": result.profit_verdict.value,
            }
            for label, result in self.scenarios.items()
        }
        df = pd.DataFrame.from_dict(rows, orient="index")
        df.index.name = "scenario"
        return df
