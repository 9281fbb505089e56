# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Sensitivity Analyzer

Re-runs the deal sheet engine under perturbed inputs and solves the
breakeven and minimum-margin sales prices in closed form.

Net profit is affine in the asset sales price: every cost term, including
financing carry, is independent of the price, while selling costs scale
linearly with it. With C = total_all_in + selling_concessions and r the
selling cost rate:

    net_profit(P)        = P * (1 - r) - C
    breakeven:  P        = C / (1 - r)
    margin m:   P        = C / (1 - r - m)

The solve is direct algebra; no iterative root finding is involved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..core.errors import InvalidRateError
from ..core.primitives import GlobalSettings, SensitivityScenarioEnum
from .calculator import DealSheetEngine
from .inputs import DealSheetInputs
from .results import DealSheetResult, SensitivityResult

logger = logging.getLogger(__name__)

# Rate sums within this distance of 1 leave no revenue to solve against
_RATE_TOLERANCE = 1e-9


def _solve_asp(
    result: DealSheetResult, inputs: DealSheetInputs, target_margin: float
) -> float:
    if inputs.selling_cost_rate + target_margin >= 1 - _RATE_TOLERANCE:
        logger.warning(
            f"Cannot solve sales price for {target_margin:.0%} margin with "
            f"selling cost rate {inputs.selling_cost_rate:.2%}"
        )
        raise InvalidRateError(
            f"Selling cost rate {inputs.selling_cost_rate:.2%} leaves no revenue to "
            f"reach a {target_margin:.0%} net profit margin",
            selling_cost_rate=inputs.selling_cost_rate,
            target_margin=target_margin,
        )
    denominator = 1 - inputs.selling_cost_rate - target_margin
    return (result.total_all_in + inputs.selling_concessions) / denominator


def breakeven_asp(result: DealSheetResult, inputs: DealSheetInputs) -> float:
    """
    Sales price at which net profit is exactly zero.

    Raises:
        InvalidRateError: If the selling cost rate is 100% or more
    """
    return _solve_asp(result, inputs, target_margin=0.0)


def minimum_margin_asp(
    result: DealSheetResult, inputs: DealSheetInputs, target_margin: float = 0.05
) -> float:
    """
    Sales price at which net profit margin equals `target_margin`.

    Raises:
        InvalidRateError: If selling cost rate + target margin is 100% or more
    """
    return _solve_asp(result, inputs, target_margin=target_margin)


@dataclass
class SensitivityAnalyzer:
    """
    Scenario analysis around a base deal.

    Scenarios (multipliers and day deltas come from `SensitivitySettings`):
    - Best Case: construction costs x0.95, sales price x1.05
    - Worst Case: construction costs x1.10, sales price x0.90, +30 days
    - Cost Overrun +10%: construction costs x1.10
    - ASP Decline -10%: sales price x0.90
    - Delay +30 Days: duration +30 days
    """

    settings: GlobalSettings = field(default_factory=GlobalSettings)

    def __post_init__(self):
        self.engine = DealSheetEngine(settings=self.settings)

    def _run(
        self,
        inputs: DealSheetInputs,
        scenario: SensitivityScenarioEnum,
        cost_multiplier: float = 1.0,
        asp_multiplier: float = 1.0,
        extra_days: int = 0,
    ) -> DealSheetResult:
        adjusted = inputs.with_scaled_costs(cost_multiplier).model_copy(
            update={
                "asset_sales_price": inputs.asset_sales_price * asp_multiplier,
                "project_duration_days": inputs.project_duration_days + extra_days,
            }
        )
        return self.engine.calculate(adjusted, label=scenario.value)

    def analyze(self, inputs: DealSheetInputs) -> SensitivityResult:
        """
        Run every scenario and solve the breakeven and minimum-margin prices.

        Raises:
            InvalidRateError: If the selling cost rate makes a solve undefined
        """
        s = self.settings.sensitivity
        base = self._run(inputs, SensitivityScenarioEnum.BASE)

        result = SensitivityResult(
            base=base,
            best_case=self._run(
                inputs,
                SensitivityScenarioEnum.BEST_CASE,
                cost_multiplier=s.best_case_cost_multiplier,
                asp_multiplier=s.best_case_asp_multiplier,
            ),
            worst_case=self._run(
                inputs,
                SensitivityScenarioEnum.WORST_CASE,
                cost_multiplier=s.worst_case_cost_multiplier,
                asp_multiplier=s.worst_case_asp_multiplier,
                extra_days=s.worst_case_extra_days,
            ),
            cost_overrun_10=self._run(
                inputs,
                SensitivityScenarioEnum.COST_OVERRUN_10,
                cost_multiplier=s.cost_overrun_multiplier,
            ),
            asp_decline_10=self._run(
                inputs,
                SensitivityScenarioEnum.ASP_DECLINE_10,
                asp_multiplier=s.asp_decline_multiplier,
            ),
            delay_30_days=self._run(
                inputs, SensitivityScenarioEnum.DELAY_30_DAYS, extra_days=s.delay_days
            ),
            breakeven_asp=breakeven_asp(base, inputs),
            minimum_asp_5pct=minimum_margin_asp(base, inputs, s.target_margin),
        )

        logger.debug(
            f"Sensitivity: breakeven ASP ${result.breakeven_asp:,.0f}, "
            f"{s.target_margin:.0%} margin ASP ${result.minimum_asp_5pct:,.0f}"
        )
        return result
