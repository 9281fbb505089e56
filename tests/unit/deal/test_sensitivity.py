# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the sensitivity analysis and the closed-form breakeven and
minimum-margin sales price solves.
"""

import pandas as pd
import pytest

from dealforma.core import InvalidRateError
from dealforma.core.primitives import (
    GlobalSettings,
    SensitivityScenarioEnum,
    SensitivitySettings,
)
from dealforma.deal import (
    DealSheetEngine,
    SensitivityAnalyzer,
    breakeven_asp,
    minimum_margin_asp,
)


class TestSensitivityAnalyzer:
    @pytest.fixture
    def result(self, deal_inputs):
        return SensitivityAnalyzer().analyze(deal_inputs)

    def test_base_matches_engine(self, deal_inputs, result):
        assert result.base == DealSheetEngine().calculate(deal_inputs)

    def test_best_base_worst_ordering(self, result):
        assert result.best_case.net_profit > result.base.net_profit
        assert result.base.net_profit > result.worst_case.net_profit

    def test_single_factor_scenarios_reduce_profit(self, result):
        assert result.cost_overrun_10.net_profit < result.base.net_profit
        assert result.asp_decline_10.net_profit < result.base.net_profit
        assert result.delay_30_days.net_profit < result.base.net_profit

    def test_cost_overrun_scales_construction_costs(self, result):
        # Sections 1-5 242,000 still sit under the fee floor and cap
        assert result.cost_overrun_10.sections_1_to_5 == pytest.approx(242_000)
        assert result.cost_overrun_10.builder_fee == 25_000
        assert result.cost_overrun_10.contingency == 10_000
        assert result.cost_overrun_10.total_lot_basis == 83_000
        assert result.cost_overrun_10.total_project_cost == pytest.approx(412_400)

    def test_asp_decline(self, result):
        assert result.asp_decline_10.total_project_cost == result.base.total_project_cost
        assert result.asp_decline_10.land_cost_ratio == pytest.approx(98_000 / 405_000)

    def test_delay_only_changes_carry(self, result):
        delay = result.delay_30_days
        assert delay.total_project_cost == result.base.total_project_cost
        assert delay.interest_cost == pytest.approx(result.base.interest_cost * 150 / 120)

    def test_worst_case_combines_all_three(self, result):
        worst = result.worst_case
        assert worst.total_project_cost == pytest.approx(412_400)
        assert worst.selling_costs == pytest.approx(405_000 * 0.085)
        assert worst.interest_cost == pytest.approx(
            worst.loan_amount * 0.10 * 150 / 360
        )

    def test_scenario_labels(self, result):
        assert list(result.scenarios) == [scenario.value for scenario in SensitivityScenarioEnum]
        assert result.worst_case.label == "Worst Case"
        assert result.delay_30_days.label == "Delay +30 Days"

    def test_breakeven_asp(self, result):
        assert result.breakeven_asp == pytest.approx(445_934.46, abs=0.01)

    def test_minimum_asp_5pct(self, result):
        assert result.minimum_asp_5pct == pytest.approx(471_711.02, abs=0.01)
        assert result.minimum_asp_5pct > result.breakeven_asp

    def test_breakeven_feeds_back_to_zero_profit(self, deal_inputs, result):
        inputs = deal_inputs.model_copy(update={"asset_sales_price": result.breakeven_asp})
        assert abs(DealSheetEngine().calculate(inputs).net_profit) < 1

    def test_minimum_asp_feeds_back_to_target_margin(self, deal_inputs, result):
        inputs = deal_inputs.model_copy(
            update={"asset_sales_price": result.minimum_asp_5pct}
        )
        replay = DealSheetEngine().calculate(inputs)
        assert replay.net_profit_margin == pytest.approx(0.05, abs=1e-9)

    def test_custom_sensitivity_settings(self, deal_inputs):
        settings = GlobalSettings(sensitivity=SensitivitySettings(delay_days=60))
        result = SensitivityAnalyzer(settings=settings).analyze(deal_inputs)
        assert result.delay_30_days.interest_cost == pytest.approx(
            result.base.interest_cost * 180 / 120
        )

    def test_to_dataframe(self, result):
        df = result.to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert df.index.name == "scenario"
        assert len(df) == 6
        assert list(df.columns) == [
            "total_project_cost",
            "total_all_in",
            "net_profit",
            "net_profit_margin",
            "profit_verdict",
        ]
        assert df.loc["Base", "profit_verdict"] == "NO GO"
        assert df.loc["Cost Overrun +10%", "total_project_cost"] == pytest.approx(412_400)


class TestClosedFormSolves:
    @pytest.fixture
    def base(self, deal_inputs):
        return DealSheetEngine().calculate(deal_inputs)

    def test_breakeven_formula(self, base, deal_inputs):
        expected = (base.total_all_in + deal_inputs.selling_concessions) / (1 - 0.085)
        assert breakeven_asp(base, deal_inputs) == pytest.approx(expected)

    def test_minimum_margin_custom_target(self, base, deal_inputs):
        price = minimum_margin_asp(base, deal_inputs, target_margin=0.10)
        expected = (base.total_all_in + deal_inputs.selling_concessions) / (1 - 0.085 - 0.10)
        assert price == pytest.approx(expected)

    def test_selling_cost_rate_of_one_is_rejected(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"selling_cost_rate": 1.0})
        base = DealSheetEngine().calculate(inputs)

        with pytest.raises(InvalidRateError):
            breakeven_asp(base, inputs)

    def test_rate_leaving_no_room_for_margin(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"selling_cost_rate": 0.96})
        base = DealSheetEngine().calculate(inputs)

        assert breakeven_asp(base, inputs) > 0
        with pytest.raises(InvalidRateError) as exc_info:
            minimum_margin_asp(base, inputs)
        assert exc_info.value.selling_cost_rate == 0.96
        assert exc_info.value.target_margin == 0.05

    def test_invalid_rate_error_is_value_error(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"selling_cost_rate": 1.0})
        with pytest.raises(ValueError):
            SensitivityAnalyzer().analyze(inputs)

    def test_rate_exactly_consuming_margin_is_rejected(self, deal_inputs):
        # 1 - 0.95 - 0.05 is a tiny positive float, not zero
        inputs = deal_inputs.model_copy(update={"selling_cost_rate": 0.95})
        base = DealSheetEngine().calculate(inputs)

        assert breakeven_asp(base, inputs) > 0
        with pytest.raises(InvalidRateError) as exc_info:
            minimum_margin_asp(base, inputs)
        assert exc_info.value.selling_cost_rate == 0.95

    def test_analyze_rejects_rate_exactly_consuming_margin(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"selling_cost_rate": 0.95})
        with pytest.raises(InvalidRateError):
            SensitivityAnalyzer().analyze(inputs)
