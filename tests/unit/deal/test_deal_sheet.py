# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the deal sheet engine.

The reference deal (see `deal_inputs` in conftest):
- Lot basis 83,000; sections 1-5 220,000 -> builder fee 25,000 (floor),
  contingency 10,000 (cap), contract 255,000
- Fixed per-house fees 35,900; site work 15,000 -> total project cost 388,900
- 85% LTC at 10% / 16% cost of capital over 120 days
- 450,000 sale, 8.5% selling costs, 5,000 concessions -> net profit ~3,719.97
"""

import pandas as pd
import pytest
from pydantic import ValidationError

from dealforma.core.primitives import (
    FeeSettings,
    GlobalSettings,
    OwnershipRelation,
    VerdictEnum,
)
from dealforma.deal import DealSheetEngine, DealSheetInputs


class TestDealSheetEngine:
    @pytest.fixture
    def result(self, deal_inputs):
        return DealSheetEngine().calculate(deal_inputs)

    def test_cost_roll_up(self, result):
        assert result.total_lot_basis == 83_000
        assert result.sections_1_to_5 == 220_000
        assert result.builder_fee == 25_000
        assert result.contingency == 10_000
        assert result.total_contract_cost == 255_000
        assert result.total_fixed_per_house == 35_900
        assert result.total_project_cost == 388_900

    def test_financing(self, result):
        assert result.loan_amount == pytest.approx(330_565)
        assert result.equity_required == pytest.approx(58_335)
        assert result.interest_cost == pytest.approx(11_018.83, abs=0.01)
        assert result.cost_of_capital_amount == pytest.approx(3_111.20, abs=0.01)

    def test_total_all_in_includes_carry(self, result):
        assert result.total_all_in == pytest.approx(
            result.total_project_cost + result.interest_cost + result.cost_of_capital_amount
        )
        assert result.total_all_in == pytest.approx(403_030.03, abs=0.01)

    def test_sale_and_profit(self, result):
        assert result.selling_costs == pytest.approx(38_250)
        assert result.net_proceeds == pytest.approx(406_750)
        assert result.net_profit == pytest.approx(3_719.97, abs=0.01)
        assert result.net_profit_margin == pytest.approx(0.00827, abs=1e-5)

    def test_verdicts(self, result):
        assert result.profit_verdict == VerdictEnum.NO_GO
        assert result.land_cost_ratio == pytest.approx(98_000 / 450_000)
        assert result.land_verdict == VerdictEnum.ACCEPTABLE

    def test_default_label(self, result):
        assert result.label == "Base"

    def test_deterministic(self, deal_inputs):
        engine = DealSheetEngine()
        assert engine.calculate(deal_inputs) == engine.calculate(deal_inputs)

    def test_zero_sales_price_reports_zero_ratios(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"asset_sales_price": 0.0})
        result = DealSheetEngine().calculate(inputs)

        assert result.net_profit_margin == 0.0
        assert result.land_cost_ratio == 0.0
        assert result.net_profit == pytest.approx(-5_000 - result.total_all_in)
        assert result.profit_verdict == VerdictEnum.NO_GO
        assert result.land_verdict == VerdictEnum.STRONG

    def test_independent_owner_drops_am_fee(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"ownership": OwnershipRelation.INDEPENDENT})
        result = DealSheetEngine().calculate(inputs)

        assert result.total_fixed_per_house == 30_900
        assert result.total_project_cost == 383_900

    def test_large_job_uses_percentage_fees(self, deal_inputs):
        inputs = deal_inputs.model_copy(update={"sticks_bricks": 360_000})
        result = DealSheetEngine().calculate(inputs)

        assert result.sections_1_to_5 == 400_000
        assert result.builder_fee == pytest.approx(40_000)
        assert result.contingency == 10_000

    def test_custom_fee_settings(self, deal_inputs):
        settings = GlobalSettings(fees=FeeSettings(builder_fee_floor=30_000))
        result = DealSheetEngine(settings=settings).calculate(deal_inputs)

        assert result.builder_fee == 30_000
        assert result.total_project_cost == 393_900

    def test_profit_improves_with_price(self, deal_inputs):
        engine = DealSheetEngine()
        inputs = deal_inputs.model_copy(update={"asset_sales_price": 520_000})
        result = engine.calculate(inputs)

        assert result.net_profit_margin >= 0.07
        assert result.profit_verdict in (VerdictEnum.ACCEPTABLE, VerdictEnum.STRONG)
        assert result.land_verdict == VerdictEnum.STRONG

    def test_to_series(self, result):
        series = result.to_series()

        assert isinstance(series, pd.Series)
        assert series.name == "Base"
        assert series["total_project_cost"] == 388_900
        assert series["profit_verdict"] == "NO GO"
        assert "label" not in series.index

    def test_result_is_immutable(self, result):
        with pytest.raises(ValidationError):
            result.net_profit = 0


class TestDealSheetInputs:
    def test_defaults(self):
        inputs = DealSheetInputs()
        assert inputs.ownership == OwnershipRelation.RELATED_PARTY
        assert inputs.is_related_owner
        assert inputs.selling_cost_rate == 0.085
        assert inputs.ltc_ratio == 0.85
        assert inputs.interest_rate == 0.10
        assert inputs.cost_of_capital_rate == 0.16
        assert inputs.project_duration_days == 120

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError):
            DealSheetInputs(lot_purchase_price=-1)

    def test_rate_above_one_rejected(self):
        with pytest.raises(ValidationError):
            DealSheetInputs(ltc_ratio=85)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            DealSheetInputs(project_duration_days=-30)

    def test_from_record_maps_stored_columns(self):
        inputs = DealSheetInputs.from_record(
            {
                "id": "ds-001",
                "lot_purchase_price": 80_000,
                "is_rch_related_owner": False,
                "cost_of_capital": 0.12,
                "ltc_ratio": None,
                "net_profit": 1234.0,
            }
        )

        assert inputs.lot_purchase_price == 80_000
        assert inputs.ownership == OwnershipRelation.INDEPENDENT
        assert inputs.cost_of_capital_rate == 0.12
        assert inputs.ltc_ratio == 0.85

    def test_with_scaled_costs_leaves_lot_costs(self, deal_inputs):
        scaled = deal_inputs.with_scaled_costs(1.10)

        assert scaled.sticks_bricks == pytest.approx(198_000)
        assert scaled.site_work_total == pytest.approx(16_500)
        assert scaled.lot_purchase_price == deal_inputs.lot_purchase_price
        assert scaled.closing_costs == deal_inputs.closing_costs
        assert scaled.asset_sales_price == deal_inputs.asset_sales_price
