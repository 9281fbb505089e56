# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for the two-phase community proforma.

Reference community: 10 lots, 75,000 lot transfer price, 400,000 homes.
Phase 1 total uses 696,120 against 750,000 of lot sales (gross margin
53,880); phase 2 profit 38,500 per home.
"""

import pandas as pd
import pytest
from pydantic import ValidationError

from dealforma.development import CommunityProformaEngine, CommunityProformaInputs


@pytest.fixture
def community_inputs() -> CommunityProformaInputs:
    return CommunityProformaInputs(
        total_lots=10,
        land_value_per_lot=20_000,
        horizontal_dev_per_lot=30_000,
        ae_per_lot=2_000,
        amenity_package=50_000,
        monument_sign=10_000,
        carry_costs_per_lot=3_000,
        contingency_pct=0.05,
        cm_fee_per_lot=1_000,
        developer_fee_per_lot=2_000,
        lot_sales_price=75_000,
        bank_ltc=0.60,
        bank_interest_rate=0.08,
        lp_pref_return=0.08,
        lp_buyout_irr=0.15,
        home_sales_price=400_000,
        selling_costs_pct=0.06,
        seller_concession=5_000,
        vertical_cost=250_000,
        construction_interest_rate=0.09,
        construction_months=8,
        lp_accruing_return_rate=0.10,
        lp_investment_period_months=12,
        gp_split_pct=0.50,
    )


class TestPhase1:
    @pytest.fixture
    def phase1(self, community_inputs):
        return CommunityProformaEngine().calculate(community_inputs).phase1

    def test_per_lot_costs_scale_with_lots(self, phase1):
        assert phase1.land_acquisition == 200_000
        assert phase1.horizontal_dev == 300_000
        assert phase1.ae == 20_000
        assert phase1.carry_costs == 30_000

    def test_hard_costs_include_flat_items(self, phase1):
        assert phase1.subtotal_hard == 610_000
        assert phase1.contingency == pytest.approx(30_500)
        assert phase1.total_hard_plus_contingency == pytest.approx(640_500)

    def test_fees_and_interest_reserve(self, phase1):
        assert phase1.cm_fee == 10_000
        assert phase1.developer_fee == 20_000
        # Half of hard costs outstanding on average
        assert phase1.interest_reserve == pytest.approx(25_620)
        assert phase1.total_uses == pytest.approx(696_120)

    def test_sources_cover_uses(self, phase1):
        assert phase1.senior_debt == pytest.approx(417_672)
        assert phase1.lp_equity == pytest.approx(278_448)
        assert phase1.senior_debt + phase1.lp_equity == pytest.approx(phase1.total_uses)

    def test_gross_margin(self, phase1):
        assert phase1.lot_sales_proceeds == 750_000
        assert phase1.gross_margin == pytest.approx(53_880)

    def test_single_lot_uses_and_sources(self, community_inputs):
        p = community_inputs.model_copy(update={"total_lots": 1})
        phase1 = CommunityProformaEngine().calculate(p).phase1

        subtotal = (
            p.land_value_per_lot
            + p.horizontal_dev_per_lot
            + p.ae_per_lot
            + p.amenity_package
            + p.monument_sign
            + p.carry_costs_per_lot
        )
        hard_plus_contingency = subtotal + subtotal * p.contingency_pct
        total_uses = (
            hard_plus_contingency
            + p.cm_fee_per_lot
            + p.developer_fee_per_lot
            + hard_plus_contingency * p.bank_interest_rate * 0.5
        )

        assert phase1.total_uses == total_uses
        assert phase1.total_uses == pytest.approx(128_580)
        assert phase1.senior_debt + phase1.lp_equity == total_uses


class TestPhase2:
    @pytest.fixture
    def results(self, community_inputs):
        return CommunityProformaEngine().calculate(community_inputs)

    def test_per_home(self, results):
        per_home = results.phase2_per_home
        assert per_home.lot_cost == 75_000
        assert per_home.construction_interest == pytest.approx(7_500)
        assert per_home.selling_costs == pytest.approx(24_000)
        assert per_home.total_cost_per_home == pytest.approx(361_500)
        assert per_home.per_home_profit == pytest.approx(38_500)
        assert per_home.per_home_margin == pytest.approx(0.09625)

    def test_totals_are_per_home_times_lots(self, results):
        totals = results.phase2_totals
        assert totals.total_revenue == 4_000_000
        assert totals.total_costs == pytest.approx(3_615_000)
        assert totals.total_profit == pytest.approx(385_000)

    def test_zero_home_price_margin(self, community_inputs):
        inputs = community_inputs.model_copy(update={"home_sales_price": 0.0})
        per_home = CommunityProformaEngine().calculate(inputs).phase2_per_home
        assert per_home.per_home_margin == 0.0


class TestLPWaterfall:
    def test_reference_waterfall(self, community_inputs):
        waterfall = CommunityProformaEngine().calculate(community_inputs).waterfall

        assert waterfall.gp_rolled_equity == pytest.approx(53_880)
        assert waterfall.total_lot_cost == 750_000
        assert waterfall.sl_fund_lp_capital == pytest.approx(696_120)
        assert waterfall.lp_accrued_return == pytest.approx(69_612)
        assert waterfall.total_lp_payout == pytest.approx(765_732)
        assert waterfall.gross_profit_from_sales == pytest.approx(385_000)
        assert waterfall.remaining_to_gps == pytest.approx(315_388)
        assert waterfall.gp_share == pytest.approx(157_694)

    def test_land_loss_rolls_forward_as_zero(self, community_inputs):
        inputs = community_inputs.model_copy(update={"lot_sales_price": 60_000})
        results = CommunityProformaEngine().calculate(inputs)

        assert results.phase1.gross_margin < 0
        assert results.waterfall.gp_rolled_equity == 0
        assert results.waterfall.sl_fund_lp_capital == results.waterfall.total_lot_cost

    def test_unconsumed_lp_terms_do_not_change_results(self, community_inputs):
        engine = CommunityProformaEngine()
        varied = community_inputs.model_copy(
            update={"lp_pref_return": 0.12, "lp_buyout_irr": 0.25}
        )
        assert engine.calculate(varied) == engine.calculate(community_inputs)


class TestCommunityProformaInputs:
    def test_total_lots_required(self):
        with pytest.raises(ValidationError):
            CommunityProformaInputs()

    def test_minimal_inputs(self):
        results = CommunityProformaEngine().calculate(CommunityProformaInputs(total_lots=0))
        assert results.phase1.total_uses == 0
        assert results.phase2_per_home.per_home_margin == 0
        assert results.waterfall.gp_share == 0

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            CommunityProformaInputs(total_lots=10, vertical_cost=-1)


class TestCommunityProformaResults:
    def test_to_dataframe(self, community_inputs):
        df = CommunityProformaEngine().calculate(community_inputs).to_dataframe()

        assert isinstance(df, pd.DataFrame)
        assert list(df.columns) == ["section", "line", "value"]
        assert set(df["section"]) == {
            "phase1",
            "phase2_per_home",
            "phase2_totals",
            "waterfall",
        }
        row = df[(df["section"] == "phase1") & (df["line"] == "total_uses")]
        assert row["value"].iloc[0] == pytest.approx(696_120)
