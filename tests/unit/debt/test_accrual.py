# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for interest accrual conventions.

Actual/360 (bullet construction loan), Actual/365 (investor preferred
return) and the average-balance monthly accrual (revolving draws), plus the
discriminated union that selects between them.
"""

import pytest
from pydantic import TypeAdapter

from dealforma.core.primitives import DayCountConvention
from dealforma.debt import (
    Actual360Accrual,
    Actual365Accrual,
    AnyAccrual,
    AverageBalanceMonthlyAccrual,
    accrued_cost,
)


class TestActual360Accrual:
    def test_reference_loan(self):
        interest = Actual360Accrual().accrue(330_565, 0.10, 120)
        assert interest == pytest.approx(11_018.83, abs=0.01)

    def test_uses_literal_elapsed_days(self):
        accrual = Actual360Accrual()
        assert accrual.accrue(360_000, 0.10, 365) == pytest.approx(36_500)

    @pytest.mark.parametrize("days", [0, -30])
    def test_non_positive_duration(self, days):
        assert Actual360Accrual().accrue(330_565, 0.10, days) == 0.0

    def test_day_count(self):
        assert Actual360Accrual().day_count == DayCountConvention.ACTUAL_360

    def test_functional_spelling_matches(self):
        assert accrued_cost(58_335, 0.16, 120) == Actual360Accrual().accrue(
            58_335, 0.16, 120
        )
        assert accrued_cost(58_335, 0.16, 120) == pytest.approx(3_111.20, abs=0.01)


class TestActual365Accrual:
    def test_full_year(self):
        assert Actual365Accrual().accrue(500_000, 0.08, 365) == pytest.approx(40_000)

    def test_zero_days(self):
        assert Actual365Accrual().accrue(500_000, 0.08, 0) == 0.0


class TestAverageBalanceMonthlyAccrual:
    def test_half_balance_default(self):
        interest = AverageBalanceMonthlyAccrual().accrue(250_000, 0.09, 8)
        assert interest == pytest.approx(7_500)

    def test_custom_factor(self):
        accrual = AverageBalanceMonthlyAccrual(average_balance_factor=1.0)
        assert accrual.accrue(250_000, 0.09, 8) == pytest.approx(15_000)

    def test_zero_months(self):
        assert AverageBalanceMonthlyAccrual().accrue(250_000, 0.09, 0) == 0.0

    def test_differs_from_actual_360_on_same_term(self):
        # 8 months is ~243 days; the conventions model different loans
        monthly = AverageBalanceMonthlyAccrual().accrue(250_000, 0.09, 8)
        bullet = Actual360Accrual().accrue(250_000, 0.09, 243)
        assert monthly < bullet


class TestAnyAccrual:
    @pytest.mark.parametrize(
        "convention, expected_type",
        [
            ("Actual/360", Actual360Accrual),
            ("Actual/365", Actual365Accrual),
            ("Months/12", AverageBalanceMonthlyAccrual),
        ],
    )
    def test_discriminated_by_convention(self, convention, expected_type):
        accrual = TypeAdapter(AnyAccrual).validate_python({"convention": convention})
        assert isinstance(accrual, expected_type)
