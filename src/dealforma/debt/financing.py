# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Loan-to-cost financing for single-asset deals.

Splits total project cost into senior debt and equity, then accrues the
loan interest and the equity cost of capital over the same duration using
the Actual/360 convention.
"""

from __future__ import annotations

import logging

from pydantic import Field

from ..core.primitives import Model
from .accrual import Actual360Accrual

logger = logging.getLogger(__name__)


def loan_amount(total_project_cost: float, ltc_ratio: float) -> float:
    """Senior loan sized at `ltc_ratio` of total project cost."""
    return total_project_cost * ltc_ratio


def equity_required(total_project_cost: float, loan: float) -> float:
    """Equity funding the cost not covered by the loan."""
    return total_project_cost - loan


class FinancingResult(Model):
    """Debt/equity split and carry for one project duration."""

    loan_amount: float
    equity_required: float
    interest_cost: float
    cost_of_capital_amount: float

    @property
    def total_carry(self) -> float:
        return self.interest_cost + self.cost_of_capital_amount


class FinancingCalculator(Model):
    """
    Loan-to-cost financing with Actual/360 carry.

    Interest accrues on the loan at the interest rate; cost of capital
    accrues on the equity at the cost-of-capital rate. Both use the same
    duration in days.
    """

    accrual: Actual360Accrual = Field(default_factory=Actual360Accrual)

    def calculate(
        self,
        total_project_cost: float,
        ltc_ratio: float,
        interest_rate: float,
        cost_of_capital_rate: float,
        duration_days: float,
    ) -> FinancingResult:
        loan = loan_amount(total_project_cost, ltc_ratio)
        equity = equity_required(total_project_cost, loan)
        interest = self.accrual.accrue(loan, interest_rate, duration_days)
        cost_of_capital = self.accrual.accrue(equity, cost_of_capital_rate, duration_days)

        logger.debug(
            f"Financing: loan ${loan:,.0f}, equity ${equity:,.0f}, "
            f"interest ${interest:,.2f}, cost of capital ${cost_of_capital:,.2f} "
            f"over {duration_days} days"
        )

        return FinancingResult(
            loan_amount=loan,
            equity_required=equity,
            interest_cost=interest,
            cost_of_capital_amount=cost_of_capital,
        )
