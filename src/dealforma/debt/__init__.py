# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Debt

Interest accrual conventions and loan-to-cost financing.
"""

from .accrual import (
    Actual360Accrual,
    Actual365Accrual,
    AnyAccrual,
    AverageBalanceMonthlyAccrual,
    accrued_cost,
)
from .financing import (
    FinancingCalculator,
    FinancingResult,
    equity_required,
    loan_amount,
)

__all__ = [
    "Actual360Accrual",
    "Actual365Accrual",
    "AverageBalanceMonthlyAccrual",
    "AnyAccrual",
    "accrued_cost",
    "FinancingCalculator",
    "FinancingResult",
    "equity_required",
    "loan_amount",
]
