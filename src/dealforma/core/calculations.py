# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Financial calculation functions.

Contains static methods for ratio and schedule metrics shared by the
engines. These functions are pure (math-only); engines delegate to them so
every guarded ratio follows the same zero-denominator rule.
"""

import math


class FinancialCalculations:
    """
    Pure mathematical helpers for engine roll-ups.

    Static methods, independent of any engine's inputs or business logic.
    """

    @staticmethod
    def safe_ratio(numerator: float, denominator: float) -> float:
        """
        Divide, returning 0.0 when the denominator is not positive.

        The 0.0 is a "not applicable" sentinel (e.g. a margin on a deal with
        no sale price yet), not a genuine zero result.

        Example:
            ```python
            FinancialCalculations.safe_ratio(3_719.97, 450_000)  # 0.00827
            FinancialCalculations.safe_ratio(3_719.97, 0)  # 0.0
            ```
        """
        if denominator > 0:
            return numerator / denominator
        return 0.0

    @staticmethod
    def equity_multiple(equity: float, profit: float) -> float:
        """(equity + profit) / equity, or 0.0 without positive equity."""
        if equity > 0:
            return (equity + profit) / equity
        return 0.0

    @staticmethod
    def periods_to_absorb(quantity: float, per_period: float) -> int:
        """
        Whole periods needed to absorb `quantity` at `per_period` pace.

        Returns 0 when the pace is not positive.
        """
        if per_period > 0:
            return math.ceil(quantity / per_period)
        return 0
