# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Interest accrual conventions.

Two loan structures co-exist in the engines and are deliberately kept as
separate strategies:

- `Actual360Accrual`: a bullet construction loan (and the equity cost of
  capital alongside it) outstanding in full for the project duration.
  Interest = principal * rate * elapsed_days / 360.
- `AverageBalanceMonthlyAccrual`: a revolving draw facility whose average
  outstanding balance is a fraction of the commitment over a term expressed
  in months. Interest = principal * factor * rate * months / 12.

Substituting one for the other changes every financing figure.
`Actual365Accrual` covers investor preferred returns in the distribution
waterfall.
"""

from __future__ import annotations

from typing import ClassVar, Literal, Union

from pydantic import Field
from typing_extensions import Annotated

from ..core.primitives import DayCountConvention, FloatBetween0And1, Model


class Actual360Accrual(Model):
    """
    Actual/360 simple-interest accrual on a fully drawn balance.

    Example:
        >>> Actual360Accrual().accrue(330_565, 0.10, 120)  # doctest: +ELLIPSIS
        11018.83...
    """

    convention: Literal["Actual/360"] = "Actual/360"
    DAYS_IN_YEAR: ClassVar[int] = 360

    @property
    def day_count(self) -> DayCountConvention:
        return DayCountConvention.ACTUAL_360

    def accrue(self, principal: float, annual_rate: float, duration_days: float) -> float:
        """
        Accrued interest for `duration_days` elapsed days.

        Args:
            principal: Outstanding balance
            annual_rate: Annual rate as a decimal
            duration_days: Literal elapsed days

        Returns:
            principal * annual_rate * duration_days / 360, or 0.0 for a zero
            or negative duration
        """
        if duration_days <= 0:
            return 0.0
        return principal * annual_rate * (duration_days / self.DAYS_IN_YEAR)


class Actual365Accrual(Model):
    """Actual/365 simple-interest accrual, used for investor preferred returns."""

    convention: Literal["Actual/365"] = "Actual/365"
    DAYS_IN_YEAR: ClassVar[int] = 365

    @property
    def day_count(self) -> DayCountConvention:
        return DayCountConvention.ACTUAL_365

    def accrue(self, principal: float, annual_rate: float, duration_days: float) -> float:
        """principal * annual_rate * duration_days / 365; 0.0 for non-positive durations."""
        if duration_days <= 0:
            return 0.0
        return principal * annual_rate * (duration_days / self.DAYS_IN_YEAR)


class AverageBalanceMonthlyAccrual(Model):
    """
    Average-balance accrual over a term in months.

    The default `average_balance_factor` of 0.5 models an even draw schedule:
    half the commitment outstanding, on average, over the term.
    """

    convention: Literal["Months/12"] = "Months/12"
    average_balance_factor: FloatBetween0And1 = Field(
        default=0.5, description="Average outstanding balance as a share of principal"
    )

    @property
    def day_count(self) -> DayCountConvention:
        return DayCountConvention.MONTHS_12

    def accrue(self, principal: float, annual_rate: float, duration_months: float) -> float:
        """principal * factor * annual_rate * months / 12; 0.0 for non-positive terms."""
        if duration_months <= 0:
            return 0.0
        return (
            principal * self.average_balance_factor * annual_rate * (duration_months / 12)
        )


# The discriminated union for any accrual strategy
AnyAccrual = Annotated[
    Union[Actual360Accrual, Actual365Accrual, AverageBalanceMonthlyAccrual],
    Field(discriminator="convention"),
]


def accrued_cost(principal: float, annual_rate: float, duration_days: float) -> float:
    """Actual/360 accrued cost; functional spelling of `Actual360Accrual.accrue`."""
    return Actual360Accrual().accrue(principal, annual_rate, duration_days)
