# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Currency rounding helpers for amounts that are paid out to investors."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

_CENT = Decimal("0.01")


def round_currency(amount: Union[int, float]) -> float:
    """
    Round a dollar amount to whole cents, half away from zero.

    The value is converted through its shortest repr so binary float noise
    (e.g. 0.005 stored as 0.00499999...) does not flip the rounding.

    Example:
        >>> round_currency(40_000.004999)
        40000.0
        >>> round_currency(0.125)
        0.13
    """
    return float(Decimal(repr(float(amount))).quantize(_CENT, rounding=ROUND_HALF_UP))
