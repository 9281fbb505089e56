# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Domain errors raised by the calculation engines."""


class InvalidRateError(ValueError):
    """
    A rate combination makes a closed-form solve undefined.

    Raised when a solved sale price would require dividing by a non-positive
    net-of-cost share of revenue, e.g. a selling cost rate of 100% for the
    breakeven solve or of 95% or more for the 5% margin solve.
    """

    def __init__(self, message: str, *, selling_cost_rate: float, target_margin: float):
        super().__init__(message)
        self.selling_cost_rate = selling_cost_rate
        self.target_margin = target_margin
