# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Constrained numeric types shared by input models."""

from pydantic import Field
from typing_extensions import Annotated

# Monetary amounts, counts and durations are never negative
PositiveFloat = Annotated[float, Field(ge=0)]
PositiveInt = Annotated[int, Field(ge=0)]

# Rates and ratios expressed as decimals (0.085 for 8.5%)
FloatBetween0And1 = Annotated[float, Field(ge=0, le=1)]

__all__ = ["FloatBetween0And1", "PositiveFloat", "PositiveInt"]
