# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Core

Primitives, shared calculations and domain errors used by every engine.
"""

from .calculations import FinancialCalculations
from .errors import InvalidRateError
from .primitives import (
    BucketClassifier,
    DayCountConvention,
    FeeLineItem,
    FeeSchedule,
    FeeSettings,
    FloatBetween0And1,
    GlobalSettings,
    Model,
    OwnershipRelation,
    PositiveFloat,
    PositiveInt,
    SensitivityScenarioEnum,
    SensitivitySettings,
    VerdictEnum,
    VerdictSettings,
    WaterfallTierEnum,
)

__all__ = [
    "FinancialCalculations",
    "InvalidRateError",
    "BucketClassifier",
    "DayCountConvention",
    "FeeLineItem",
    "FeeSchedule",
    "FeeSettings",
    "FloatBetween0And1",
    "GlobalSettings",
    "Model",
    "OwnershipRelation",
    "PositiveFloat",
    "PositiveInt",
    "SensitivityScenarioEnum",
    "SensitivitySettings",
    "VerdictEnum",
    "VerdictSettings",
    "WaterfallTierEnum",
]
