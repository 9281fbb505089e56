# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Core Primitives

Essential building blocks shared by every engine: the immutable base model,
constrained numeric types, enums, threshold classification and settings.
"""

from .classification import BucketClassifier
from .enums import (
    DealRatingEnum,
    DayCountConvention,
    OwnershipRelation,
    SensitivityScenarioEnum,
    VerdictEnum,
    WaterfallTierEnum,
)
from .model import Model
from .settings import (
    FeeLineItem,
    FeeSchedule,
    FeeSettings,
    GlobalSettings,
    SensitivitySettings,
    VerdictSettings,
)
from .types import FloatBetween0And1, PositiveFloat, PositiveInt

__all__ = [
    # Core models
    "Model",
    "BucketClassifier",
    # Settings
    "GlobalSettings",
    "FeeSettings",
    "FeeSchedule",
    "FeeLineItem",
    "VerdictSettings",
    "SensitivitySettings",
    # Enums
    "DealRatingEnum",
    "DayCountConvention",
    "OwnershipRelation",
    "SensitivityScenarioEnum",
    "VerdictEnum",
    "WaterfallTierEnum",
    # Types
    "FloatBetween0And1",
    "PositiveFloat",
    "PositiveInt",
]
