# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
dealforma Fees

Contract fee formulas (builder fee floor, contingency cap) and the fixed
per-house fee schedule.
"""

from ..core.primitives import FeeLineItem, FeeSchedule, FeeSettings, OwnershipRelation
from .rules import builder_fee, contingency, fixed_per_house_fee

__all__ = [
    "FeeLineItem",
    "FeeSchedule",
    "FeeSettings",
    "OwnershipRelation",
    "builder_fee",
    "contingency",
    "fixed_per_house_fee",
]
