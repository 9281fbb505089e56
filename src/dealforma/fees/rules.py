# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Contract fee rules.

Floor/cap fee formulas applied to the sections 1-5 construction subtotal and
the fixed per-house fee schedule total. All functions are stateless; formula
constants and schedule amounts come from `FeeSettings`, which defaults to the
organization's standard contract terms:

- Builder fee (section 6): the GREATER of $25,000 or 10% of sections 1-5.
- Contingency (section 7): the LESSER of $10,000 or 5% of sections 1-5.
- Fixed per-house fees: flat schedule, with the asset management fee charged
  only on related-party owned deals.
"""

from __future__ import annotations

from typing import Optional

from ..core.primitives import FeeSchedule, FeeSettings, OwnershipRelation


def builder_fee(sections_1_to_5: float, settings: Optional[FeeSettings] = None) -> float:
    """
    Builder fee with a guaranteed floor.

    Args:
        sections_1_to_5: Hard/soft construction subtotal
        settings: Fee formula constants (defaults to standard terms)

    Returns:
        max(floor, sections_1_to_5 * rate)

    Example:
        >>> builder_fee(220_000)
        25000
        >>> builder_fee(400_000)
        40000.0
    """
    settings = settings or FeeSettings()
    return max(settings.builder_fee_floor, sections_1_to_5 * settings.builder_fee_rate)


def contingency(sections_1_to_5: float, settings: Optional[FeeSettings] = None) -> float:
    """
    Contingency reserve with a cap.

    Args:
        sections_1_to_5: Hard/soft construction subtotal
        settings: Fee formula constants (defaults to standard terms)

    Returns:
        min(cap, sections_1_to_5 * rate)
    """
    settings = settings or FeeSettings()
    return min(settings.contingency_cap, sections_1_to_5 * settings.contingency_rate)


def fixed_per_house_fee(
    ownership: OwnershipRelation, schedule: Optional[FeeSchedule] = None
) -> float:
    """Total of the fixed per-house schedule items charged for `ownership`."""
    schedule = schedule or FeeSchedule()
    return schedule.total(ownership)
