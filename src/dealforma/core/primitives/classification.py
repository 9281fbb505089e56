# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Threshold-table classification.

A single generic classifier maps a continuous metric onto an ordered set of
labels. Profit and land verdicts and the quick deal rating are all instances
of it, parameterized by their own threshold tables.
"""

from __future__ import annotations

from bisect import bisect_right
from typing import List, Tuple, Union

from pydantic import Field, field_validator

from .enums import DealRatingEnum, VerdictEnum
from .model import Model

BucketLabel = Union[VerdictEnum, DealRatingEnum]


class BucketClassifier(Model):
    """
    Ordered `(lower_bound, label)` bucket table.

    Buckets are inclusive-lower / exclusive-upper. Values below the first
    bound fall into `floor_label`.

    Example:
        >>> classifier = BucketClassifier(
        ...     floor_label=VerdictEnum.NO_GO,
        ...     thresholds=[(0.05, VerdictEnum.CAUTION), (0.10, VerdictEnum.STRONG)],
        ... )
        >>> classifier.classify(0.05)
        <VerdictEnum.CAUTION: 'CAUTION'>
    """

    floor_label: BucketLabel = Field(
        ..., description="Label for values below the first threshold"
    )
    thresholds: List[Tuple[float, BucketLabel]] = Field(
        default_factory=list,
        description="Strictly ascending (lower_bound, label) pairs",
    )

    @field_validator("thresholds")
    @classmethod
    def validate_ascending(
        cls, v: List[Tuple[float, BucketLabel]]
    ) -> List[Tuple[float, BucketLabel]]:
        """Bounds must be strictly ascending for the lookup to be well defined."""
        bounds = [bound for bound, _ in v]
        if any(lo >= hi for lo, hi in zip(bounds, bounds[1:])):
            raise ValueError(f"Threshold bounds must be strictly ascending, got {bounds}")
        return v

    @property
    def bounds(self) -> List[float]:
        return [bound for bound, _ in self.thresholds]

    @property
    def labels(self) -> List[BucketLabel]:
        """All labels, lowest bucket first."""
        return [self.floor_label] + [label for _, label in self.thresholds]

    def classify(self, value: float) -> BucketLabel:
        """Return the label of the bucket containing `value`."""
        return self.labels[bisect_right(self.bounds, value)]
