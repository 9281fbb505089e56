# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Base Pydantic model with common configuration.

    Immutable, slot-based models for efficient attribute access and reduced
    memory footprint. Every input and result record in dealforma derives from
    this class, so a record is built once per calculation and never mutated.
    """

    model_config = ConfigDict(
        arbitrary_types_allowed=True,
        frozen=True,  # Immutable records; engines never mutate inputs or results
        slots=True,  # Faster attribute access and reduced memory usage
        extra="forbid",  # Catches typos in input field names immediately
    )
