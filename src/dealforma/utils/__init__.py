# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from .money import round_currency

__all__ = ["round_currency"]
