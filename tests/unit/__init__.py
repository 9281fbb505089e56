# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for dealforma components.

Each engine is exercised in isolation against hand-computed reference deals.
"""
