# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Integration tests for Tenura components.

This package contains integration tests that run full projections through
the engine and verify the interaction between its components.
"""
