# Tenura Test Suite
# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Tenura test suite.

This package contains tests for all Tenura components, organized into unit
and integration test categories.
"""
