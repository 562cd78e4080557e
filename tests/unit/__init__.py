# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for Tenura components.

This package contains isolated unit tests that verify individual component
functionality, one engine component at a time.
"""
