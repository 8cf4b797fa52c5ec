#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared utilities: shell vocabulary, interpolation, parsing and validation

This sub-package centralises the low-level helpers used by the table
stores, the atomic layer and the readers so that no logic is duplicated
across them.
"""

from __future__ import annotations
