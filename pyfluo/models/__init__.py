#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed EPICS data and table diagnostics

All models are plain ``dataclasses`` carrying NumPy arrays and scalar
metadata.
"""

from __future__ import annotations

from pyfluo.models.records import (
    ConsistencyReport,
    ConsistencyViolation,
    CrossSectionRecord,
    EADLDataset,
    EdgeRecord,
    EPDLDataset,
    SubshellRelaxation,
    SubshellTransition,
)

__all__ = [
    "ConsistencyReport",
    "ConsistencyViolation",
    "CrossSectionRecord",
    "EADLDataset",
    "EdgeRecord",
    "EPDLDataset",
    "SubshellRelaxation",
    "SubshellTransition",
]
