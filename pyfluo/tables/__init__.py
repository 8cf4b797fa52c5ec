#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Coefficient table stores

* :class:`~pyfluo.tables.attenuation.MassAttenuationTable` - total-effect
  mass attenuation coefficients on one energy grid.
* :class:`~pyfluo.tables.partial.PartialPhotoelectricTable` - per-shell
  partial photoelectric coefficients, each on its own grid.
"""

from __future__ import annotations

from pyfluo.tables.attenuation import MassAttenuationTable
from pyfluo.tables.partial import PartialPhotoelectricTable

__all__ = ["MassAttenuationTable", "PartialPhotoelectricTable"]
