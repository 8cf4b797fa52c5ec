#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
ENDF-format readers for EPICS datasets

* :class:`~pyfluo.readers.eadl.EADLReader` - Evaluated Atomic Data Library
* :class:`~pyfluo.readers.epdl.EPDLReader` - Evaluated Photon Data Library

Both share the :class:`~pyfluo.readers.base.BaseReader` interface and
require the ``endf`` package.
"""

from __future__ import annotations

from pyfluo.readers.eadl import EADLReader
from pyfluo.readers.epdl import EPDLReader

__all__ = ["EADLReader", "EPDLReader"]
