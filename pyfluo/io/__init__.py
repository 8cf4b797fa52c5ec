#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Retrieval of EPICS ENDF files from the IAEA Nuclear Data Services

See :mod:`pyfluo.io.download`.  Requires the optional ``requests`` and
``beautifulsoup4`` packages.
"""

from __future__ import annotations
