#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 persistence of element data (requires ``h5py``)
"""

from __future__ import annotations

from pyfluo.converters.hdf5 import read_element_hdf5, write_element_hdf5

__all__ = ["read_element_hdf5", "write_element_hdf5"]
