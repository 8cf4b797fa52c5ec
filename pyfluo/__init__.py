#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyFluo - X-ray fluorescence line data from EPICS photon and atomic data

Given a photon energy, PyFluo answers which characteristic X-ray lines an
element emits, with which energies and per-absorbed-photon rates:

1. **Partial photoelectric tables** give the initial vacancy
   distribution over shells.
2. **Relaxation data** (radiative, Auger and Coster-Kronig transitions)
   turn each vacancy into X-ray lines, cascading vacancies to shallower
   shells.

Modules
-------
atomic
    :class:`Element`, the shell relaxation model, vacancy distribution,
    line synthesis and the EPICS factory.
tables
    Mass attenuation and partial photoelectric coefficient stores.
readers
    ENDF-format readers for EADL and EPDL datasets.
converters
    HDF5 persistence of elements.
io
    Download of EADL and EPDL files from IAEA.
utils
    Shell vocabulary, interpolation, parsing and validation helpers.

Examples
--------
>>> from pyfluo import EADLReader, EPDLReader, element_from_epics
>>> cu = element_from_epics(
...     EADLReader().read("eadl/EADL.ZA029000.endf"),
...     EPDLReader().read("epdl/EPDL.ZA029000.endf"),
... )
>>> lines = cu.get_photoelectric_x_ray_lines(20.0)
>>> round(lines["K"]["KL3"]["energy"], 2)
8.05
"""

from __future__ import annotations

__version__ = "0.1.0"
__author__ = "Melek Derman"

from pyfluo.atomic.element import Element
from pyfluo.atomic.factory import element_from_epics
from pyfluo.atomic.shell import Shell
from pyfluo.readers.eadl import EADLReader
from pyfluo.readers.epdl import EPDLReader
from pyfluo.converters.hdf5 import read_element_hdf5, write_element_hdf5
from pyfluo.exceptions import (
    CascadeError,
    ConversionError,
    DomainError,
    DownloadError,
    FileFormatError,
    InconsistentTableError,
    NoPhotoelectricDataError,
    OutOfRangeError,
    ParseError,
    PyFluoError,
    UnknownShellError,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Element",
    "Shell",
    "element_from_epics",
    # Readers
    "EADLReader",
    "EPDLReader",
    # Persistence
    "read_element_hdf5",
    "write_element_hdf5",
    # Exceptions
    "PyFluoError",
    "OutOfRangeError",
    "DomainError",
    "InconsistentTableError",
    "CascadeError",
    "NoPhotoelectricDataError",
    "UnknownShellError",
    "FileFormatError",
    "ParseError",
    "ConversionError",
    "DownloadError",
]
