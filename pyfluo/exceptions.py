#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Custom exception hierarchy for the PyFluo package

All exceptions raised by PyFluo inherit from :class:`PyFluoError`, making it
possible to catch every library-specific error with a single ``except`` clause
while still allowing fine-grained handling when needed.

Exception Hierarchy
-------------------
::

    PyFluoError
    ├── OutOfRangeError           # Query outside a table's energy span
    ├── DomainError               # Non-positive argument to a logarithm
    ├── InconsistentTableError    # Malformed or mutually inconsistent tables
    │   └── CascadeError          # Transition graph violates shell order
    ├── NoPhotoelectricDataError  # Vacancy computation without absorption data
    ├── UnknownShellError         # Shell label never populated / not known
    ├── FileFormatError           # Wrong file type or name pattern
    ├── ParseError                # Malformed ENDF section
    ├── ConversionError           # HDF5 read/write failures
    └── DownloadError             # EPICS files could not be fetched
"""

from __future__ import annotations


class PyFluoError(Exception):
    """Base exception for all PyFluo errors

    Every exception raised by PyFluo is a subclass of this type.
    Catching ``PyFluoError`` therefore catches any library-specific failure
    while still allowing standard Python exceptions (``TypeError``, etc.)
    to propagate normally.
    """


class OutOfRangeError(PyFluoError, ValueError):
    """Raised when a query value lies outside a tabulated energy span

    Tables are never extrapolated.  The message carries the query value
    and the ``[min, max]`` span of the table.
    """


class DomainError(PyFluoError, ValueError):
    """Raised when a logarithmic computation receives a non-positive value

    Log-log interpolation needs a strictly positive abscissa and strictly
    positive bracketing ordinates.
    """


class InconsistentTableError(PyFluoError, ValueError):
    """Raised when a table fails an ingestion-time consistency check

    This covers mismatched sequence lengths on a bulk setter, duplicated
    or non-finite energies, negative coefficients, and partial
    photoelectric coefficients whose sum exceeds the total photoelectric
    coefficient beyond tolerance.

    Parameters
    ----------
    message : str
        Description of the failed check, including the table name and
        the offending values.
    """


class CascadeError(InconsistentTableError):
    """Raised when cascade data moves a vacancy to a deeper or equal shell

    Vacancy transfers must always go to a strictly shallower shell.  A
    transition graph that violates this order could loop forever and is
    rejected instead.
    """


class NoPhotoelectricDataError(PyFluoError):
    """Raised when a vacancy distribution cannot be computed

    Either no partial photoelectric table has been set, or the total
    photoelectric coefficient at the requested energy is zero.
    """


class UnknownShellError(PyFluoError, KeyError):
    """Raised for a shell label that is not known or was never populated"""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message
        return str(self.args[0]) if self.args else ""


class FileFormatError(PyFluoError):
    """Raised when a file does not match the expected EPICS/ENDF format

    This is raised *before* full parsing begins, for example when the
    filename pattern does not match ``ZA{ZZZ}000`` or when the file
    cannot be opened with the ``endf`` library.
    """


class ParseError(PyFluoError):
    """Raised when an ENDF section contains malformed content"""


class ConversionError(PyFluoError):
    """Raised when reading or writing an element HDF5 file fails

    This covers an existing output file without ``overwrite=True``,
    permission errors, and missing groups in a file being read back.
    """


class DownloadError(PyFluoError):
    """Raised when EPICS files cannot be fetched from the IAEA server

    Covers missing optional dependencies (``requests``,
    ``beautifulsoup4``), HTTP errors, timeouts and index pages without
    any element links.
    """
