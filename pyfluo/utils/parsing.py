#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared string and file-name parsing helpers

Two small families of helpers live here so that neither the readers nor
the configuration layer that feeds :class:`~pyfluo.atomic.element.Element`
duplicates them:

* EPICS file-name parsing (atomic number from ``ZA{ZZZ}000``).
* Delimited-value parsing: turning a configuration string such as
  ``"[10.0, 12.5, , 20]"`` into a list of numbers, with a caller-supplied
  fill value for entries that are empty or cannot be converted.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Callable, TypeVar

from pyfluo.exceptions import FileFormatError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ENDF_FILENAME_PATTERN: re.Pattern[str] = re.compile(r"ZA(\d{3})000")
"""Compiled regex that extracts the atomic number *Z* from an ENDF file name.

The pattern matches the ``ZA{ZZZ}000`` portion of canonical EPICS file names
such as ``EADL.ZA026000.endf`` (iron, Z = 26).
"""

_VALUE_SEPARATORS: re.Pattern[str] = re.compile(r"[,;\s]+")


# ---------------------------------------------------------------------------
# File-path helpers
# ---------------------------------------------------------------------------

def extract_atomic_number_from_path(path: Path | str) -> int:
    """Extract the atomic number Z from an EPICS/ENDF file path

    Parameters
    ----------
    path : Path | str
        Path to an ENDF file whose name contains the pattern
        ``ZA{ZZZ}000``, e.g. ``EPDL.ZA026000.endf``.

    Returns
    -------
    int
        Atomic number *Z*.

    Raises
    ------
    FileFormatError
        If the filename does not match the expected pattern.

    Examples
    --------
    >>> extract_atomic_number_from_path(Path("EADL.ZA001000.endf"))
    1
    """
    name = Path(path).name
    m = ENDF_FILENAME_PATTERN.search(name)
    if m is None:
        raise FileFormatError(
            f"File name {name!r} does not match the expected EPICS "
            f"pattern 'ZA{{ZZZ}}000'.  Cannot determine atomic number."
        )
    return int(m.group(1))


# ---------------------------------------------------------------------------
# Delimited values
# ---------------------------------------------------------------------------

def _split_values(content: str) -> list[str]:
    text = content.strip()
    if text[:1] in "[(" and text[-1:] in "])":
        text = text[1:-1]
    if not text.strip():
        return []
    if "," in text or ";" in text:
        # keep empty slots between consecutive commas
        return [item.strip() for item in re.split(r"[,;]", text)]
    return _VALUE_SEPARATORS.split(text.strip())


def parse_multiple_values(
    content: str | None,
    default: T,
    n: int | None = None,
    kind: Callable[[str], T] = float,
) -> list[T]:
    """Parse a delimited string into a list of values

    Parameters
    ----------
    content : str | None
        Text such as ``"1.0, 2.0, 3.0"``, ``"[1 2 3]"`` or ``"K, L, M"``.
        ``None`` is treated as an empty string.
    default : T
        Value substituted for empty entries and for entries *kind* cannot
        convert.
    n : int | None, optional
        When given, the result is padded with *default* or truncated to
        exactly *n* entries.
    kind : callable, optional
        Converter applied to each entry (``float``, ``int``, ``str``, …).
        Default ``float``.

    Returns
    -------
    list
        Converted values in input order.

    Examples
    --------
    >>> parse_multiple_values("10.0, , 12.5", -1.0)
    [10.0, -1.0, 12.5]
    >>> parse_multiple_values("[1 2]", 0, n=3, kind=int)
    [1, 2, 0]
    """
    values: list[T] = []
    for item in _split_values(content or ""):
        if not item:
            values.append(default)
            continue
        try:
            values.append(kind(item))
        except (TypeError, ValueError):
            logger.warning("Cannot convert %r, using default %r.", item, default)
            values.append(default)

    if n is not None:
        if len(values) < n:
            values.extend([default] * (n - len(values)))
        else:
            values = values[:n]
    return values
