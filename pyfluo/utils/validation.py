#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Ingestion-time validation routines for tabulated atomic data

Every validation function raises
:class:`~pyfluo.exceptions.InconsistentTableError` when a constraint is
violated.  The table stores call these functions inside their setters so
that malformed input is rejected at the boundary instead of surfacing
later as a bad interpolation.

Checked Constraints
-------------------
* Parallel sequences must have equal length.
* Energies must be finite, strictly positive and unique.
* Coefficients must be finite and non-negative.
* Atomic number must be in the range 1 ≤ Z ≤ 118.
* Shell yields must lie in [0, 1] and sum to at most one.

Design Note
-----------
Validation functions accept raw NumPy arrays or scalar values, not
table or element instances, so that ``utils`` does not depend on the
higher layers::

    utils ← models ← tables ← atomic ← readers / converters
"""

from __future__ import annotations

import logging

import numpy as np

from pyfluo.exceptions import InconsistentTableError

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

MIN_ATOMIC_NUMBER: int = 1
"""Smallest valid atomic number (hydrogen)."""

MAX_ATOMIC_NUMBER: int = 118
"""Largest valid atomic number (oganesson)."""

PARTIAL_SUM_TOLERANCE: float = 0.01
"""Relative tolerance for the partial-photoelectric vs total check (1 %)."""

YIELD_TOLERANCE: float = 1.0e-6
"""Absolute slack allowed when fluorescence and Coster-Kronig yields sum to one."""

EDGE_JUMP_THRESHOLD: float = 0.05
"""Minimum relative upward jump between consecutive samples flagged as an edge."""


# ---------------------------------------------------------------------------
# Validation functions
# ---------------------------------------------------------------------------

def validate_atomic_number(Z: int) -> None:
    """Verify that *Z* is a valid atomic number

    Raises
    ------
    InconsistentTableError
        If *Z* is outside the range [1, 118].

    Examples
    --------
    >>> validate_atomic_number(26)  # Iron - OK
    >>> validate_atomic_number(0)   # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyfluo.exceptions.InconsistentTableError: ...
    """
    if not (MIN_ATOMIC_NUMBER <= Z <= MAX_ATOMIC_NUMBER):
        raise InconsistentTableError(
            f"Atomic number Z={Z} is outside the valid range "
            f"[{MIN_ATOMIC_NUMBER}, {MAX_ATOMIC_NUMBER}]."
        )


def validate_same_length(label: str, **arrays: np.ndarray) -> None:
    """Verify that every keyword array has the same length

    Parameters
    ----------
    label : str
        Name of the table for error messages.
    **arrays
        Named 1-D arrays that must be parallel.

    Raises
    ------
    InconsistentTableError
        If the lengths differ.
    """
    lengths = {name: int(np.size(arr)) for name, arr in arrays.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{name}={n}" for name, n in lengths.items())
        raise InconsistentTableError(
            f"Sequence length mismatch in '{label}': {detail}."
        )


def validate_energy_grid(energy: np.ndarray, label: str = "energy") -> None:
    """Verify that an energy grid is finite, positive and free of duplicates

    The grid does not have to be sorted; the stores sort it afterwards.

    Raises
    ------
    InconsistentTableError
        If the grid is empty, contains a non-finite or non-positive value,
        or repeats an energy.

    Examples
    --------
    >>> import numpy as np
    >>> validate_energy_grid(np.array([3.0, 1.0, 2.0]))
    >>> validate_energy_grid(np.array([1.0, 1.0]))  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyfluo.exceptions.InconsistentTableError: ...
    """
    arr = np.asarray(energy, dtype="f8")
    if arr.ndim != 1 or arr.size == 0:
        raise InconsistentTableError(f"Array '{label}' must be a non-empty 1-D sequence.")
    if not np.all(np.isfinite(arr)) or np.any(arr <= 0.0):
        first_bad = int(np.argmax(~np.isfinite(arr) | (arr <= 0.0)))
        raise InconsistentTableError(
            f"Array '{label}' must hold finite positive energies.  "
            f"First violation at index {first_bad}: {arr[first_bad]:.6e}."
        )
    ordered = np.sort(arr)
    repeated = np.diff(ordered) == 0.0
    if np.any(repeated):
        dup = float(ordered[int(np.argmax(repeated))])
        raise InconsistentTableError(
            f"Array '{label}' repeats the energy {dup:.6e}; energies must be unique."
        )
    logger.debug("Array '%s' (%d points) passed energy-grid checks.", label, arr.size)


def validate_non_negative(values: np.ndarray, label: str = "values") -> None:
    """Verify that all values in the array are finite and non-negative

    Raises
    ------
    InconsistentTableError
        If any value is negative or not finite.

    Examples
    --------
    >>> import numpy as np
    >>> validate_non_negative(np.array([0.0, 1.0, 2.0]))
    >>> validate_non_negative(np.array([-1.0, 2.0]))  # doctest: +ELLIPSIS
    Traceback (most recent call last):
        ...
    pyfluo.exceptions.InconsistentTableError: ...
    """
    arr = np.asarray(values, dtype="f8")
    if arr.size == 0:
        return
    bad = ~np.isfinite(arr) | (arr < 0.0)
    if np.any(bad):
        first_bad = int(np.argmax(bad))
        raise InconsistentTableError(
            f"Array '{label}' contains negative or non-finite value(s).  "
            f"First violation at index {first_bad}: {arr[first_bad]:.6e}."
        )


def validate_yields(constants: dict[str, float], label: str = "shell") -> None:
    """Verify fluorescence and Coster-Kronig yields of one shell

    Every yield must lie in [0, 1] and their sum must not exceed one by
    more than :data:`YIELD_TOLERANCE`.

    Raises
    ------
    InconsistentTableError
        If any yield is out of range or the sum exceeds one.
    """
    for key, value in constants.items():
        if not (0.0 <= value <= 1.0):
            raise InconsistentTableError(
                f"Yield '{key}' of {label} is {value:.6f}, expected within [0, 1]."
            )
    total = float(sum(constants.values()))
    if total > 1.0 + YIELD_TOLERANCE:
        raise InconsistentTableError(
            f"Yields of {label} sum to {total:.6f}, expected at most 1."
        )
