#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Ingestion helpers shared by the coefficient table stores

Both stores accept unsorted parallel sequences, validate them once, and
keep a sorted private copy.  Queries never re-validate.
"""

from __future__ import annotations

import logging

import numpy as np

from pyfluo.utils.validation import (
    validate_energy_grid,
    validate_non_negative,
    validate_same_length,
)

logger = logging.getLogger(__name__)


def ingest_table(
    label: str,
    energies,
    **columns,
) -> tuple[np.ndarray, dict[str, np.ndarray]]:
    """Validate parallel sequences and return them sorted by energy

    Parameters
    ----------
    label : str
        Table name used in error messages.
    energies : array_like
        Energy grid (keV), any order.
    **columns : array_like
        Coefficient sequences aligned with *energies*.

    Returns
    -------
    (numpy.ndarray, dict[str, numpy.ndarray])
        Sorted energy grid and the identically permuted columns, all
        freshly allocated ``float64`` arrays.

    Raises
    ------
    InconsistentTableError
        If lengths differ, energies are invalid or repeated, or a
        coefficient is negative.
    """
    energy = np.array(energies, dtype="f8", ndmin=1)
    arrays = {name: np.array(col, dtype="f8", ndmin=1) for name, col in columns.items()}

    validate_same_length(label, energy=energy, **arrays)
    validate_energy_grid(energy, label=f"{label}/energy")
    for name, arr in arrays.items():
        validate_non_negative(arr, label=f"{label}/{name}")

    order = np.argsort(energy, kind="stable")
    if np.any(order != np.arange(energy.size)):
        logger.debug("Sorting '%s' table on ingestion (%d points).", label, energy.size)
    return energy[order], {name: arr[order] for name, arr in arrays.items()}


def find_upward_jumps(values: np.ndarray, threshold: float) -> np.ndarray:
    """Indices *i* where ``values[i] > values[i - 1] * (1 + threshold)``

    Photoelectric coefficients fall with energy between edges, so any
    sizeable increase between consecutive samples marks an absorption
    edge at sample *i*.
    """
    vals = np.asarray(values, dtype="f8")
    if vals.size < 2:
        return np.empty(0, dtype="i8")
    previous = vals[:-1]
    jumps = vals[1:] > previous * (1.0 + threshold)
    # a rise from exactly zero is an edge as well
    jumps |= (previous == 0.0) & (vals[1:] > 0.0)
    return np.flatnonzero(jumps) + 1
