#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Per-element photon mass attenuation table

Stores one energy grid (keV) with four parallel coefficient columns in
cm²/g: photoelectric absorption, coherent (Rayleigh) scattering,
incoherent (Compton) scattering and pair production.  The total is never
stored; it is the sum of the four interpolated effects.

Table Layout
------------
::

    energy          float64[N]   keV, strictly increasing
    photoelectric   float64[N]   cm²/g
    coherent        float64[N]   cm²/g
    compton         float64[N]   cm²/g   (incoherent scattering)
    pair            float64[N]   cm²/g

Interpolation
-------------
Each column is interpolated independently, log-log where both bracketing
samples are positive and linearly otherwise, so that a column which is
identically zero below a threshold (pair production below 1.022 MeV)
queries as zero instead of failing.
"""

from __future__ import annotations

import logging

import numpy as np

from pyfluo.exceptions import NoPhotoelectricDataError
from pyfluo.models.records import EdgeRecord
from pyfluo.tables.base import find_upward_jumps, ingest_table
from pyfluo.utils.interpolation import interpolate_column
from pyfluo.utils.validation import EDGE_JUMP_THRESHOLD

logger = logging.getLogger(__name__)

EFFECTS: tuple[str, ...] = ("photoelectric", "coherent", "compton", "pair")
"""Stored coefficient columns, in summation order for the total."""


class MassAttenuationTable:
    """Energy-tabulated mass attenuation coefficients of one element

    Examples
    --------
    >>> table = MassAttenuationTable()
    >>> table.set([1.0, 10.0], [100.0, 1.0], [1.0, 1.0], [1.0, 1.0])
    >>> round(table.query(10.0 ** 0.5)["photoelectric"], 9)
    10.0
    """

    def __init__(self) -> None:
        self._energy = np.empty(0, dtype="f8")
        self._columns: dict[str, np.ndarray] = {
            name: np.empty(0, dtype="f8") for name in EFFECTS
        }

    # -- ingestion -------------------------------------------------------

    def set(self, energies, photoelectric, coherent, incoherent, pair=None) -> None:
        """Replace the whole table

        Parameters
        ----------
        energies : array_like
            Energy grid (keV), any order, unique values.
        photoelectric, coherent, incoherent : array_like
            Coefficients (cm²/g) aligned with *energies*.
        pair : array_like | None, optional
            Pair-production coefficients.  ``None`` stores zeros.

        Raises
        ------
        InconsistentTableError
            If lengths differ, energies repeat or are non-positive, or a
            coefficient is negative.  The stored table is left unchanged.
        """
        if pair is None:
            pair = np.zeros(np.size(energies), dtype="f8")
        energy, columns = ingest_table(
            "mass_attenuation",
            energies,
            photoelectric=photoelectric,
            coherent=coherent,
            compton=incoherent,
            pair=pair,
        )
        self._energy = energy
        self._columns = columns
        logger.debug(
            "Mass attenuation table set: %d points in [%.6g, %.6g] keV",
            energy.size, energy[0], energy[-1],
        )

    def clear(self) -> None:
        self._energy = np.empty(0, dtype="f8")
        self._columns = {name: np.empty(0, dtype="f8") for name in EFFECTS}

    # -- accessors -------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return self._energy.size == 0

    @property
    def energy(self) -> np.ndarray:
        """Read-only view of the sorted energy grid (keV)."""
        view = self._energy.view()
        view.flags.writeable = False
        return view

    def column(self, name: str) -> np.ndarray:
        """Read-only view of one stored coefficient column."""
        view = self._columns[name].view()
        view.flags.writeable = False
        return view

    @property
    def energy_range(self) -> tuple[float, float]:
        if self.is_empty:
            raise NoPhotoelectricDataError("Mass attenuation table is empty.")
        return float(self._energy[0]), float(self._energy[-1])

    def get(self) -> dict[str, np.ndarray]:
        """Copy of the stored table, including a derived ``total`` column."""
        result = {"energy": self._energy.copy()}
        for name in EFFECTS:
            result[name] = self._columns[name].copy()
        result["total"] = sum(self._columns[name] for name in EFFECTS)
        return result

    # -- queries ---------------------------------------------------------

    def query(self, energy):
        """Interpolated coefficients at one energy or a sequence of energies

        Parameters
        ----------
        energy : float or array_like
            Photon energy (keV) or energies.

        Returns
        -------
        dict
            ``{"energy", "photoelectric", "coherent", "compton", "pair",
            "total"}``; floats for a scalar query, arrays in input order
            otherwise.

        Raises
        ------
        NoPhotoelectricDataError
            If the table is empty.
        OutOfRangeError
            If an energy lies outside the tabulated span.
        """
        if self.is_empty:
            raise NoPhotoelectricDataError("Mass attenuation table is empty.")
        scalar = np.ndim(energy) == 0
        result = {"energy": float(energy) if scalar else np.array(energy, dtype="f8")}
        total = 0.0
        for name in EFFECTS:
            value = interpolate_column(self._energy, self._columns[name], energy)
            result[name] = value
            total = total + value
        result["total"] = total
        return result

    def extract_edge_energies(self, threshold: float = EDGE_JUMP_THRESHOLD) -> list[EdgeRecord]:
        """Locate absorption edges as upward jumps of the photoelectric column

        Parameters
        ----------
        threshold : float, optional
            Minimum relative increase between consecutive samples.

        Returns
        -------
        list[EdgeRecord]
            One record per edge, in increasing energy order.
        """
        indices = find_upward_jumps(self._columns["photoelectric"], threshold)
        return [EdgeRecord(energy=float(self._energy[i]), index=int(i)) for i in indices]
