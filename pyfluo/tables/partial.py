#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Per-shell partial photoelectric mass attenuation tables

Each shell carries its own energy grid, because EPDL tabulates a
subshell cross section only from that subshell's binding energy upward.
Shell labels come from the closed vocabulary in
:mod:`pyfluo.utils.constants`, plus the ``"REST"`` bucket that collects
the subshells not tabulated individually.

A query returns values only for the shells whose grid spans the query
energy: a missing key means "no data at this energy", which callers must
be able to tell apart from a tabulated zero.
"""

from __future__ import annotations

import logging

import numpy as np

from pyfluo.exceptions import UnknownShellError
from pyfluo.models.records import ConsistencyReport, ConsistencyViolation, EdgeRecord
from pyfluo.tables.attenuation import MassAttenuationTable
from pyfluo.tables.base import find_upward_jumps, ingest_table
from pyfluo.utils.constants import shell_index, sort_shells
from pyfluo.utils.interpolation import interpolate_column
from pyfluo.utils.validation import EDGE_JUMP_THRESHOLD, PARTIAL_SUM_TOLERANCE

logger = logging.getLogger(__name__)


class PartialPhotoelectricTable:
    """Partial photoelectric coefficients (cm²/g) keyed by shell label"""

    def __init__(self) -> None:
        self._energy: dict[str, np.ndarray] = {}
        self._value: dict[str, np.ndarray] = {}

    # -- ingestion -------------------------------------------------------

    def set(self, shell: str, energies, values) -> None:
        """Add or replace the table of one shell

        Raises
        ------
        UnknownShellError
            If *shell* is not a shell label or ``"REST"``.
        InconsistentTableError
            If the sequences are malformed (see
            :func:`~pyfluo.tables.base.ingest_table`).
        """
        shell_index(shell)
        energy, columns = ingest_table(f"partial_photoelectric/{shell}", energies, value=values)
        self._energy[shell] = energy
        self._value[shell] = columns["value"]
        logger.debug(
            "Partial photoelectric table for %s set: %d points from %.6g keV",
            shell, energy.size, energy[0],
        )

    def remove(self, shell: str) -> None:
        self._require(shell)
        del self._energy[shell]
        del self._value[shell]

    def clear(self) -> None:
        self._energy.clear()
        self._value.clear()

    # -- accessors -------------------------------------------------------

    @property
    def shells(self) -> list[str]:
        """Shells with a table, deepest first."""
        return sort_shells(self._energy)

    @property
    def is_empty(self) -> bool:
        return not self._energy

    def __contains__(self, shell: str) -> bool:
        return shell in self._energy

    def _require(self, shell: str) -> None:
        if shell not in self._energy:
            raise UnknownShellError(f"No partial photoelectric data for shell {shell!r}")

    def get(self, shell: str) -> tuple[np.ndarray, np.ndarray]:
        """Copies of the ``(energy, value)`` arrays of one shell."""
        self._require(shell)
        return self._energy[shell].copy(), self._value[shell].copy()

    # -- queries ---------------------------------------------------------

    def covers(self, shell: str, energy: float) -> bool:
        self._require(shell)
        grid = self._energy[shell]
        return bool(grid[0] <= energy <= grid[-1])

    def query(self, energy: float) -> dict[str, float]:
        """Interpolated coefficient of every shell whose grid spans *energy*"""
        result: dict[str, float] = {}
        for shell in self.shells:
            grid = self._energy[shell]
            if grid[0] <= energy <= grid[-1]:
                result[shell] = interpolate_column(
                    self._energy[shell], self._value[shell], float(energy)
                )
        return result

    def sum_at(self, energies) -> np.ndarray:
        """Sum over shells at each energy, shells without coverage adding zero"""
        xs = np.atleast_1d(np.asarray(energies, dtype="f8"))
        total = np.zeros(xs.shape, dtype="f8")
        for shell in self._energy:
            grid = self._energy[shell]
            inside = (xs >= grid[0]) & (xs <= grid[-1])
            if np.any(inside):
                total[inside] += interpolate_column(grid, self._value[shell], xs[inside])
        return total

    def extract_edge_energies(
        self,
        threshold: float = EDGE_JUMP_THRESHOLD,
    ) -> dict[str, EdgeRecord]:
        """Locate the absorption edge of every shell table

        The edge is the largest upward jump between consecutive samples.
        A table with no internal jump starts at its edge, so its first
        positive sample is reported instead.

        Returns
        -------
        dict[str, EdgeRecord]
            Edge per shell, deepest shell first.
        """
        edges: dict[str, EdgeRecord] = {}
        for shell in self.shells:
            energy = self._energy[shell]
            value = self._value[shell]
            jumps = find_upward_jumps(value, threshold)
            if jumps.size:
                rise = value[jumps] - value[jumps - 1]
                index = int(jumps[np.argmax(rise)])
            else:
                positive = np.flatnonzero(value > 0.0)
                if positive.size == 0:
                    logger.warning("Partial photoelectric table of %s is all zero.", shell)
                    continue
                index = int(positive[0])
            edges[shell] = EdgeRecord(energy=float(energy[index]), index=index, shell=shell)
        return edges

    def check_consistency(
        self,
        total: MassAttenuationTable,
        tolerance: float = PARTIAL_SUM_TOLERANCE,
    ) -> ConsistencyReport:
        """Compare the sum of partial coefficients with the total photoelectric

        Every energy of every shell table and every energy of *total* is
        checked inside the span of *total*; the partial sum may not exceed
        the total by more than the relative *tolerance*.

        Returns
        -------
        ConsistencyReport
            ``ok`` is ``True`` when no sampled energy violates the bound.
            An empty total table yields an ``ok`` report with zero checks.
        """
        report = ConsistencyReport(tolerance=tolerance)
        if total.is_empty or self.is_empty:
            return report

        e_min, e_max = total.energy_range
        grid = np.unique(np.concatenate([*self._energy.values(), total.energy]))
        grid = grid[(grid >= e_min) & (grid <= e_max)]
        if grid.size == 0:
            return report

        partial_sum = self.sum_at(grid)
        photo = np.atleast_1d(total.query(grid)["photoelectric"])
        bad = partial_sum > photo * (1.0 + tolerance)
        report.checked = int(grid.size)
        report.violations = [
            ConsistencyViolation(energy=float(e), partial_sum=float(p), total=float(t))
            for e, p, t in zip(grid[bad], partial_sum[bad], photo[bad])
        ]
        if not report.ok:
            logger.warning("Partial photoelectric check failed: %s", report.summary())
        return report
