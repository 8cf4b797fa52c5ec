#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Per-element X-ray fluorescence data container

:class:`Element` gathers everything needed to turn an absorbed photon
into characteristic X-ray lines:

* identity: name, atomic number, atomic mass, density;
* binding energies per shell (keV);
* the mass attenuation table (:class:`~pyfluo.tables.MassAttenuationTable`);
* the partial photoelectric tables
  (:class:`~pyfluo.tables.PartialPhotoelectricTable`);
* one :class:`~pyfluo.atomic.shell.Shell` relaxation model per shell.

Queries combine them through
:func:`~pyfluo.atomic.vacancy.initial_photoelectric_vacancy_distribution`
and :func:`~pyfluo.atomic.lines.synthesize_lines`.

Name and atomic number are fixed once constructed; :meth:`Element.derive`
returns an independent copy with a new identity.  Setters reject
malformed input immediately and leave the element unchanged.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from typing import Mapping, Sequence

import numpy as np

from pyfluo.atomic.lines import line_energy, synthesize_lines
from pyfluo.atomic.shell import Shell
from pyfluo.atomic.vacancy import initial_photoelectric_vacancy_distribution
from pyfluo.exceptions import InconsistentTableError, UnknownShellError
from pyfluo.models.records import ConsistencyReport, EdgeRecord
from pyfluo.tables.attenuation import MassAttenuationTable
from pyfluo.tables.partial import PartialPhotoelectricTable
from pyfluo.utils.constants import (
    DEFAULT_DENSITY,
    REST_SHELL,
    SHELL_FAMILIES,
    shell_family,
    shell_index,
    sort_shells,
)
from pyfluo.utils.validation import (
    EDGE_JUMP_THRESHOLD,
    PARTIAL_SUM_TOLERANCE,
    validate_atomic_number,
)

logger = logging.getLogger(__name__)

EDGE_MATCH_TOLERANCE: float = 0.05
"""Maximum relative distance between an edge and the binding energy it is
labelled with."""


def _validate_positive(value: float, what: str) -> float:
    value = float(value)
    if not np.isfinite(value) or value <= 0.0:
        raise InconsistentTableError(f"{what} must be positive, got {value!r}.")
    return value


class Element:
    """X-ray fluorescence data of one chemical element

    Parameters
    ----------
    name : str
        Element name or symbol, e.g. ``"Cu"``.
    atomic_number : int
        Z, within 1–118.
    atomic_mass : float, optional
        Atomic mass in g/mol.  ``0.0`` means unknown.
    density : float, optional
        Density in g/cm³ (default :data:`~pyfluo.utils.constants.DEFAULT_DENSITY`).

    Examples
    --------
    >>> cu = Element("Cu", 29, atomic_mass=63.546)
    >>> cu.set_binding_energies({"K": 8.979, "L3": 0.933})
    >>> cu.get_excited_shells(5.0)
    ['L3']
    """

    def __init__(
        self,
        name: str,
        atomic_number: int,
        *,
        atomic_mass: float = 0.0,
        density: float = DEFAULT_DENSITY,
    ) -> None:
        validate_atomic_number(atomic_number)
        self._name = str(name)
        self._atomic_number = int(atomic_number)
        self._atomic_mass = 0.0
        if atomic_mass:
            self.atomic_mass = atomic_mass
        self._density = _validate_positive(density, "Density")

        self._binding: dict[str, float] = {}
        self._attenuation = MassAttenuationTable()
        self._partial = PartialPhotoelectricTable()
        self._shells: dict[str, Shell] = {}
        self._line_cache: dict[str, dict[str, dict[str, float]]] = {}

    def __repr__(self) -> str:
        return (
            f"Element({self._name!r}, Z={self._atomic_number}, "
            f"shells={len(self._shells)}, partial={len(self._partial.shells)})"
        )

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self._name

    @property
    def atomic_number(self) -> int:
        return self._atomic_number

    @property
    def atomic_mass(self) -> float:
        """Atomic mass in g/mol (``0.0`` when unknown)."""
        return self._atomic_mass

    @atomic_mass.setter
    def atomic_mass(self, value: float) -> None:
        self._atomic_mass = _validate_positive(value, "Atomic mass")

    @property
    def density(self) -> float:
        """Density in g/cm³."""
        return self._density

    @density.setter
    def density(self, value: float) -> None:
        self._density = _validate_positive(value, "Density")

    def derive(self, *, name: str | None = None, atomic_number: int | None = None) -> Element:
        """Return an independent deep copy, optionally with a new identity

        Parameters
        ----------
        name : str, optional
            Name of the copy (default: this element's name).
        atomic_number : int, optional
            Atomic number of the copy (default: this element's Z).

        Returns
        -------
        Element
            A copy sharing no mutable state with this element.
        """
        if atomic_number is not None:
            validate_atomic_number(atomic_number)
        twin = copy.deepcopy(self)
        if name is not None:
            twin._name = str(name)
        if atomic_number is not None:
            twin._atomic_number = int(atomic_number)
        return twin

    # ------------------------------------------------------------------
    # Binding energies
    # ------------------------------------------------------------------

    def set_binding_energies(
        self,
        labels: Mapping[str, float] | Sequence[str],
        energies: Sequence[float] | None = None,
    ) -> None:
        """Replace the binding energies (keV)

        Accepts either a ``{shell: energy}`` mapping or parallel
        sequences of labels and energies.

        Raises
        ------
        UnknownShellError
            If a label is not a shell label.
        InconsistentTableError
            If the sequences differ in length or an energy is negative.
        """
        if isinstance(labels, Mapping):
            items = list(labels.items())
        else:
            labels = list(labels)
            energies = [] if energies is None else list(energies)
            if len(labels) != len(energies):
                raise InconsistentTableError(
                    f"Sequence length mismatch: {len(labels)} labels, "
                    f"{len(energies)} binding energies."
                )
            items = list(zip(labels, energies))

        binding: dict[str, float] = {}
        for label, value in items:
            shell_index(label)
            if label == REST_SHELL:
                raise UnknownShellError("The REST bucket has no binding energy.")
            value = float(value)
            if not np.isfinite(value) or value < 0.0:
                raise InconsistentTableError(
                    f"Binding energy of {label} must be non-negative, got {value!r}."
                )
            binding[label] = value
        self._binding = {label: binding[label] for label in sort_shells(binding)}
        self._line_cache = {}
        logger.debug("%s: %d binding energies set", self._name, len(binding))

    def get_binding_energies(self) -> dict[str, float]:
        return dict(self._binding)

    def get_excited_shells(self, energy: float) -> list[str]:
        """Shells that a photon of *energy* keV can ionize, deepest first"""
        return [
            label for label, binding in self._binding.items()
            if 0.0 < binding <= energy
        ]

    # ------------------------------------------------------------------
    # Mass attenuation
    # ------------------------------------------------------------------

    def set_mass_attenuation_coefficients(
        self,
        energies,
        photoelectric,
        coherent,
        incoherent,
        pair=None,
        *,
        validate: bool = True,
        tolerance: float = PARTIAL_SUM_TOLERANCE,
    ) -> None:
        """Replace the mass attenuation table (keV, cm²/g)

        ``pair=None`` stores zero pair production.  Any previously derived
        total is overwritten.

        Parameters
        ----------
        validate : bool, optional
            Check the stored partial photoelectric tables against the new
            photoelectric column (default ``True``).
        tolerance : float, optional
            Relative tolerance of that check.

        Raises
        ------
        InconsistentTableError
            If the table is malformed, or *validate* is set and the stored
            partial tables exceed the new photoelectric column.  The
            previous table is restored in that case.
        """
        previous = None if self._attenuation.is_empty else self._attenuation.get()
        self._attenuation.set(energies, photoelectric, coherent, incoherent, pair)
        if not validate or self._partial.is_empty:
            return
        report = self.check_partial_photoelectric_consistency(tolerance)
        if not report.ok:
            if previous is None:
                self._attenuation.clear()
            else:
                self._attenuation.set(
                    previous["energy"],
                    previous["photoelectric"],
                    previous["coherent"],
                    previous["compton"],
                    previous["pair"],
                )
            raise InconsistentTableError(
                f"{self._name}: mass attenuation table rejected by the partial "
                f"photoelectric tables: {report.summary()}"
            )

    def set_total_mass_attenuation_coefficient(
        self,
        energies,
        total,
        *,
        validate: bool = True,
        tolerance: float = PARTIAL_SUM_TOLERANCE,
    ) -> None:
        """Replace the table from a measured total attenuation

        The photoelectric column becomes the total minus the stored
        coherent, incoherent and pair coefficients interpolated at
        *energies*.

        Raises
        ------
        NoPhotoelectricDataError
            If no scattering data has been set yet.
        OutOfRangeError
            If an energy lies outside the stored table.
        InconsistentTableError
            If the sequences are malformed, the total falls below the
            scattering contributions, or the derived photoelectric column
            fails the partial photoelectric check (see
            :meth:`set_mass_attenuation_coefficients`).
        """
        energy = np.array(energies, dtype="f8", ndmin=1)
        total = np.array(total, dtype="f8", ndmin=1)
        if energy.shape != total.shape:
            raise InconsistentTableError(
                f"Sequence length mismatch: {energy.size} energies, {total.size} totals."
            )
        scatter = self._attenuation.query(energy)
        photoelectric = total - (scatter["coherent"] + scatter["compton"] + scatter["pair"])
        negative = np.flatnonzero(photoelectric < 0.0)
        if negative.size:
            e = energy[negative[0]]
            raise InconsistentTableError(
                f"Total attenuation at {e:.6g} keV is below the scattering contributions."
            )
        self.set_mass_attenuation_coefficients(
            energy, photoelectric, scatter["coherent"], scatter["compton"], scatter["pair"],
            validate=validate, tolerance=tolerance,
        )

    def get_mass_attenuation_coefficients(self, energy=None) -> dict:
        """Stored table (``energy=None``) or interpolated coefficients

        See :meth:`MassAttenuationTable.query` for the result layout.
        """
        if energy is None:
            return self._attenuation.get()
        return self._attenuation.query(energy)

    def extract_edge_energies(self, threshold: float = EDGE_JUMP_THRESHOLD) -> list[EdgeRecord]:
        """Absorption edges of the photoelectric column, labelled by shell

        Each edge is labelled with the shell whose binding energy is
        closest to it, when that distance is within
        :data:`EDGE_MATCH_TOLERANCE` (relative).
        """
        edges = []
        for edge in self._attenuation.extract_edge_energies(threshold):
            best, best_distance = None, EDGE_MATCH_TOLERANCE
            for label, binding in self._binding.items():
                if binding <= 0.0:
                    continue
                distance = abs(edge.energy - binding) / binding
                if distance <= best_distance:
                    best, best_distance = label, distance
            edges.append(dataclasses.replace(edge, shell=best))
        return edges

    # ------------------------------------------------------------------
    # Partial photoelectric
    # ------------------------------------------------------------------

    def set_partial_photoelectric_mass_attenuation_coefficients(
        self,
        shell: str,
        energies,
        values,
        *,
        validate: bool = True,
        tolerance: float = PARTIAL_SUM_TOLERANCE,
    ) -> None:
        """Add or replace the partial photoelectric table of one shell

        Parameters
        ----------
        shell : str
            Shell label or ``"REST"``.
        energies, values : array_like
            Energy grid (keV) and coefficients (cm²/g).
        validate : bool, optional
            Check the sum of partial tables against the total
            photoelectric coefficient (default ``True``).
        tolerance : float, optional
            Relative tolerance of that check.

        Raises
        ------
        InconsistentTableError
            If the table is malformed, or *validate* is set and the
            partial sum exceeds the total photoelectric coefficient.  The
            previous table of *shell* is restored in that case.
        """
        previous = self._partial.get(shell) if shell in self._partial else None
        self._partial.set(shell, energies, values)
        if not validate:
            return
        report = self.check_partial_photoelectric_consistency(tolerance)
        if not report.ok:
            if previous is None:
                self._partial.remove(shell)
            else:
                self._partial.set(shell, *previous)
            raise InconsistentTableError(
                f"{self._name}: partial photoelectric table of {shell} rejected: "
                f"{report.summary()}"
            )

    def check_partial_photoelectric_consistency(
        self,
        tolerance: float = PARTIAL_SUM_TOLERANCE,
    ) -> ConsistencyReport:
        return self._partial.check_consistency(self._attenuation, tolerance)

    def get_partial_photoelectric_mass_attenuation_coefficients(self, energy: float) -> dict[str, float]:
        """Partial coefficients of every shell with data at *energy*"""
        return self._partial.query(energy)

    def get_partial_photoelectric_table(self, shell: str) -> tuple[np.ndarray, np.ndarray]:
        """Copies of the stored ``(energy, value)`` arrays of *shell*"""
        return self._partial.get(shell)

    def extract_partial_edge_energies(
        self,
        threshold: float = EDGE_JUMP_THRESHOLD,
    ) -> dict[str, EdgeRecord]:
        return self._partial.extract_edge_energies(threshold)

    @property
    def partial_shells(self) -> list[str]:
        return self._partial.shells

    # ------------------------------------------------------------------
    # Relaxation data
    # ------------------------------------------------------------------

    def _shell_for_update(self, shell: str) -> Shell:
        model = self._shells.get(shell)
        if model is None:
            model = Shell(shell)
        return model

    def _commit_shell(self, model: Shell) -> None:
        self._shells[model.label] = model
        self._shells = {label: self._shells[label] for label in sort_shells(self._shells)}
        self._line_cache = {}

    def get_shell(self, shell: str) -> Shell:
        """Relaxation model of *shell*

        Raises
        ------
        UnknownShellError
            If no relaxation data has been set for *shell*.
        """
        try:
            return self._shells[shell]
        except KeyError:
            raise UnknownShellError(
                f"{self._name}: no relaxation data for shell {shell!r}"
            ) from None

    @property
    def shells(self) -> list[str]:
        """Shells with relaxation data, deepest first."""
        return list(self._shells)

    def set_radiative_transitions(self, shell: str, labels, values=None) -> None:
        model = self._shell_for_update(shell)
        model.set_radiative_transitions(labels, values)
        self._commit_shell(model)

    def get_radiative_transitions(self, shell: str) -> dict[str, float]:
        return self.get_shell(shell).get_radiative_transitions()

    def set_nonradiative_transitions(self, shell: str, labels, values=None) -> None:
        model = self._shell_for_update(shell)
        model.set_nonradiative_transitions(labels, values)
        self._commit_shell(model)

    def get_nonradiative_transitions(self, shell: str) -> dict[str, float]:
        return self.get_shell(shell).get_nonradiative_transitions()

    def set_shell_constants(self, shell: str, constants: Mapping[str, float]) -> None:
        model = self._shell_for_update(shell)
        model.set_shell_constants(constants)
        self._commit_shell(model)

    def get_shell_constants(self, shell: str) -> dict[str, float]:
        return self.get_shell(shell).get_shell_constants()

    # ------------------------------------------------------------------
    # X-ray lines
    # ------------------------------------------------------------------

    def get_x_ray_lines(self, family: str) -> dict[str, dict[str, float]]:
        """Radiative lines of every shell of *family* per vacancy in that shell

        Parameters
        ----------
        family : str
            ``"K"``, ``"L"``, ``"M"``, …

        Returns
        -------
        dict[str, dict[str, float]]
            ``{line: {"energy": keV, "rate": fluorescence ratio}}``.

        Raises
        ------
        UnknownShellError
            If *family* is not a shell family, or a line needs a binding
            energy that is not set.
        """
        if family not in SHELL_FAMILIES:
            raise UnknownShellError(f"Unknown shell family {family!r}")
        cached = self._line_cache.get(family)
        if cached is None:
            cached = {}
            for label, model in self._shells.items():
                if shell_family(label) != family:
                    continue
                for line, ratio in model.get_fluorescence_ratios().items():
                    cached[line] = {
                        "energy": line_energy(label, line, self._binding),
                        "rate": ratio,
                    }
            self._line_cache = {**self._line_cache, family: cached}
        return {line: dict(entry) for line, entry in cached.items()}

    def get_initial_photoelectric_vacancy_distribution(self, energy):
        """Per-shell probability of the photoelectric vacancy at *energy*

        See
        :func:`~pyfluo.atomic.vacancy.initial_photoelectric_vacancy_distribution`.
        """
        return initial_photoelectric_vacancy_distribution(
            self._attenuation, self._partial, energy
        )

    def get_x_ray_lines_from_vacancy_distribution(
        self,
        distribution: Mapping[str, float],
        *,
        cascade: bool = True,
        radiative_transfer: bool = False,
    ) -> dict[str, dict[str, dict[str, float]]]:
        """Line catalog emitted by the relaxation of *distribution*

        See :func:`~pyfluo.atomic.lines.synthesize_lines`.
        """
        return synthesize_lines(
            distribution,
            self._shells,
            self._binding,
            cascade=cascade,
            radiative_transfer=radiative_transfer,
        )

    def get_photoelectric_x_ray_lines(
        self,
        energy: float,
        *,
        cascade: bool = True,
    ) -> dict[str, dict[str, dict[str, float]]]:
        """Lines emitted per photon of *energy* keV absorbed photoelectrically"""
        distribution = self.get_initial_photoelectric_vacancy_distribution(float(energy))
        return self.get_x_ray_lines_from_vacancy_distribution(distribution, cascade=cascade)
