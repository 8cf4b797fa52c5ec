#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Build :class:`~pyfluo.atomic.element.Element` instances from EPICS data

Unit Conversion
---------------
=====================  ===============  ==========================
Quantity               EPICS            Element
=====================  ===============  ==========================
energy                 eV               keV (× :data:`EV_TO_KEV`)
cross section          barns/atom       cm²/g (× 1e-24 · N_A / A)
atomic mass            AWR (neutrons)   g/mol (× neutron mass)
=====================  ===============  ==========================

ENDF tabulates an absorption edge as two samples at the same energy.
The below-edge sample is moved down by a relative :data:`EDGE_NUDGE` so
that every energy grid is strictly increasing and the above-edge value
is the one found at the edge itself.
"""

from __future__ import annotations

import logging
from collections import defaultdict

import numpy as np

from pyfluo.atomic.element import Element
from pyfluo.exceptions import InconsistentTableError
from pyfluo.models.records import CrossSectionRecord, EADLDataset, EPDLDataset
from pyfluo.utils.constants import (
    AVOGADRO,
    BARN_TO_CM2,
    EV_TO_KEV,
    NEUTRON_MASS_AMU,
    element_symbol,
)
from pyfluo.utils.interpolation import interpolate_column

logger = logging.getLogger(__name__)

EDGE_NUDGE: float = 1.0e-9
"""Relative shift applied to the below-edge sample of a repeated energy."""


def resolve_edge_duplicates(energy) -> np.ndarray:
    """Return a strictly increasing copy of a sorted grid with repeated edges

    Examples
    --------
    >>> resolve_edge_duplicates([1.0, 2.0, 2.0, 3.0])[1] < 2.0
    True
    """
    grid = np.array(energy, dtype="f8")
    for i in range(grid.size - 1, 0, -1):
        if grid[i - 1] >= grid[i]:
            grid[i - 1] = grid[i] * (1.0 - EDGE_NUDGE)
    return grid


def _convert(record: CrossSectionRecord, factor: float) -> tuple[np.ndarray, np.ndarray]:
    energy = resolve_edge_duplicates(record.energy * EV_TO_KEV)
    return energy, np.asarray(record.cross_section, dtype="f8") * factor


def _resample(energy: np.ndarray, values: np.ndarray, grid: np.ndarray) -> np.ndarray:
    """Column on *grid*, zero outside the span of *energy*"""
    out = np.zeros(grid.shape, dtype="f8")
    inside = (grid >= energy[0]) & (grid <= energy[-1])
    if np.any(inside):
        out[inside] = interpolate_column(energy, values, grid[inside])
    return out


def _atomic_mass(eadl, epdl, atomic_mass) -> float:
    if atomic_mass is not None:
        return float(atomic_mass)
    for dataset in (epdl, eadl):
        if dataset is not None and dataset.atomic_weight_ratio > 0.0:
            return dataset.atomic_weight_ratio * NEUTRON_MASS_AMU
    return 0.0


def _apply_epdl(element: Element, epdl: EPDLDataset, validate: bool) -> None:
    if element.atomic_mass <= 0.0:
        raise InconsistentTableError(
            f"{element.name}: atomic mass unknown, cannot convert barns/atom to cm²/g."
        )
    factor = BARN_TO_CM2 * AVOGADRO / element.atomic_mass
    xs = epdl.cross_sections

    required = ("xs_photoelectric", "xs_coherent", "xs_incoherent")
    missing = [name for name in required if name not in xs]
    if missing:
        logger.warning(
            "%s: EPDL data lacks %s, mass attenuation table not set",
            element.name, ", ".join(missing),
        )
    else:
        columns = {name: _convert(xs[name], factor) for name in required}
        if "xs_pair_total" in xs:
            columns["xs_pair_total"] = _convert(xs["xs_pair_total"], factor)
        grid = np.unique(np.concatenate([columns[name][0] for name in required]))
        resampled = {name: _resample(e, v, grid) for name, (e, v) in columns.items()}
        element.set_mass_attenuation_coefficients(
            grid,
            resampled["xs_photoelectric"],
            resampled["xs_coherent"],
            resampled["xs_incoherent"],
            resampled.get("xs_pair_total"),
        )

    for shell, record in epdl.subshell_photoelectric.items():
        energy, values = _convert(record, factor)
        element.set_partial_photoelectric_mass_attenuation_coefficients(
            shell, energy, values, validate=validate
        )


def _apply_eadl(element: Element, eadl: EADLDataset) -> None:
    element.set_binding_energies(
        {name: sub.binding_energy_eV * EV_TO_KEV for name, sub in eadl.subshells.items()}
    )
    for name, sub in eadl.subshells.items():
        radiative: dict[str, float] = defaultdict(float)
        nonradiative: dict[str, float] = defaultdict(float)
        for transition in sub.transitions:
            target = radiative if transition.is_radiative else nonradiative
            target[transition.transition_label(name)] += transition.probability
        if radiative:
            element.set_radiative_transitions(name, dict(radiative))
        if nonradiative:
            element.set_nonradiative_transitions(name, dict(nonradiative))


def element_from_epics(
    eadl: EADLDataset | None = None,
    epdl: EPDLDataset | None = None,
    *,
    name: str | None = None,
    atomic_mass: float | None = None,
    validate: bool = True,
) -> Element:
    """Create an :class:`Element` from parsed EADL and/or EPDL datasets

    Parameters
    ----------
    eadl : EADLDataset, optional
        Relaxation data: binding energies and transitions.
    epdl : EPDLDataset, optional
        Photon cross sections: mass attenuation and partial
        photoelectric tables.
    name : str, optional
        Element name (default: chemical symbol).
    atomic_mass : float, optional
        Atomic mass in g/mol (default: derived from the AWR).
    validate : bool, optional
        Check partial photoelectric tables against the total.

    Returns
    -------
    Element

    Raises
    ------
    InconsistentTableError
        If neither dataset is given, their atomic numbers differ, or the
        data fails validation.

    Examples
    --------
    >>> from pyfluo.readers import EADLReader, EPDLReader
    >>> cu = element_from_epics(
    ...     EADLReader().read("eadl/EADL.ZA029000.endf"),
    ...     EPDLReader().read("epdl/EPDL.ZA029000.endf"),
    ... )
    >>> sorted(cu.get_photoelectric_x_ray_lines(20.0))
    ['K', 'L', 'M']
    """
    datasets = [d for d in (eadl, epdl) if d is not None]
    if not datasets:
        raise InconsistentTableError("element_from_epics needs an EADL or EPDL dataset.")
    Z = datasets[0].Z
    if any(d.Z != Z for d in datasets):
        raise InconsistentTableError(
            f"EADL (Z={eadl.Z}) and EPDL (Z={epdl.Z}) datasets describe different elements."
        )

    element = Element(name or element_symbol(Z), Z)
    mass = _atomic_mass(eadl, epdl, atomic_mass)
    if mass > 0.0:
        element.atomic_mass = mass

    if eadl is not None:
        _apply_eadl(element, eadl)
    if epdl is not None:
        _apply_epdl(element, epdl, validate)

    logger.info(
        "Built %s (Z=%d): %d shells, %d partial photoelectric tables",
        element.name, Z, len(element.shells), len(element.partial_shells),
    )
    return element
