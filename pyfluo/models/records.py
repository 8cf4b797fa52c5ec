#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Typed dataclass models for parsed EPICS data and table diagnostics

Every model is a plain ``dataclass`` carrying scalar metadata and NumPy
arrays.  The dataset models are the sole output of the reader layer and
the sole input accepted by :func:`~pyfluo.atomic.factory.element_from_epics`;
the diagnostic models are returned by the table stores.

Hierarchy
---------
::

    CrossSectionRecord   - energy / xs pair as read from MF=23
    SubshellTransition   - single radiative or Auger transition
    SubshellRelaxation   - one subshell's relaxation data
    EPDLDataset          - photon (EPDL) parsed output
    EADLDataset          - atomic (EADL) parsed output
    EdgeRecord           - absorption edge located in a table
    ConsistencyViolation - one failed partial/total comparison
    ConsistencyReport    - result of the partial/total check

Units
-----
* Dataset energies are in **eV** and cross sections in **barns**
  (ENDF convention), exactly as read.
* Diagnostic energies are in **keV** and coefficients in **cm²/g**,
  the units of the table stores.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


# ---------------------------------------------------------------------------
# Photon building blocks
# ---------------------------------------------------------------------------

@dataclass
class CrossSectionRecord:
    """A single cross-section table (energy vs. σ)

    Parameters
    ----------
    label : str
        Short mnemonic name (e.g. ``"xs_photoelectric"``, ``"xs_pe_K"``).
    energy : numpy.ndarray
        Incident-energy grid, shape ``(N,)``, units eV.  EPDL grids repeat
        the energy at absorption edges.
    cross_section : numpy.ndarray
        Cross-section values, shape ``(N,)``, units barns.
    """

    label: str
    energy: np.ndarray
    cross_section: np.ndarray


# ---------------------------------------------------------------------------
# Atomic relaxation building blocks
# ---------------------------------------------------------------------------

@dataclass
class SubshellTransition:
    """A single atomic-relaxation transition

    Parameters
    ----------
    origin_designator : int
        EADL subshell designator of the electron filling the vacancy.
    origin_label : str
        Human-readable label (e.g. ``"L3"``).
    secondary_designator : int
        Designator for the subshell emitting the Auger electron.
        Zero (0) indicates a radiative (X-ray) transition.
    secondary_label : str
        ``"radiative"`` when *secondary_designator* is 0, else the
        subshell label (e.g. ``"M2"``).
    energy_eV : float
        Transition energy (eV).
    probability : float
        Fractional probability of this transition per vacancy.
    is_radiative : bool
        ``True`` for X-ray emission, ``False`` for Auger / Coster-Kronig.
    """

    origin_designator: int
    origin_label: str
    secondary_designator: int
    secondary_label: str
    energy_eV: float
    probability: float
    is_radiative: bool

    def transition_label(self, shell: str) -> str:
        """Label of this transition for a vacancy in *shell*

        ``"KL3"`` for a radiative transition, ``"KL1L2"`` for an Auger
        transition.
        """
        if self.is_radiative:
            return f"{shell}{self.origin_label}"
        return f"{shell}{self.origin_label}{self.secondary_label}"


@dataclass
class SubshellRelaxation:
    """Relaxation data for a single atomic subshell

    Parameters
    ----------
    designator : int
        ENDF subshell designator (1 = K, 3 = L1, 5 = L2, …).
    name : str
        Standard label (e.g. ``"K"``, ``"L1"``).
    binding_energy_eV : float
        Binding energy of the subshell (eV).
    n_electrons : float
        Number of electrons in the neutral atom.
    transitions : list[SubshellTransition]
        All radiative and non-radiative transitions from this subshell.
    """

    designator: int
    name: str
    binding_energy_eV: float
    n_electrons: float
    transitions: list[SubshellTransition] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Top-level dataset models
# ---------------------------------------------------------------------------

@dataclass
class EPDLDataset:
    """Parsed photon interaction data (EPDL) for one element

    Parameters
    ----------
    Z : int
        Atomic number.
    symbol : str
        Element symbol.
    atomic_weight_ratio : float
        AWR from the ENDF material header (mass in neutron masses).
    cross_sections : dict[str, CrossSectionRecord]
        Total-effect cross sections keyed by abbreviation
        (``"xs_photoelectric"``, ``"xs_coherent"``, ``"xs_incoherent"``,
        ``"xs_pair_total"``, ``"xs_tot"``).
    subshell_photoelectric : dict[str, CrossSectionRecord]
        Partial photoelectric cross sections keyed by shell label.
    """

    Z: int
    symbol: str
    atomic_weight_ratio: float
    cross_sections: dict[str, CrossSectionRecord] = field(default_factory=dict)
    subshell_photoelectric: dict[str, CrossSectionRecord] = field(default_factory=dict)


@dataclass
class EADLDataset:
    """Parsed atomic relaxation data (EADL) for one element

    Parameters
    ----------
    Z : int
        Atomic number.
    symbol : str
        Element symbol.
    atomic_weight_ratio : float
        AWR from the ENDF material header.
    subshells : dict[str, SubshellRelaxation]
        Relaxation data keyed by subshell label (e.g. ``"K"``).
    """

    Z: int
    symbol: str
    atomic_weight_ratio: float
    subshells: dict[str, SubshellRelaxation] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Table diagnostics
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EdgeRecord:
    """An absorption edge located in a coefficient table

    Parameters
    ----------
    energy : float
        Energy of the first sample above the jump (keV).
    index : int
        Index of that sample in the stored, sorted table.
    shell : str | None
        Shell the edge was attributed to, when known.
    """

    energy: float
    index: int
    shell: str | None = None


@dataclass(frozen=True)
class ConsistencyViolation:
    """Partial photoelectric sum exceeding the total at one energy (cm²/g)"""

    energy: float
    partial_sum: float
    total: float


@dataclass
class ConsistencyReport:
    """Outcome of the partial vs total photoelectric consistency check

    Parameters
    ----------
    tolerance : float
        Relative tolerance used for the comparison.
    violations : list[ConsistencyViolation]
        Every sampled energy where the partial sum is too large.
    checked : int
        Number of energies compared.
    """

    tolerance: float
    violations: list[ConsistencyViolation] = field(default_factory=list)
    checked: int = 0

    @property
    def ok(self) -> bool:
        return not self.violations

    def summary(self) -> str:
        if self.ok:
            return f"{self.checked} energies checked, partial sums within tolerance"
        worst = max(self.violations, key=lambda v: v.partial_sum / v.total if v.total else np.inf)
        return (
            f"{len(self.violations)} of {self.checked} energies exceed the total "
            f"photoelectric coefficient (worst at {worst.energy:.6g} keV: "
            f"partial sum {worst.partial_sum:.6g} > total {worst.total:.6g})"
        )
