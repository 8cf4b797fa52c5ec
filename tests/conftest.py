#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Shared pytest fixtures for PyFluo tests

Provides synthetic elements and EPICS-like datasets so that the physics
core, the factory and the HDF5 converter can be tested without real
ENDF data files.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyfluo.atomic.element import Element
from pyfluo.models.records import (
    CrossSectionRecord,
    EADLDataset,
    EPDLDataset,
    SubshellRelaxation,
    SubshellTransition,
)


@pytest.fixture
def scenario_element() -> Element:
    """Two-shell element with a single K line

    K binding 10 keV, L3 binding 1 keV, K emits KL3 with rate 0.6.  At
    12 keV the photoelectric coefficient is 10 cm²/g, of which 8 cm²/g
    belongs to the K shell.
    """
    element = Element("Xx", 30)
    element.set_binding_energies({"K": 10.0, "L3": 1.0})
    element.set_mass_attenuation_coefficients(
        [1.0, 12.0, 100.0],
        [50.0, 10.0, 2.0],
        [1.0, 0.5, 0.1],
        [0.5, 1.0, 0.8],
    )
    element.set_partial_photoelectric_mass_attenuation_coefficients(
        "K", [10.0, 12.0, 100.0], [8.5, 8.0, 1.0]
    )
    element.set_radiative_transitions("K", {"KL3": 0.6})
    return element


@pytest.fixture
def cascade_element() -> Element:
    """Element with K and L relaxation data for cascade tests

    Rates follow the absolute per-vacancy convention::

        K   radiative KL2 0.1, KL3 0.2; Auger KL1L1 0.1, KL2L3 0.2, KL3L3 0.4
        L1  radiative L1M5 0.02; Auger L1M1M1 0.38; f12 0.1, f13 0.5
        L2  radiative L2M1 0.05; Auger L2M1M1 0.95
        L3  radiative L3M5 0.1;  Auger L3M5M5 0.9
    """
    element = Element("Yy", 40)
    element.set_binding_energies(
        {"K": 20.0, "L1": 3.0, "L2": 2.8, "L3": 2.6, "M1": 0.5, "M5": 0.1}
    )
    element.set_radiative_transitions("K", ["KL2", "KL3"], [0.1, 0.2])
    element.set_nonradiative_transitions("K", ["KL1L1", "KL2L3", "KL3L3"], [0.1, 0.2, 0.4])
    element.set_radiative_transitions("L1", {"L1M5": 0.02})
    element.set_nonradiative_transitions("L1", {"L1M1M1": 0.38})
    element.set_shell_constants("L1", {"f12": 0.1, "f13": 0.5})
    element.set_radiative_transitions("L2", {"L2M1": 0.05})
    element.set_nonradiative_transitions("L2", {"L2M1M1": 0.95})
    element.set_radiative_transitions("L3", {"L3M5": 0.1})
    element.set_nonradiative_transitions("L3", {"L3M5M5": 0.9})
    return element


def _transition(subj: int, origin: str, subk: int, secondary: str, probability: float):
    return SubshellTransition(
        origin_designator=subj,
        origin_label=origin,
        secondary_designator=subk,
        secondary_label=secondary,
        energy_eV=0.0,
        probability=probability,
        is_radiative=(subk == 0),
    )


@pytest.fixture
def sample_eadl_dataset() -> EADLDataset:
    """Minimal synthetic EADL dataset for Copper (Z=29), energies in eV"""
    return EADLDataset(
        Z=29,
        symbol="Cu",
        atomic_weight_ratio=63.0,
        subshells={
            "K": SubshellRelaxation(
                designator=1,
                name="K",
                binding_energy_eV=8979.0,
                n_electrons=2.0,
                transitions=[
                    _transition(6, "L3", 0, "radiative", 0.3),
                    _transition(5, "L2", 0, "radiative", 0.15),
                    _transition(3, "L1", 3, "L1", 0.05),
                    _transition(6, "L3", 6, "L3", 0.5),
                ],
            ),
            "L1": SubshellRelaxation(
                designator=3, name="L1", binding_energy_eV=1096.7, n_electrons=2.0,
            ),
            "L2": SubshellRelaxation(
                designator=5, name="L2", binding_energy_eV=952.3, n_electrons=2.0,
            ),
            "L3": SubshellRelaxation(
                designator=6,
                name="L3",
                binding_energy_eV=932.7,
                n_electrons=4.0,
                transitions=[
                    _transition(14, "M5", 0, "radiative", 0.01),
                    _transition(14, "M5", 14, "M5", 0.99),
                ],
            ),
            "M5": SubshellRelaxation(
                designator=14, name="M5", binding_energy_eV=2.0, n_electrons=6.0,
            ),
        },
    )


@pytest.fixture
def sample_epdl_dataset() -> EPDLDataset:
    """Minimal synthetic EPDL dataset for Copper (Z=29)

    Energies in eV, cross sections in barns/atom.  The photoelectric
    cross section repeats 8979 eV, as ENDF tabulates the K edge.
    """
    smooth = np.array([1000.0, 10000.0, 100000.0], dtype="f8")
    return EPDLDataset(
        Z=29,
        symbol="Cu",
        atomic_weight_ratio=63.0,
        cross_sections={
            "xs_photoelectric": CrossSectionRecord(
                label="xs_photoelectric",
                energy=np.array([1000.0, 8979.0, 8979.0, 100000.0], dtype="f8"),
                cross_section=np.array([1.0e5, 1.0e4, 8.0e4, 1.0e2], dtype="f8"),
            ),
            "xs_coherent": CrossSectionRecord(
                label="xs_coherent",
                energy=smooth,
                cross_section=np.array([100.0, 20.0, 1.0], dtype="f8"),
            ),
            "xs_incoherent": CrossSectionRecord(
                label="xs_incoherent",
                energy=smooth,
                cross_section=np.array([5.0, 10.0, 20.0], dtype="f8"),
            ),
        },
        subshell_photoelectric={
            "K": CrossSectionRecord(
                label="K",
                energy=np.array([8979.0, 100000.0], dtype="f8"),
                cross_section=np.array([7.0e4, 90.0], dtype="f8"),
            ),
            "L1": CrossSectionRecord(
                label="L1",
                energy=np.array([1096.7, 100000.0], dtype="f8"),
                cross_section=np.array([5.0e3, 5.0], dtype="f8"),
            ),
        },
    )
