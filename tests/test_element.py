#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the Element data container

Covers identity and derivation, binding energies, attenuation setters,
partial photoelectric validation, shell access and the line cache.
"""

from __future__ import annotations

import numpy as np
import pytest

from pyfluo.atomic.element import Element
from pyfluo.exceptions import (
    InconsistentTableError,
    NoPhotoelectricDataError,
    UnknownShellError,
)
from pyfluo.utils.validation import PARTIAL_SUM_TOLERANCE


class TestIdentity:

    def test_defaults(self) -> None:
        element = Element("Fe", 26)
        assert element.name == "Fe"
        assert element.atomic_number == 26
        assert element.density == 1.0
        assert element.atomic_mass == 0.0

    def test_name_is_read_only(self) -> None:
        element = Element("Fe", 26)
        with pytest.raises(AttributeError):
            element.name = "Co"
        with pytest.raises(AttributeError):
            element.atomic_number = 27

    def test_invalid_atomic_number(self) -> None:
        with pytest.raises(InconsistentTableError):
            Element("Xx", 0)

    def test_density_must_be_positive(self) -> None:
        element = Element("Fe", 26)
        with pytest.raises(InconsistentTableError):
            element.density = -1.0
        element.density = 7.874
        assert element.density == 7.874

    def test_derive_new_identity(self, cascade_element: Element) -> None:
        twin = cascade_element.derive(name="Zz", atomic_number=41)
        assert (twin.name, twin.atomic_number) == ("Zz", 41)
        assert (cascade_element.name, cascade_element.atomic_number) == ("Yy", 40)

    def test_derive_is_independent(self, cascade_element: Element) -> None:
        twin = cascade_element.derive()
        twin.set_binding_energies({"K": 1.0})
        twin.set_radiative_transitions("K", {"KL3": 0.9})
        assert cascade_element.get_binding_energies()["K"] == 20.0
        assert cascade_element.get_radiative_transitions("K") == {"KL2": 0.1, "KL3": 0.2}

    def test_derive_rejects_bad_atomic_number(self, cascade_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            cascade_element.derive(atomic_number=500)


class TestBindingEnergies:

    def test_parallel_sequences(self) -> None:
        element = Element("Cu", 29)
        element.set_binding_energies(["L3", "K"], [0.933, 8.979])
        assert list(element.get_binding_energies()) == ["K", "L3"]

    def test_excited_shells(self, cascade_element: Element) -> None:
        assert cascade_element.get_excited_shells(2.7) == ["L3", "M1", "M5"]
        assert cascade_element.get_excited_shells(20.0)[0] == "K"
        assert cascade_element.get_excited_shells(0.05) == []

    def test_unknown_label(self) -> None:
        with pytest.raises(UnknownShellError):
            Element("Cu", 29).set_binding_energies({"K9": 1.0})

    def test_rest_has_no_binding_energy(self) -> None:
        with pytest.raises(UnknownShellError):
            Element("Cu", 29).set_binding_energies({"REST": 0.1})

    def test_negative_energy(self) -> None:
        with pytest.raises(InconsistentTableError):
            Element("Cu", 29).set_binding_energies({"K": -1.0})

    def test_length_mismatch(self) -> None:
        with pytest.raises(InconsistentTableError):
            Element("Cu", 29).set_binding_energies(["K", "L1"], [8.9])


class TestAttenuation:

    def test_stored_and_interpolated(self, scenario_element: Element) -> None:
        stored = scenario_element.get_mass_attenuation_coefficients()
        np.testing.assert_array_equal(stored["energy"], [1.0, 12.0, 100.0])
        assert scenario_element.get_mass_attenuation_coefficients(12.0)["photoelectric"] == 10.0

    def test_total_derives_photoelectric(self, scenario_element: Element) -> None:
        scenario_element.set_total_mass_attenuation_coefficient([1.0, 12.0, 100.0], [60.0, 12.0, 3.0])
        stored = scenario_element.get_mass_attenuation_coefficients()
        np.testing.assert_allclose(stored["photoelectric"], [58.5, 10.5, 2.1])
        np.testing.assert_allclose(stored["total"], [60.0, 12.0, 3.0])

    def test_total_below_scattering(self, scenario_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            scenario_element.set_total_mass_attenuation_coefficient([1.0, 12.0], [1.0, 1.0])

    def test_total_needs_scattering_data(self) -> None:
        with pytest.raises(NoPhotoelectricDataError):
            Element("Cu", 29).set_total_mass_attenuation_coefficient([1.0], [1.0])

    def test_labelled_edges(self) -> None:
        element = Element("Xx", 50)
        element.set_binding_energies({"K": 10.0, "L1": 1.5})
        element.set_mass_attenuation_coefficients(
            [1.0, 1.52, 3.0, 5.0, 9.0, 10.0, 50.0],
            [100.0, 400.0, 80.0, 200.0, 10.0, 90.0, 2.0],
            [1.0] * 7,
            [1.0] * 7,
        )
        edges = element.extract_edge_energies()
        assert [(e.energy, e.shell) for e in edges] == [(1.52, "L1"), (5.0, None), (10.0, "K")]


class TestPartialPhotoelectric:

    def test_rejects_excess_and_keeps_state(self, scenario_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            scenario_element.set_partial_photoelectric_mass_attenuation_coefficients(
                "L3", [1.0, 100.0], [500.0, 50.0]
            )
        assert scenario_element.partial_shells == ["K"]

    def test_rejected_replacement_restores_table(self, scenario_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            scenario_element.set_partial_photoelectric_mass_attenuation_coefficients(
                "K", [10.0, 100.0], [900.0, 90.0]
            )
        assert scenario_element.get_partial_photoelectric_mass_attenuation_coefficients(12.0) == {
            "K": 8.0
        }

    def test_validation_can_be_skipped(self, scenario_element: Element) -> None:
        scenario_element.set_partial_photoelectric_mass_attenuation_coefficients(
            "L3", [1.0, 100.0], [500.0, 50.0], validate=False
        )
        report = scenario_element.check_partial_photoelectric_consistency()
        assert not report.ok

    def test_checked_at_attenuation_grid(self) -> None:
        # photoelectric dip at 5 keV sits between the two partial samples
        element = Element("Xx", 30)
        element.set_mass_attenuation_coefficients(
            [1.0, 5.0, 10.0], [100.0, 1.0, 10.0], [1.0] * 3, [1.0] * 3
        )
        with pytest.raises(InconsistentTableError):
            element.set_partial_photoelectric_mass_attenuation_coefficients(
                "K", [1.0, 10.0], [90.0, 9.0]
            )
        assert element.partial_shells == []

    def test_attenuation_set_after_partials_is_checked(self) -> None:
        element = Element("Xx", 30)
        element.set_partial_photoelectric_mass_attenuation_coefficients("K", [1.0, 10.0], [8.0, 8.0])
        with pytest.raises(InconsistentTableError):
            element.set_mass_attenuation_coefficients([1.0, 10.0], [1.0, 1.0], [1.0, 1.0], [1.0, 1.0])
        with pytest.raises(NoPhotoelectricDataError):
            element.get_mass_attenuation_coefficients(5.0)
        assert element.partial_shells == ["K"]

    def test_rejected_attenuation_restores_table(self, scenario_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            scenario_element.set_mass_attenuation_coefficients(
                [1.0, 12.0, 100.0], [5.0, 5.0, 0.5], [1.0] * 3, [1.0] * 3
            )
        stored = scenario_element.get_mass_attenuation_coefficients()
        np.testing.assert_array_equal(stored["photoelectric"], [50.0, 10.0, 2.0])
        np.testing.assert_array_equal(stored["compton"], [0.5, 1.0, 0.8])

    def test_rejected_total_restores_table(self, scenario_element: Element) -> None:
        with pytest.raises(InconsistentTableError):
            scenario_element.set_total_mass_attenuation_coefficient([1.0, 12.0, 100.0], [60.0, 6.0, 3.0])
        stored = scenario_element.get_mass_attenuation_coefficients()
        np.testing.assert_array_equal(stored["photoelectric"], [50.0, 10.0, 2.0])

    def test_attenuation_validation_can_be_skipped(self, scenario_element: Element) -> None:
        scenario_element.set_mass_attenuation_coefficients(
            [1.0, 12.0, 100.0], [5.0, 5.0, 0.5], [1.0] * 3, [1.0] * 3, validate=False
        )
        assert not scenario_element.check_partial_photoelectric_consistency().ok

    def test_vector_distribution(self, scenario_element: Element) -> None:
        dist = scenario_element.get_initial_photoelectric_vacancy_distribution([5.0, 12.0])
        np.testing.assert_allclose(dist["K"], [0.0, 0.8])

    def test_no_partial_data(self, cascade_element: Element) -> None:
        with pytest.raises(NoPhotoelectricDataError):
            cascade_element.get_initial_photoelectric_vacancy_distribution(10.0)


ATTENUATION = ([1.0, 5.0, 10.0, 50.0], [100.0, 30.0, 60.0, 5.0], [1.0] * 4, [1.0] * 4)
PARTIALS = {"K": ([10.0, 50.0], [50.0, 4.0]), "L1": ([1.0, 10.0], [40.0, 8.0])}


def _build(order: str, partials=PARTIALS) -> Element:
    element = Element("Xx", 30)
    if order == "attenuation-first":
        element.set_mass_attenuation_coefficients(*ATTENUATION)
    for shell, (energies, values) in partials.items():
        element.set_partial_photoelectric_mass_attenuation_coefficients(shell, energies, values)
    if order == "partials-first":
        element.set_mass_attenuation_coefficients(*ATTENUATION)
    return element


@pytest.mark.parametrize("order", ["attenuation-first", "partials-first"])
class TestSetterOrder:

    def test_probabilities_bounded_on_every_grid_energy(self, order: str) -> None:
        element = _build(order)
        grids = [ATTENUATION[0]] + [energies for energies, _ in PARTIALS.values()]
        for energy in np.unique(np.concatenate(grids)):
            dist = element.get_initial_photoelectric_vacancy_distribution(float(energy))
            assert all(p <= 1.0 + PARTIAL_SUM_TOLERANCE for p in dist.values()), energy
            assert sum(dist.values()) <= 1.0 + PARTIAL_SUM_TOLERANCE, energy

    def test_excess_rejected(self, order: str) -> None:
        excess = dict(PARTIALS, L1=([1.0, 10.0], [40.0, 20.0]))
        with pytest.raises(InconsistentTableError):
            _build(order, excess)


class TestShellsAndLines:

    def test_unknown_shell(self, scenario_element: Element) -> None:
        with pytest.raises(UnknownShellError):
            scenario_element.get_shell("L1")
        with pytest.raises(UnknownShellError):
            scenario_element.get_radiative_transitions("L1")

    def test_shells_depth_ordered(self, cascade_element: Element) -> None:
        assert cascade_element.shells == ["K", "L1", "L2", "L3"]

    def test_shell_constants(self, cascade_element: Element) -> None:
        constants = cascade_element.get_shell_constants("L1")
        assert constants["f12"] == 0.1
        assert constants["omega"] == pytest.approx(0.02)

    def test_family_lines(self, cascade_element: Element) -> None:
        lines = cascade_element.get_x_ray_lines("K")
        assert lines == {
            "KL2": {"energy": pytest.approx(17.2), "rate": pytest.approx(0.1)},
            "KL3": {"energy": pytest.approx(17.4), "rate": pytest.approx(0.2)},
        }
        assert set(cascade_element.get_x_ray_lines("L")) == {"L1M5", "L2M1", "L3M5"}

    def test_unknown_family(self, cascade_element: Element) -> None:
        with pytest.raises(UnknownShellError):
            cascade_element.get_x_ray_lines("X")

    def test_cache_follows_binding_energies(self, cascade_element: Element) -> None:
        assert cascade_element.get_x_ray_lines("K")["KL3"]["energy"] == pytest.approx(17.4)
        binding = cascade_element.get_binding_energies()
        binding["K"] = 25.0
        cascade_element.set_binding_energies(binding)
        assert cascade_element.get_x_ray_lines("K")["KL3"]["energy"] == pytest.approx(22.4)

    def test_cache_follows_transitions(self, cascade_element: Element) -> None:
        cascade_element.get_x_ray_lines("K")
        cascade_element.set_radiative_transitions("K", {"KL3": 0.5})
        assert cascade_element.get_x_ray_lines("K") == {
            "KL3": {"energy": pytest.approx(17.4), "rate": pytest.approx(0.5)},
        }

    def test_cached_result_is_a_copy(self, cascade_element: Element) -> None:
        cascade_element.get_x_ray_lines("K")["KL3"]["rate"] = 99.0
        assert cascade_element.get_x_ray_lines("K")["KL3"]["rate"] == pytest.approx(0.2)
