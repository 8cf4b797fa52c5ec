#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for HDF5 persistence of elements

Covers the group layout, unit attributes, round trips of every element
component and the error conditions of the writer and reader.
"""

from __future__ import annotations

import numpy as np
import pytest

try:
    import h5py
except ImportError:
    pytest.skip("h5py not installed", allow_module_level=True)

from pyfluo.atomic.element import Element
from pyfluo.converters.hdf5 import FORMAT_VERSION, read_element_hdf5, write_element_hdf5
from pyfluo.exceptions import ConversionError


class TestWrite:

    def test_layout(self, tmp_path, scenario_element: Element) -> None:
        out = tmp_path / "Xx.h5"
        write_element_hdf5(scenario_element, out)
        with h5py.File(str(out), "r") as h5f:
            assert h5f.attrs["name"] == "Xx"
            assert int(h5f.attrs["Z"]) == 30
            assert int(h5f.attrs["format_version"]) == FORMAT_VERSION
            assert set(h5f) == {
                "binding_energies", "mass_attenuation", "partial_photoelectric", "shells",
            }
            assert list(h5f["partial_photoelectric"]) == ["K"]
            assert h5f["shells/K/radiative/label"][()].tolist() == [b"KL3"]

    def test_units(self, tmp_path, scenario_element: Element) -> None:
        out = tmp_path / "Xx.h5"
        write_element_hdf5(scenario_element, out)
        with h5py.File(str(out), "r") as h5f:
            assert h5f["binding_energies/energy"].attrs["units"] == "keV"
            assert h5f["mass_attenuation/energy"].attrs["units"] == "keV"
            assert h5f["mass_attenuation/photoelectric"].attrs["units"] == "cm2/g"
            assert h5f["partial_photoelectric/K/value"].attrs["units"] == "cm2/g"

    def test_empty_components_skipped(self, tmp_path) -> None:
        out = tmp_path / "bare.h5"
        write_element_hdf5(Element("Fe", 26), out)
        with h5py.File(str(out), "r") as h5f:
            assert len(h5f) == 0

    def test_creates_parent_directories(self, tmp_path, scenario_element: Element) -> None:
        out = tmp_path / "a" / "b" / "Xx.h5"
        write_element_hdf5(scenario_element, out)
        assert out.is_file()

    def test_refuses_to_overwrite(self, tmp_path, scenario_element: Element) -> None:
        out = tmp_path / "Xx.h5"
        write_element_hdf5(scenario_element, out)
        with pytest.raises(ConversionError):
            write_element_hdf5(scenario_element, out)
        write_element_hdf5(scenario_element, out, overwrite=True)


class TestRoundTrip:

    def test_identity(self, tmp_path) -> None:
        out = tmp_path / "Fe.h5"
        write_element_hdf5(Element("Fe", 26, atomic_mass=55.845, density=7.874), out)
        fe = read_element_hdf5(out)
        assert (fe.name, fe.atomic_number) == ("Fe", 26)
        assert fe.atomic_mass == 55.845
        assert fe.density == 7.874

    def test_tables(self, tmp_path, scenario_element: Element) -> None:
        out = tmp_path / "Xx.h5"
        write_element_hdf5(scenario_element, out)
        copy = read_element_hdf5(out)
        original = scenario_element.get_mass_attenuation_coefficients()
        restored = copy.get_mass_attenuation_coefficients()
        for name, values in original.items():
            np.testing.assert_array_equal(restored[name], values)
        for a, b in zip(copy.get_partial_photoelectric_table("K"),
                        scenario_element.get_partial_photoelectric_table("K")):
            np.testing.assert_array_equal(a, b)
        assert copy.get_initial_photoelectric_vacancy_distribution(12.0) == {
            "K": pytest.approx(0.8)
        }

    def test_relaxation_data(self, tmp_path, cascade_element: Element) -> None:
        out = tmp_path / "Yy.h5"
        write_element_hdf5(cascade_element, out)
        copy = read_element_hdf5(out)
        assert copy.get_binding_energies() == cascade_element.get_binding_energies()
        assert copy.shells == cascade_element.shells
        assert copy.get_nonradiative_transitions("K") == pytest.approx(
            cascade_element.get_nonradiative_transitions("K")
        )
        assert copy.get_shell_constants("L1") == pytest.approx(
            {"f12": 0.1, "f13": 0.5, "omega": 0.02}
        )
        assert "omega" not in copy.get_shell("L1").get_shell_constants(derived=False)
        for family in ("K", "L"):
            assert copy.get_x_ray_lines(family) == cascade_element.get_x_ray_lines(family)


class TestReadErrors:

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(ConversionError):
            read_element_hdf5(tmp_path / "missing.h5")

    def test_foreign_file(self, tmp_path) -> None:
        out = tmp_path / "other.h5"
        with h5py.File(str(out), "w") as h5f:
            h5f.create_dataset("data", data=np.arange(3))
        with pytest.raises(ConversionError):
            read_element_hdf5(out)

    def test_invalid_content(self, tmp_path) -> None:
        out = tmp_path / "broken.h5"
        with h5py.File(str(out), "w") as h5f:
            h5f.attrs["name"] = "Xx"
            h5f.attrs["Z"] = 300
            h5f.attrs["format_version"] = FORMAT_VERSION
        with pytest.raises(ConversionError):
            read_element_hdf5(out)
