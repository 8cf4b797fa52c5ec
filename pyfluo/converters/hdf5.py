#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
HDF5 persistence of :class:`~pyfluo.atomic.element.Element` data

One file holds one element.  Every numeric dataset carries its physical
unit in ``ds.attrs["units"]``; identity metadata is stored as root
attributes.

HDF5 Layout
-----------
::

    / (attrs: name, Z, atomic_mass, density, format_version)

    /binding_energies/
        shell            S8[n]
        energy           f8[n]    keV

    /mass_attenuation/
        energy           f8[N]    keV
        photoelectric    f8[N]    cm2/g
        coherent         f8[N]    cm2/g
        compton          f8[N]    cm2/g
        pair             f8[N]    cm2/g

    /partial_photoelectric/{shell}/
        energy           f8[M]    keV
        value            f8[M]    cm2/g

    /shells/{shell}/
        radiative/       label S16[r], rate f8[r]
        nonradiative/    label S16[a], rate f8[a]
        constants/       key S8[c], value f8[c]

Only constants that were set explicitly are stored, so a round trip
keeps the EADL absolute-rate convention of shells without ``"omega"``.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

try:
    import h5py
except ImportError as _exc:
    raise ImportError(
        "The 'h5py' package is required.  Install with: pip install h5py"
    ) from _exc

from pyfluo.atomic.element import Element
from pyfluo.exceptions import ConversionError, PyFluoError
from pyfluo.tables.attenuation import EFFECTS

logger = logging.getLogger(__name__)

FORMAT_VERSION: int = 1
"""Layout version written to the root ``format_version`` attribute."""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _create_dataset(group: h5py.Group, name: str, data, units: str) -> None:
    ds = group.create_dataset(name, data=np.asarray(data, dtype="f8"))
    ds.attrs["units"] = units


def _write_labelled(group: h5py.Group, label_name: str, value_name: str,
                    mapping: dict[str, float], width: int) -> None:
    group.create_dataset(label_name, data=np.array(list(mapping), dtype=f"S{width}"))
    group.create_dataset(value_name, data=np.array(list(mapping.values()), dtype="f8"))


def _read_labelled(group: h5py.Group, label_name: str, value_name: str) -> dict[str, float]:
    labels = [raw.decode("ascii") for raw in group[label_name][()]]
    values = np.asarray(group[value_name][()], dtype="f8")
    return dict(zip(labels, values.tolist()))


# ---------------------------------------------------------------------------
# Writer
# ---------------------------------------------------------------------------

def _write_element(h5f: h5py.File, element: Element) -> None:
    h5f.attrs["name"] = element.name
    h5f.attrs["Z"] = element.atomic_number
    h5f.attrs["atomic_mass"] = element.atomic_mass
    h5f.attrs["density"] = element.density
    h5f.attrs["format_version"] = FORMAT_VERSION

    binding = element.get_binding_energies()
    if binding:
        grp = h5f.create_group("binding_energies")
        grp.create_dataset("shell", data=np.array(list(binding), dtype="S8"))
        _create_dataset(grp, "energy", list(binding.values()), "keV")

    table = element.get_mass_attenuation_coefficients()
    if table["energy"].size:
        grp = h5f.create_group("mass_attenuation")
        _create_dataset(grp, "energy", table["energy"], "keV")
        for name in EFFECTS:
            _create_dataset(grp, name, table[name], "cm2/g")

    if element.partial_shells:
        parent = h5f.create_group("partial_photoelectric")
        for shell in element.partial_shells:
            energy, value = element.get_partial_photoelectric_table(shell)
            grp = parent.create_group(shell)
            _create_dataset(grp, "energy", energy, "keV")
            _create_dataset(grp, "value", value, "cm2/g")

    if element.shells:
        parent = h5f.create_group("shells")
        for shell in element.shells:
            model = element.get_shell(shell)
            grp = parent.create_group(shell)
            radiative = model.get_radiative_transitions()
            if radiative:
                _write_labelled(grp.create_group("radiative"), "label", "rate", radiative, 16)
            nonradiative = model.get_nonradiative_transitions()
            if nonradiative:
                _write_labelled(grp.create_group("nonradiative"), "label", "rate", nonradiative, 16)
            constants = model.get_shell_constants(derived=False)
            if constants:
                _write_labelled(grp.create_group("constants"), "key", "value", constants, 8)


def write_element_hdf5(
    element: Element,
    output_path: Path | str,
    *,
    overwrite: bool = False,
) -> None:
    """Write an element to an HDF5 file

    Parameters
    ----------
    element : Element
        Element to store.
    output_path : Path | str
        Output file.  Parent directories are created automatically.
    overwrite : bool, optional
        Replace an existing file.  If ``False`` (default) an existing
        file raises :class:`~pyfluo.exceptions.ConversionError`.

    Raises
    ------
    ConversionError
        If the file exists and *overwrite* is ``False``, or an HDF5
        write operation fails.
    """
    out = Path(output_path)
    if out.exists() and not overwrite:
        raise ConversionError(f"Output file {out} already exists and overwrite=False.")

    out.parent.mkdir(parents=True, exist_ok=True)
    try:
        mode = "w" if overwrite else "w-"
        with h5py.File(str(out), mode) as h5f:
            _write_element(h5f, element)
    except Exception as exc:
        raise ConversionError(f"Failed to write HDF5 file {out}: {exc}") from exc

    logger.info("Wrote %s HDF5 file: %s", element.name, out)


# ---------------------------------------------------------------------------
# Reader
# ---------------------------------------------------------------------------

def _read_element(h5f: h5py.File) -> Element:
    element = Element(
        str(h5f.attrs["name"]),
        int(h5f.attrs["Z"]),
        atomic_mass=float(h5f.attrs.get("atomic_mass", 0.0)),
        density=float(h5f.attrs.get("density", 1.0)),
    )

    if "binding_energies" in h5f:
        grp = h5f["binding_energies"]
        labels = [raw.decode("ascii") for raw in grp["shell"][()]]
        element.set_binding_energies(labels, grp["energy"][()].tolist())

    if "mass_attenuation" in h5f:
        grp = h5f["mass_attenuation"]
        element.set_mass_attenuation_coefficients(
            grp["energy"][()],
            grp["photoelectric"][()],
            grp["coherent"][()],
            grp["compton"][()],
            grp["pair"][()],
        )

    for shell, grp in h5f.get("partial_photoelectric", {}).items():
        element.set_partial_photoelectric_mass_attenuation_coefficients(
            shell, grp["energy"][()], grp["value"][()], validate=False
        )

    for shell, grp in h5f.get("shells", {}).items():
        if "radiative" in grp:
            element.set_radiative_transitions(shell, _read_labelled(grp["radiative"], "label", "rate"))
        if "nonradiative" in grp:
            element.set_nonradiative_transitions(
                shell, _read_labelled(grp["nonradiative"], "label", "rate")
            )
        if "constants" in grp:
            element.set_shell_constants(shell, _read_labelled(grp["constants"], "key", "value"))
    return element


def read_element_hdf5(path: Path | str) -> Element:
    """Read an element written by :func:`write_element_hdf5`

    Raises
    ------
    ConversionError
        If the file is missing, is not a PyFluo element file, or its
        content fails the element's validation.
    """
    src = Path(path)
    if not src.is_file():
        raise ConversionError(f"HDF5 file not found: {src}")
    try:
        with h5py.File(str(src), "r") as h5f:
            if "format_version" not in h5f.attrs:
                raise ConversionError(f"{src} is not a PyFluo element file.")
            element = _read_element(h5f)
    except ConversionError:
        raise
    except (OSError, KeyError, PyFluoError) as exc:
        raise ConversionError(f"Failed to read HDF5 file {src}: {exc}") from exc

    logger.debug("Read %r from %s", element, src)
    return element
