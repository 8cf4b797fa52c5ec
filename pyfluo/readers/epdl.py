#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
EPDL (Evaluated Photon Data Library) reader

Reads the photon interaction cross sections of one element.

Supported ENDF sections
-----------------------
* **MF=23, MT=501** - total
* **MF=23, MT=502** - coherent (Rayleigh) scattering
* **MF=23, MT=504** - incoherent (Compton) scattering
* **MF=23, MT=516** - pair production, total
* **MF=23, MT=522** - photoelectric absorption, total
* **MF=23, MT=534-572** - photoelectric absorption per subshell

Cross sections are kept as tabulated: energies in eV (with repeated
energies at absorption edges) and cross sections in barns/atom.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

try:
    import endf
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'endf' package is required by EPDLReader.  "
        "Install it with: pip install endf"
    ) from _exc

from pyfluo.exceptions import FileFormatError, ParseError
from pyfluo.models.records import CrossSectionRecord, EPDLDataset
from pyfluo.readers.base import BaseReader
from pyfluo.utils.constants import (
    PHOTOELECTRIC_SUBSHELL_MT,
    PHOTON_SECTIONS_ABBREVS,
    element_symbol,
)
from pyfluo.utils.validation import validate_non_negative, validate_same_length

logger = logging.getLogger(__name__)


class EPDLReader(BaseReader):
    """Reader for EPDL ENDF files

    Examples
    --------
    >>> dataset = EPDLReader().read("epdl/EPDL.ZA029000.endf")
    >>> sorted(dataset.cross_sections)[:2]
    ['xs_coherent', 'xs_incoherent']
    >>> "K" in dataset.subshell_photoelectric
    True
    """

    library = "EPDL"

    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> EPDLDataset:
        """Parse an EPDL ENDF file

        Returns
        -------
        EPDLDataset
            Cross sections by mnemonic (``xs_photoelectric``, …) and per
            subshell photoelectric cross sections by shell label.

        Raises
        ------
        FileFormatError
            If the file is missing or cannot be opened with ``endf``.
        ParseError
            If an MF=23 section has no tabulated cross section.
        """
        filepath, Z = self._resolve(path, validate=validate)

        try:
            mat = endf.Material(str(filepath))
        except Exception as exc:
            raise FileFormatError(
                f"Failed to open {filepath} with endf library: {exc}"
            ) from exc

        cross_sections: dict[str, CrossSectionRecord] = {}
        for (mf, mt), abbrev in PHOTON_SECTIONS_ABBREVS.items():
            if (mf, mt) not in mat.section_data:
                logger.warning("No MF=%d/MT=%d (%s) section for Z=%d", mf, mt, abbrev, Z)
                continue
            cross_sections[abbrev] = self._record(mat.section_data[(mf, mt)], abbrev, validate)
            logger.debug("  MF=23/MT=%d (%s): %d points", mt, abbrev,
                         cross_sections[abbrev].energy.size)

        subshell_photoelectric: dict[str, CrossSectionRecord] = {}
        for mt, shell in PHOTOELECTRIC_SUBSHELL_MT.items():
            if (23, mt) not in mat.section_data:
                continue
            subshell_photoelectric[shell] = self._record(
                mat.section_data[(23, mt)], shell, validate
            )

        logger.debug(
            "EPDL parse complete for Z=%d: %d cross sections, %d subshells",
            Z, len(cross_sections), len(subshell_photoelectric),
        )
        return EPDLDataset(
            Z=Z,
            symbol=element_symbol(Z),
            atomic_weight_ratio=self._atomic_weight_ratio(mat),
            cross_sections=cross_sections,
            subshell_photoelectric=subshell_photoelectric,
        )

    @staticmethod
    def _record(section: dict, label: str, validate: bool) -> CrossSectionRecord:
        sigma = section.get("sigma")
        if sigma is None:
            raise ParseError(f"EPDL section {label!r} has no tabulated cross section")
        energy = np.asarray(sigma.x, dtype="f8")
        xs = np.asarray(sigma.y, dtype="f8")
        if validate:
            validate_same_length(f"EPDL/{label}", energy=energy, cross_section=xs)
            validate_non_negative(xs, label=f"EPDL/{label}")
        return CrossSectionRecord(label=label, energy=energy, cross_section=xs)
