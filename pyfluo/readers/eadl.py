#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
EADL (Evaluated Atomic Data Library) reader

Reads the atomic relaxation data of one element: binding energy of each
subshell and its radiative and non-radiative transition probabilities.

Supported ENDF sections
-----------------------
* **MF=28, MT=533** - atomic relaxation data.  The ``endf`` package
  exposes a ``subshells`` list of dicts with keys ``SUBI``, ``EBI``,
  ``ELN`` and ``transitions`` (each with ``SUBJ``, ``SUBK``, ``ETR``,
  ``FTR``).

A transition with ``SUBK == 0`` is radiative.  ``FTR`` is the absolute
probability of the transition per vacancy.

References
----------
.. [1] ENDF-6 Formats Manual (ENDF-102), §28.
"""

from __future__ import annotations

import logging
from pathlib import Path

try:
    import endf
except ImportError as _exc:  # pragma: no cover
    raise ImportError(
        "The 'endf' package is required by EADLReader.  "
        "Install it with: pip install endf"
    ) from _exc

from pyfluo.exceptions import FileFormatError, ParseError
from pyfluo.models.records import EADLDataset, SubshellRelaxation, SubshellTransition
from pyfluo.readers.base import BaseReader
from pyfluo.utils.constants import SUBSHELL_DESIGNATORS, element_symbol
from pyfluo.utils.validation import validate_non_negative

logger = logging.getLogger(__name__)


class EADLReader(BaseReader):
    """Reader for EADL ENDF files

    Examples
    --------
    >>> dataset = EADLReader().read("eadl/EADL.ZA029000.endf")
    >>> dataset.subshells["K"].binding_energy_eV
    8979.0
    """

    library = "EADL"

    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> EADLDataset:
        """Parse an EADL ENDF file

        Returns
        -------
        EADLDataset
            Subshells keyed by label, energies in eV.

        Raises
        ------
        FileFormatError
            If the file is missing or cannot be opened with ``endf``.
        ParseError
            If a subshell or transition designator is unknown.
        """
        filepath, Z = self._resolve(path, validate=validate)

        try:
            mat = endf.Material(str(filepath))
        except Exception as exc:
            raise FileFormatError(
                f"Failed to open {filepath} with endf library: {exc}"
            ) from exc

        subshells: dict[str, SubshellRelaxation] = {}
        key = (28, 533)
        if key not in mat.section_data:
            logger.warning("No MF=28/MT=533 section found for Z=%d", Z)
        else:
            for record in mat.section_data[key].get("subshells", []):
                relaxation = self._subshell(record)
                if validate:
                    validate_non_negative(
                        [t.probability for t in relaxation.transitions],
                        label=f"EADL/{relaxation.name}/FTR",
                    )
                subshells[relaxation.name] = relaxation
                logger.debug(
                    "  Subshell %s: BE=%.2f eV, %d transitions",
                    relaxation.name,
                    relaxation.binding_energy_eV,
                    len(relaxation.transitions),
                )

        logger.debug("EADL parse complete for Z=%d: %d subshells", Z, len(subshells))
        return EADLDataset(
            Z=Z,
            symbol=element_symbol(Z),
            atomic_weight_ratio=self._atomic_weight_ratio(mat),
            subshells=subshells,
        )

    @staticmethod
    def _label(designator: int) -> str:
        try:
            return SUBSHELL_DESIGNATORS[designator]
        except KeyError:
            raise ParseError(f"Unknown EADL subshell designator {designator}") from None

    def _subshell(self, record: dict) -> SubshellRelaxation:
        subi = int(record.get("SUBI", 0))
        name = self._label(subi)

        transitions: list[SubshellTransition] = []
        for trans in record.get("transitions", []):
            subj = int(trans.get("SUBJ", 0))
            subk = int(trans.get("SUBK", 0))
            transitions.append(
                SubshellTransition(
                    origin_designator=subj,
                    origin_label=self._label(subj),
                    secondary_designator=subk,
                    secondary_label="radiative" if subk == 0 else self._label(subk),
                    energy_eV=float(trans.get("ETR", 0.0)),
                    probability=float(trans.get("FTR", 0.0)),
                    is_radiative=(subk == 0),
                )
            )

        return SubshellRelaxation(
            designator=subi,
            name=name,
            binding_energy_eV=float(record.get("EBI", 0.0)),
            n_electrons=float(record.get("ELN", 0.0)),
            transitions=transitions,
        )
