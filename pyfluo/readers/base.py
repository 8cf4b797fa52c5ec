#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Abstract base class for the EPICS dataset readers

:class:`~pyfluo.readers.eadl.EADLReader` and
:class:`~pyfluo.readers.epdl.EPDLReader` inherit from :class:`BaseReader`
and share the file-opening steps implemented here.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from pyfluo.exceptions import FileFormatError
from pyfluo.models.records import EADLDataset, EPDLDataset
from pyfluo.utils.parsing import extract_atomic_number_from_path
from pyfluo.utils.validation import validate_atomic_number

logger = logging.getLogger(__name__)

DatasetModel = Union[EADLDataset, EPDLDataset]
"""Type alias for the dataset models returned by the readers."""


class BaseReader(ABC):
    """Abstract base for ENDF-format EPICS dataset readers

    Readers only parse; unit conversion to keV and cm²/g happens in
    :func:`pyfluo.atomic.factory.element_from_epics`.  The dependency
    direction is::

        utils ← models ← readers ← atomic.factory
    """

    library: str = "EPICS"

    def _resolve(self, path: Path | str, *, validate: bool) -> tuple[Path, int]:
        filepath = Path(path)
        logger.debug("Opening %s file: %s", self.library, filepath)
        if not filepath.is_file():
            raise FileFormatError(f"{self.library} file not found: {filepath}")
        Z = extract_atomic_number_from_path(filepath)
        if validate:
            validate_atomic_number(Z)
        return filepath, Z

    @staticmethod
    def _atomic_weight_ratio(material) -> float:
        for sec in material.section_data.values():
            if isinstance(sec, dict) and "AWR" in sec:
                return float(sec["AWR"])
        return 0.0

    @abstractmethod
    def read(
        self,
        path: Path | str,
        *,
        validate: bool = True,
    ) -> DatasetModel:
        """Parse an ENDF-format EPICS file and return a typed dataset model

        Parameters
        ----------
        path : Path | str
            Filesystem path to the ENDF source file.  The file name must
            contain ``ZA{ZZZ}000``.
        validate : bool, optional
            If ``True`` (default), check the atomic number and the parsed
            arrays.

        Raises
        ------
        FileFormatError
            If the file is missing or cannot be opened as ENDF.
        ParseError
            If a section is malformed.
        InconsistentTableError
            If *validate* is ``True`` and a check fails.
        """
        ...
