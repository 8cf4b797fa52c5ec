#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Initial photoelectric vacancy distribution

After a photon of energy *E* is absorbed by the photoelectric effect, the
probability that the ejected electron came from shell *s* is the ratio of
that shell's partial coefficient to the total photoelectric coefficient
at *E*.  Shells whose partial table does not span *E* are absent from the
result.
"""

from __future__ import annotations

import logging

import numpy as np

from pyfluo.exceptions import NoPhotoelectricDataError
from pyfluo.tables.attenuation import MassAttenuationTable
from pyfluo.tables.partial import PartialPhotoelectricTable

logger = logging.getLogger(__name__)


def _distribution_at(
    attenuation: MassAttenuationTable,
    partial: PartialPhotoelectricTable,
    energy: float,
) -> dict[str, float]:
    photo = attenuation.query(energy)["photoelectric"]
    if photo <= 0.0:
        raise NoPhotoelectricDataError(
            f"Total photoelectric coefficient is zero at {energy:.6g} keV."
        )
    return {shell: value / photo for shell, value in partial.query(energy).items()}


def initial_photoelectric_vacancy_distribution(
    attenuation: MassAttenuationTable,
    partial: PartialPhotoelectricTable,
    energy,
):
    """Per-shell probability of the initial photoelectric vacancy

    Parameters
    ----------
    attenuation : MassAttenuationTable
        Source of the total photoelectric coefficient.
    partial : PartialPhotoelectricTable
        Per-shell partial photoelectric coefficients.
    energy : float or array_like
        Photon energy (keV) or energies.

    Returns
    -------
    dict
        ``{shell: probability}`` for a scalar energy.  For a sequence,
        ``{shell: numpy.ndarray}`` aligned with the input, holding ``0.0``
        where the shell has no data at that energy.

    Raises
    ------
    NoPhotoelectricDataError
        If no partial tables are stored, the attenuation table is empty,
        or the total photoelectric coefficient is zero at a requested
        energy.
    OutOfRangeError
        If an energy lies outside the attenuation table.
    """
    if partial.is_empty:
        raise NoPhotoelectricDataError(
            "No partial photoelectric tables: the vacancy distribution is unavailable."
        )

    if np.ndim(energy) == 0:
        return _distribution_at(attenuation, partial, float(energy))

    energies = np.asarray(energy, dtype="f8")
    result: dict[str, np.ndarray] = {}
    for i, value in enumerate(energies):
        for shell, probability in _distribution_at(attenuation, partial, float(value)).items():
            if shell not in result:
                result[shell] = np.zeros(energies.shape, dtype="f8")
            result[shell][i] = probability
    logger.debug(
        "Vacancy distribution over %d energies: %d shells", energies.size, len(result)
    )
    return {shell: result[shell] for shell in partial.shells if shell in result}
