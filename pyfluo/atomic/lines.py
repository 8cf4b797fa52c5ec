#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Characteristic X-ray line synthesis from a vacancy distribution

Vacancies are processed in shell depth order (K first).  Each shell
emits its radiative lines in proportion to its pending vacancy
probability and, with the cascade enabled, hands its non-radiative
vacancy transfers on to shallower shells before those are processed.
Because every transfer must go to a strictly shallower shell, the
worklist terminates after one pass over the shells; data that violates
this raises :class:`~pyfluo.exceptions.CascadeError`.

Output Layout
-------------
::

    {family: {line_label: {"energy": keV, "rate": photons per absorbed photon}}}

e.g. ``{"K": {"KL3": {"energy": 8.047, "rate": 0.26}}}``.
"""

from __future__ import annotations

import heapq
import logging
from collections import defaultdict
from typing import Mapping

import numpy as np

from pyfluo.atomic.shell import ShellModel
from pyfluo.exceptions import CascadeError, UnknownShellError
from pyfluo.utils.constants import REST_SHELL, shell_family, shell_index, split_transition_label

logger = logging.getLogger(__name__)


def line_energy(
    initial: str,
    line: str,
    binding_energies: Mapping[str, float],
) -> float:
    """Photon energy of a radiative line in keV

    Raises
    ------
    UnknownShellError
        If either shell of the transition has no binding energy.
    """
    final = split_transition_label(initial, line)[0]
    for shell in (initial, final):
        if shell not in binding_energies:
            raise UnknownShellError(
                f"No binding energy for shell {shell!r} needed by line {line!r}"
            )
    return float(binding_energies[initial]) - float(binding_energies[final])


def synthesize_lines(
    distribution: Mapping[str, float],
    shells: Mapping[str, ShellModel],
    binding_energies: Mapping[str, float],
    *,
    cascade: bool = True,
    radiative_transfer: bool = False,
) -> dict[str, dict[str, dict[str, float]]]:
    """Build the X-ray line catalog produced by a vacancy distribution

    Parameters
    ----------
    distribution : Mapping[str, float]
        Initial vacancy probability per shell at one photon energy.
        Array values, as returned for a sequence of energies, are
        rejected.
    shells : Mapping[str, ShellModel]
        Relaxation model per shell label.
    binding_energies : Mapping[str, float]
        Binding energy (keV) per shell label.
    cascade : bool, optional
        Propagate vacancies to shallower shells (default ``True``).
        When ``False`` only the initial vacancies emit lines.
    radiative_transfer : bool, optional
        Also move the vacancy to the final shell of each emitted line.

    Returns
    -------
    dict
        Lines grouped by family, see the module docstring.

    Raises
    ------
    TypeError
        If a probability is not a scalar.
    CascadeError
        If a shell transfers a vacancy to itself or to a deeper shell.
    UnknownShellError
        If a distribution key is not a shell label, or an emitted line
        needs a binding energy that is not defined.
    """
    pending: dict[str, float] = defaultdict(float)
    queue: list[tuple[int, str]] = []
    for shell, probability in distribution.items():
        if np.ndim(probability) != 0:
            raise TypeError(
                f"Vacancy probability of {shell} must be a scalar; synthesize "
                f"lines for one photon energy at a time."
            )
        probability = float(probability)
        if probability == 0.0:
            continue
        if shell not in pending:
            heapq.heappush(queue, (shell_index(shell), shell))
        pending[shell] += probability

    lines: dict[str, dict[str, dict[str, float]]] = {}
    while queue:
        depth, shell = heapq.heappop(queue)
        p = pending.pop(shell)
        if shell == REST_SHELL or shell not in shells:
            logger.debug("No relaxation data for %s, skipping %.6g vacancies", shell, p)
            continue
        model = shells[shell]

        family = lines.setdefault(shell_family(shell), {})
        for label, ratio in model.get_fluorescence_ratios().items():
            if ratio == 0.0:
                continue
            entry = family.get(label)
            if entry is None:
                entry = family[label] = {
                    "energy": line_energy(shell, label, binding_energies),
                    "rate": 0.0,
                }
            entry["rate"] += p * ratio

        if not cascade:
            continue
        for target, ratio in model.get_vacancy_transfer_ratios(radiative=radiative_transfer).items():
            if shell_index(target) <= depth:
                raise CascadeError(
                    f"Shell {shell} transfers vacancies to {target}, which is not "
                    f"shallower; the relaxation data is cyclic or misordered."
                )
            if ratio == 0.0:
                continue
            if target not in pending:
                heapq.heappush(queue, (shell_index(target), target))
            pending[target] += p * ratio

    return {name: family for name, family in lines.items() if family}
