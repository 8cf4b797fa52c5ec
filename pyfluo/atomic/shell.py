#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Relaxation model of a single atomic subshell

A vacancy in a subshell decays either radiatively, emitting a
characteristic X-ray, or non-radiatively through Auger and
Coster-Kronig transitions that leave new vacancies in shallower shells.
The cascade code in :mod:`pyfluo.atomic.lines` only relies on the
:class:`ShellModel` protocol; :class:`Shell` is the implementation used by
:class:`~pyfluo.atomic.element.Element`.

Transition labels
-----------------
Transition labels start with the label of the shell holding the vacancy:

* radiative: ``"KL3"``, the vacancy is filled from L3 and an X-ray is
  emitted;
* non-radiative: ``"KL1L2"``, the vacancy is filled from L1 and an
  electron is ejected from L2, leaving vacancies in both.

Rate conventions
----------------
Rates follow the EADL convention: each rate is the absolute probability
of that transition per vacancy, so radiative plus non-radiative rates
sum to one.  When the shell constants define ``"omega"`` the rates are
treated as relative branching ratios instead: radiative rates are scaled
to sum to ``omega`` and non-radiative (Auger) rates to
``1 - omega - sum(f_ij)``.

Coster-Kronig yields ``f_ij`` move a vacancy from subshell *i* (this
shell) to subshell *j* of the same family.  When they are given they
replace any intra-family non-radiative transitions.
"""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from typing import Mapping, Protocol, Sequence, runtime_checkable

from pyfluo.exceptions import InconsistentTableError, UnknownShellError
from pyfluo.utils.constants import (
    REST_SHELL,
    SHELL_LABELS,
    shell_family,
    shell_index,
    split_transition_label,
)
from pyfluo.utils.validation import validate_non_negative, validate_yields

logger = logging.getLogger(__name__)

_CK_KEY = re.compile(r"f(\d{1,2})(\d{1,2})$")


@runtime_checkable
class ShellModel(Protocol):
    """Capability queried by the cascade for each subshell"""

    label: str

    @property
    def fluorescence_yield(self) -> float: ...

    @property
    def coster_kronig_yields(self) -> dict[str, float]: ...

    def get_radiative_transitions(self) -> dict[str, float]: ...

    def get_nonradiative_transitions(self) -> dict[str, float]: ...

    def get_fluorescence_ratios(self) -> dict[str, float]: ...

    def get_vacancy_transfer_ratios(self, radiative: bool = False) -> dict[str, float]: ...


def _as_mapping(labels, values) -> dict[str, float]:
    if isinstance(labels, Mapping):
        if values is not None:
            raise TypeError("Pass either a mapping or parallel labels/values, not both.")
        return {str(k): float(v) for k, v in labels.items()}
    if values is None:
        raise TypeError("Parallel labels need a matching values sequence.")
    labels = list(labels)
    values = list(values)
    if len(labels) != len(values):
        raise InconsistentTableError(
            f"Sequence length mismatch: {len(labels)} labels, {len(values)} values."
        )
    return {str(k): float(v) for k, v in zip(labels, values)}


class Shell:
    """Relaxation data of one subshell

    Parameters
    ----------
    label : str
        Subshell label (``"K"``, ``"L1"``, …).

    Examples
    --------
    >>> k = Shell("K")
    >>> k.set_radiative_transitions(["KL2", "KL3"], [0.1, 0.2])
    >>> round(k.fluorescence_yield, 6)
    0.3
    >>> k.set_shell_constants({"omega": 0.6})
    >>> round(k.get_fluorescence_ratios()["KL3"], 6)
    0.4
    """

    def __init__(self, label: str) -> None:
        if label == REST_SHELL:
            raise UnknownShellError("The REST bucket has no relaxation model.")
        shell_index(label)
        self.label = label
        self._radiative: dict[str, float] = {}
        self._nonradiative: dict[str, float] = {}
        self._constants: dict[str, float] = {}

    def __repr__(self) -> str:
        return (
            f"Shell({self.label!r}, radiative={len(self._radiative)}, "
            f"nonradiative={len(self._nonradiative)})"
        )

    # -- ingestion -------------------------------------------------------

    def _check_labels(self, rates: dict[str, float], n_shells: int, kind: str) -> None:
        validate_non_negative(list(rates.values()), label=f"{self.label}/{kind}")
        for name in rates:
            try:
                parts = split_transition_label(self.label, name)
            except UnknownShellError as exc:
                raise InconsistentTableError(str(exc)) from exc
            if len(parts) != n_shells:
                raise InconsistentTableError(
                    f"{kind.capitalize()} transition {name!r} of shell {self.label} "
                    f"must name {n_shells} shell(s) after {self.label!r}."
                )

    def set_radiative_transitions(
        self,
        labels: Sequence[str] | Mapping[str, float],
        values: Sequence[float] | None = None,
    ) -> None:
        """Replace the radiative transitions (``"KL3"`` style labels)"""
        rates = _as_mapping(labels, values)
        self._check_labels(rates, 1, "radiative")
        self._radiative = rates
        logger.debug("Shell %s: %d radiative transitions", self.label, len(rates))

    def set_nonradiative_transitions(
        self,
        labels: Sequence[str] | Mapping[str, float],
        values: Sequence[float] | None = None,
    ) -> None:
        """Replace the non-radiative transitions (``"KL1L2"`` style labels)"""
        rates = _as_mapping(labels, values)
        self._check_labels(rates, 2, "non-radiative")
        self._nonradiative = rates
        logger.debug("Shell %s: %d non-radiative transitions", self.label, len(rates))

    def set_shell_constants(self, constants: Mapping[str, float]) -> None:
        """Replace fluorescence (``"omega"``) and Coster-Kronig (``"fij"``) yields

        Raises
        ------
        InconsistentTableError
            For an unknown key, a Coster-Kronig yield that does not start
            in this subshell or ends outside its family, or yields outside
            [0, 1] / summing above one.
        """
        values = {str(k): float(v) for k, v in constants.items()}
        family = shell_family(self.label)
        for key in values:
            if key == "omega":
                continue
            m = _CK_KEY.match(key)
            if m is None:
                raise InconsistentTableError(
                    f"Unknown shell constant {key!r} for shell {self.label}."
                )
            source, target = f"{family}{m.group(1)}", f"{family}{m.group(2)}"
            if source != self.label or target not in _family_members(family) \
                    or shell_index(target) <= shell_index(source):
                raise InconsistentTableError(
                    f"Coster-Kronig yield {key!r} does not describe a transfer "
                    f"from {self.label} to a shallower {family} subshell."
                )
        validate_yields(values, label=f"shell {self.label}")
        self._constants = values

    # -- accessors -------------------------------------------------------

    def get_radiative_transitions(self) -> dict[str, float]:
        return dict(self._radiative)

    def get_nonradiative_transitions(self) -> dict[str, float]:
        return dict(self._nonradiative)

    def get_shell_constants(self, derived: bool = True) -> dict[str, float]:
        """Shell constants

        With *derived* (the default) ``"omega"`` is filled in from the
        radiative rates when it was never set; otherwise only the stored
        constants are returned.
        """
        constants = dict(self._constants)
        if derived:
            constants.setdefault("omega", self.fluorescence_yield)
        return constants

    @property
    def fluorescence_yield(self) -> float:
        if "omega" in self._constants:
            return self._constants["omega"]
        return float(sum(self._radiative.values()))

    @property
    def coster_kronig_yields(self) -> dict[str, float]:
        return {k: v for k, v in self._constants.items() if k != "omega"}

    # -- derived ratios --------------------------------------------------

    def get_fluorescence_ratios(self) -> dict[str, float]:
        """Probability per vacancy of emitting each radiative line"""
        total = sum(self._radiative.values())
        if total <= 0.0:
            return {name: 0.0 for name in self._radiative}
        if "omega" not in self._constants:
            return dict(self._radiative)
        omega = self._constants["omega"]
        return {name: rate / total * omega for name, rate in self._radiative.items()}

    def _auger_ratios(self) -> dict[str, float]:
        family = shell_family(self.label)
        ck = self.coster_kronig_yields
        rates = {
            name: rate
            for name, rate in self._nonradiative.items()
            # Coster-Kronig yields supersede intra-family transitions
            if not (ck and shell_family(split_transition_label(self.label, name)[0]) == family)
        }
        if "omega" not in self._constants:
            return rates
        total = sum(rates.values())
        remaining = max(0.0, 1.0 - self._constants["omega"] - sum(ck.values()))
        if total <= 0.0:
            return {name: 0.0 for name in rates}
        return {name: rate / total * remaining for name, rate in rates.items()}

    def get_vacancy_transfer_ratios(self, radiative: bool = False) -> dict[str, float]:
        """Vacancies created in other shells per vacancy in this shell

        Parameters
        ----------
        radiative : bool, optional
            Also move the vacancy to the final shell of each radiative
            transition.  Default ``False``: only non-radiative decay
            (Auger and Coster-Kronig) feeds the cascade.

        Returns
        -------
        dict[str, float]
            Expected number of new vacancies per shell.  An Auger
            transition ``"KL1L1"`` contributes twice to ``"L1"``.
        """
        transfer: dict[str, float] = defaultdict(float)
        for name, rate in self._auger_ratios().items():
            for shell in split_transition_label(self.label, name):
                transfer[shell] += rate
        family = shell_family(self.label)
        for key, value in self.coster_kronig_yields.items():
            m = _CK_KEY.match(key)
            transfer[f"{family}{m.group(2)}"] += value
        if radiative:
            for name, ratio in self.get_fluorescence_ratios().items():
                transfer[split_transition_label(self.label, name)[0]] += ratio
        return dict(transfer)


def _family_members(family: str) -> set[str]:
    return {label for label in SHELL_LABELS if label[0] == family}
