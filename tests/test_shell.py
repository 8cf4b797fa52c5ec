#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the shell relaxation model

Covers transition-label validation, fluorescence yields and ratios,
Coster-Kronig yields and vacancy transfer ratios.
"""

from __future__ import annotations

import pytest

from pyfluo.atomic.shell import Shell, ShellModel
from pyfluo.exceptions import InconsistentTableError, UnknownShellError


class TestConstruction:

    def test_satisfies_protocol(self) -> None:
        assert isinstance(Shell("K"), ShellModel)

    def test_rest_has_no_model(self) -> None:
        with pytest.raises(UnknownShellError):
            Shell("REST")

    def test_unknown_label(self) -> None:
        with pytest.raises(UnknownShellError):
            Shell("X1")


class TestTransitions:

    def test_mapping_and_sequences_agree(self) -> None:
        a, b = Shell("K"), Shell("K")
        a.set_radiative_transitions({"KL2": 0.1, "KL3": 0.2})
        b.set_radiative_transitions(["KL2", "KL3"], [0.1, 0.2])
        assert a.get_radiative_transitions() == b.get_radiative_transitions()

    def test_length_mismatch(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_radiative_transitions(["KL2", "KL3"], [0.1])

    def test_label_from_other_shell(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_radiative_transitions({"L1M5": 0.1})

    def test_radiative_needs_one_shell(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_radiative_transitions({"KL1L2": 0.1})

    def test_nonradiative_needs_two_shells(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_nonradiative_transitions({"KL2": 0.1})

    def test_garbage_label(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_radiative_transitions({"KX1": 0.1})

    def test_negative_rate(self) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("K").set_radiative_transitions({"KL3": -0.1})

    def test_returns_copies(self) -> None:
        shell = Shell("K")
        shell.set_radiative_transitions({"KL3": 0.2})
        shell.get_radiative_transitions()["KL3"] = 1.0
        assert shell.get_radiative_transitions() == {"KL3": 0.2}


class TestYields:

    def test_yield_from_radiative_rates(self) -> None:
        shell = Shell("K")
        shell.set_radiative_transitions({"KL2": 0.1, "KL3": 0.2})
        assert shell.fluorescence_yield == pytest.approx(0.3)
        assert shell.get_fluorescence_ratios() == pytest.approx({"KL2": 0.1, "KL3": 0.2})

    def test_omega_rescales_branching(self) -> None:
        shell = Shell("K")
        shell.set_radiative_transitions({"KL2": 1.0, "KL3": 2.0})
        shell.set_shell_constants({"omega": 0.6})
        assert shell.fluorescence_yield == 0.6
        assert shell.get_fluorescence_ratios() == pytest.approx({"KL2": 0.2, "KL3": 0.4})

    def test_derived_omega_in_constants(self) -> None:
        shell = Shell("K")
        shell.set_radiative_transitions({"KL3": 0.25})
        assert shell.get_shell_constants() == {"omega": 0.25}
        assert shell.get_shell_constants(derived=False) == {}

    def test_coster_kronig_yields(self) -> None:
        shell = Shell("L1")
        shell.set_shell_constants({"omega": 0.1, "f12": 0.2, "f13": 0.3})
        assert shell.coster_kronig_yields == {"f12": 0.2, "f13": 0.3}

    @pytest.mark.parametrize(
        "constants",
        [
            {"f12": 0.1},            # starts in L1, shell is L2
            {"f21": 0.1},            # moves to a deeper subshell
            {"f25": 0.1},            # L5 does not exist
            {"g23": 0.1},            # unknown key
            {"omega": 1.2},          # out of range
            {"omega": 0.6, "f23": 0.5},  # sums above one
        ],
    )
    def test_invalid_constants(self, constants) -> None:
        with pytest.raises(InconsistentTableError):
            Shell("L2").set_shell_constants(constants)


class TestVacancyTransfer:

    def test_auger_counts_both_vacancies(self) -> None:
        shell = Shell("K")
        shell.set_nonradiative_transitions({"KL1L1": 0.1, "KL2L3": 0.2})
        assert shell.get_vacancy_transfer_ratios() == pytest.approx(
            {"L1": 0.2, "L2": 0.2, "L3": 0.2}
        )

    def test_radiative_transfer_is_optional(self) -> None:
        shell = Shell("K")
        shell.set_radiative_transitions({"KL3": 0.3})
        assert shell.get_vacancy_transfer_ratios() == {}
        assert shell.get_vacancy_transfer_ratios(radiative=True) == pytest.approx({"L3": 0.3})

    def test_coster_kronig_replaces_intra_family(self) -> None:
        shell = Shell("L1")
        shell.set_nonradiative_transitions({"L1L2M1": 0.2, "L1M1M1": 0.3})
        shell.set_shell_constants({"f12": 0.1})
        assert shell.get_vacancy_transfer_ratios() == pytest.approx({"L2": 0.1, "M1": 0.6})

    def test_omega_rescales_auger(self) -> None:
        shell = Shell("L1")
        shell.set_radiative_transitions({"L1M5": 1.0})
        shell.set_nonradiative_transitions({"L1M1M1": 1.0, "L1M5M5": 3.0})
        shell.set_shell_constants({"omega": 0.2, "f12": 0.4})
        assert shell.get_vacancy_transfer_ratios() == pytest.approx(
            {"L2": 0.4, "M1": 0.2, "M5": 0.6}
        )
