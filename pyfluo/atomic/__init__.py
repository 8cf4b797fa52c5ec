#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Atomic relaxation and X-ray line synthesis

* :class:`~pyfluo.atomic.element.Element` - per-element data container
* :class:`~pyfluo.atomic.shell.Shell` - relaxation model of one subshell
* :func:`~pyfluo.atomic.vacancy.initial_photoelectric_vacancy_distribution`
* :func:`~pyfluo.atomic.lines.synthesize_lines`
* :func:`~pyfluo.atomic.factory.element_from_epics`
"""

from __future__ import annotations

from pyfluo.atomic.element import Element
from pyfluo.atomic.factory import element_from_epics
from pyfluo.atomic.lines import line_energy, synthesize_lines
from pyfluo.atomic.shell import Shell, ShellModel
from pyfluo.atomic.vacancy import initial_photoelectric_vacancy_distribution

__all__ = [
    "Element",
    "Shell",
    "ShellModel",
    "element_from_epics",
    "initial_photoelectric_vacancy_distribution",
    "line_energy",
    "synthesize_lines",
]
