#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Physical constants, shell vocabulary and EPICS mapping tables

All constants are sourced from NIST CODATA 2018 [1]_.  The shell
vocabulary is a closed, ordered set: the position of a label in
:data:`SHELL_LABELS` is its *depth order* (K is the most tightly bound
shell, every later label is shallower).  Cascade bookkeeping relies on
this order being a strict total order.

References
----------
.. [1] NIST, "The 2018 CODATA Recommended Values of the Fundamental
   Physical Constants", https://physics.nist.gov/cuu/pdf/wallet_2018.pdf
"""

from __future__ import annotations

from pyfluo.exceptions import UnknownShellError

# ---------------------------------------------------------------------------
# Physical constants  (NIST CODATA 2018)
# ---------------------------------------------------------------------------

AVOGADRO: float = 6.02214076e23
"""Avogadro constant N_A (1/mol, exact by SI definition)."""

NEUTRON_MASS_AMU: float = 1.00866491595
"""Neutron mass in unified atomic mass units (ENDF AWR reference)."""

BARN_TO_CM2: float = 1e-24
"""Conversion factor from barns to cm²."""

EV_TO_KEV: float = 1e-3
"""Conversion factor from eV to keV."""

DEFAULT_DENSITY: float = 1.0
"""Density assigned to a new element (g/cm³)."""


# ---------------------------------------------------------------------------
# Element symbols  (Z = 1 … 100)
# ---------------------------------------------------------------------------

ELEMENT_SYMBOLS: tuple[str, ...] = (
    "H", "He",
    "Li", "Be", "B", "C", "N", "O", "F", "Ne",
    "Na", "Mg", "Al", "Si", "P", "S", "Cl", "Ar",
    "K", "Ca", "Sc", "Ti", "V", "Cr", "Mn", "Fe", "Co", "Ni", "Cu", "Zn",
    "Ga", "Ge", "As", "Se", "Br", "Kr",
    "Rb", "Sr", "Y", "Zr", "Nb", "Mo", "Tc", "Ru", "Rh", "Pd", "Ag", "Cd",
    "In", "Sn", "Sb", "Te", "I", "Xe",
    "Cs", "Ba", "La", "Ce", "Pr", "Nd", "Pm", "Sm", "Eu", "Gd", "Tb", "Dy",
    "Ho", "Er", "Tm", "Yb", "Lu", "Hf", "Ta", "W", "Re", "Os", "Ir", "Pt",
    "Au", "Hg", "Tl", "Pb", "Bi", "Po", "At", "Rn",
    "Fr", "Ra", "Ac", "Th", "Pa", "U", "Np", "Pu", "Am", "Cm", "Bk", "Cf",
    "Es", "Fm",
)
"""Element symbols indexed by ``Z - 1``."""


def element_symbol(Z: int) -> str:
    """Return the symbol for atomic number *Z*, or ``"Z{ZZZ}"`` if unknown."""
    if 1 <= Z <= len(ELEMENT_SYMBOLS):
        return ELEMENT_SYMBOLS[Z - 1]
    return f"Z{Z:03d}"


# ---------------------------------------------------------------------------
# Shell vocabulary
# ---------------------------------------------------------------------------

SHELL_LABELS: tuple[str, ...] = (
    "K",
    "L1", "L2", "L3",
    "M1", "M2", "M3", "M4", "M5",
    "N1", "N2", "N3", "N4", "N5", "N6", "N7",
    "O1", "O2", "O3", "O4", "O5", "O6", "O7", "O8", "O9",
    "P1", "P2", "P3", "P4", "P5", "P6", "P7", "P8", "P9", "P10", "P11",
    "Q1", "Q2", "Q3",
)
"""Atomic subshell labels in depth order (K first)."""

REST_SHELL: str = "REST"
"""Partial-photoelectric bucket for subshells not tabulated individually."""

SHELL_ORDER: dict[str, int] = {
    label: index for index, label in enumerate(SHELL_LABELS + (REST_SHELL,))
}
"""Label → depth index.  ``"REST"`` sorts after every real shell."""

SHELL_FAMILIES: tuple[str, ...] = ("K", "L", "M", "N", "O", "P", "Q")
"""Principal-shell families, deepest first."""


def shell_index(label: str) -> int:
    """Return the depth index of a shell label

    Raises
    ------
    UnknownShellError
        If *label* is not part of the shell vocabulary.
    """
    try:
        return SHELL_ORDER[label]
    except KeyError:
        raise UnknownShellError(f"Unknown shell label {label!r}") from None


def shell_family(label: str) -> str:
    """Return the family (``"K"``, ``"L"``, …) of a shell label."""
    shell_index(label)
    if label == REST_SHELL:
        return REST_SHELL
    return label[0]


def sort_shells(labels) -> list[str]:
    """Sort shell labels by depth order (deepest first)."""
    return sorted(labels, key=shell_index)


def split_transition_label(initial: str, label: str) -> list[str]:
    """Split a transition label into the shells following *initial*

    Parameters
    ----------
    initial : str
        Shell holding the vacancy (e.g. ``"K"``).
    label : str
        Transition label beginning with *initial*, e.g. ``"KL3"`` for a
        radiative transition or ``"KL1L2"`` for an Auger transition.

    Returns
    -------
    list[str]
        The shell labels after the initial shell, in label order.

    Raises
    ------
    UnknownShellError
        If *label* does not start with *initial* or contains characters
        that are not shell labels.

    Examples
    --------
    >>> split_transition_label("K", "KL1L2")
    ['L1', 'L2']
    >>> split_transition_label("L3", "L3M5")
    ['M5']
    """
    if not label.startswith(initial) or len(label) == len(initial):
        raise UnknownShellError(
            f"Transition {label!r} does not originate in shell {initial!r}"
        )
    rest = label[len(initial):]
    tokens: list[str] = []
    pos = 0
    while pos < len(rest):
        # longest match first so that "P10" is not read as "P1" + "0"
        for width in (3, 2, 1):
            token = rest[pos:pos + width]
            if len(token) == width and token in SHELL_ORDER and token != REST_SHELL:
                break
        else:
            raise UnknownShellError(
                f"Cannot split transition label {label!r} into shell labels"
            )
        tokens.append(token)
        pos += width
    return tokens


# ---------------------------------------------------------------------------
# EPICS subshell mappings
# ---------------------------------------------------------------------------

SUBSHELL_DESIGNATORS: dict[int, str] = {
    1: "K",
    3: "L1",   5: "L2",   6: "L3",
    8: "M1",   10: "M2",  11: "M3",  13: "M4",  14: "M5",
    16: "N1",  18: "N2",  19: "N3",  21: "N4",  22: "N5",  24: "N6",  25: "N7",
    27: "O1",  29: "O2",  30: "O3",  32: "O4",  33: "O5",  35: "O6",  36: "O7",
    38: "O8",  39: "O9",
    41: "P1",  43: "P2",  44: "P3",  46: "P4",  47: "P5",  49: "P6",  50: "P7",
    52: "P8",  53: "P9",  55: "P10", 56: "P11",
    58: "Q1",  60: "Q2",  61: "Q3",
}
"""Mapping from ENDF-6 (MF=28) subshell designator to orbital label.

Designators skip the group entries (2 = L total, 4 = L23, 7 = M total, …),
which never carry relaxation data of their own.
"""

PHOTOELECTRIC_SUBSHELL_MT: dict[int, str] = {
    534 + index: label for index, label in enumerate(SHELL_LABELS)
}
"""Mapping from EPDL MF=23 MT number to photoelectric subshell label.

MT 534 corresponds to the K shell, 535–537 to the L sub-shells, and so
on through the Q shell.
"""

PHOTON_SECTIONS_ABBREVS: dict[tuple[int, int], str] = {
    (23, 501): "xs_tot",
    (23, 502): "xs_coherent",
    (23, 504): "xs_incoherent",
    (23, 516): "xs_pair_total",
    (23, 522): "xs_photoelectric",
}
"""Short mnemonic names for the EPDL MF=23 sections used by PyFluo."""
