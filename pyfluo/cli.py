#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
PyFluo command-line interface

Commands
--------
1. **download**  - fetch EADL and EPDL files from IAEA
2. **lines**     - X-ray lines emitted after photoelectric absorption
3. **vacancies** - initial photoelectric vacancy distribution
4. **export**    - build an element from EPICS files and write it to HDF5

Element data is taken from explicit ENDF files (``--eadl``/``--epdl``),
from the EPICS directory layout (``-Z`` with ``--data-dir``), or from an
HDF5 file written by ``export`` (``--element-file``).

Usage
-----
::

    # Fetch Fe and Cu data into ./eadl and ./epdl
    pyfluo download -Z 26 29

    # Cu lines at 20 keV from explicit files
    pyfluo lines --eadl eadl/EADL.ZA029000.endf --epdl epdl/EPDL.ZA029000.endf --energy 20

    # Same element located by atomic number, K lines only, no cascade
    pyfluo lines -Z 29 --energy 20 --family K --no-cascade

    # Vacancy distribution at several energies
    pyfluo vacancies -Z 29 --energy "10, 20, 50"

    # Store the element for later runs
    pyfluo export -Z 29 -o Cu.h5
    pyfluo lines --element-file Cu.h5 --energy 20

Directory structure expected by ``-Z``::

    eadl/EADL.ZA029000.endf
    epdl/EPDL.ZA029000.endf
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path

from pyfluo.exceptions import PyFluoError
from pyfluo.utils.constants import element_symbol
from pyfluo.utils.parsing import parse_multiple_values

logger = logging.getLogger("pyfluo.cli")

# ---------------------------------------------------------------------------
# Library configuration
# ---------------------------------------------------------------------------

LIBRARY_CONFIG = {
    "atomic": {
        "dataset_type": "EADL",
        "endf_dir": "eadl",
        "endf_prefix": "EADL",
        "download_key": "eadl",
    },
    "photon": {
        "dataset_type": "EPDL",
        "endf_dir": "epdl",
        "endf_prefix": "EPDL",
        "download_key": "epdl",
    },
}


def _find_endf_file(endf_dir: Path, prefix: str, Z: int) -> Path | None:
    """Locate the ENDF file for a given Z in *endf_dir*."""
    matches = sorted(endf_dir.glob(f"{prefix}.ZA{Z:03d}000*"))
    if matches:
        return matches[0]
    matches = sorted(endf_dir.glob(f"*ZA{Z:03d}000*"))
    return matches[0] if matches else None


def _source_path(args, library: str) -> Path | None:
    cfg = LIBRARY_CONFIG[library]
    explicit = getattr(args, cfg["endf_prefix"].lower())
    if explicit is not None:
        return Path(explicit)
    if args.Z is None:
        return None
    path = _find_endf_file(Path(args.data_dir) / cfg["endf_dir"], cfg["endf_prefix"], args.Z)
    if path is None:
        logger.warning(
            "No %s file for Z=%d under %s", cfg["dataset_type"], args.Z,
            Path(args.data_dir) / cfg["endf_dir"],
        )
    return path


def _load_element(args, *, need_eadl: bool, need_epdl: bool):
    """Element from ``--element-file`` or from the EPICS sources."""
    if getattr(args, "element_file", None):
        from pyfluo.converters.hdf5 import read_element_hdf5

        return read_element_hdf5(args.element_file)

    from pyfluo.atomic.factory import element_from_epics
    from pyfluo.readers import EADLReader, EPDLReader

    eadl_path = _source_path(args, "atomic") if need_eadl else None
    epdl_path = _source_path(args, "photon") if need_epdl else None
    if need_eadl and eadl_path is None:
        raise SystemExit("error: EADL data required (--eadl FILE or -Z N)")
    if need_epdl and epdl_path is None:
        raise SystemExit("error: EPDL data required (--epdl FILE or -Z N)")

    eadl = EADLReader().read(eadl_path) if eadl_path else None
    epdl = EPDLReader().read(epdl_path) if epdl_path else None
    return element_from_epics(eadl, epdl, validate=not args.no_validate)


def _parse_energies(text: str) -> list[float]:
    energies = parse_multiple_values(text, default=float("nan"))
    if not energies or any(e != e for e in energies):
        raise SystemExit(f"error: invalid energy list {text!r}")
    return energies


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

def cmd_download(args):
    """Download EADL/EPDL files from IAEA into the ``-Z`` layout."""
    from pyfluo.io.download import download_library

    data_dir = Path(args.data_dir)
    libraries = args.libraries or list(LIBRARY_CONFIG)
    for lib_name in libraries:
        cfg = LIBRARY_CONFIG[lib_name]
        out = data_dir / cfg["endf_dir"]
        print(f"\nDownloading {cfg['dataset_type']} -> {out}")
        written = download_library(cfg["download_key"], out, atomic_numbers=args.Z)
        print(f"  {len(written)} files")
    return 0


def cmd_lines(args):
    """Print the X-ray lines emitted per absorbed photon."""
    element = _load_element(args, need_eadl=True, need_epdl=True)
    for energy in _parse_energies(args.energy):
        lines = element.get_photoelectric_x_ray_lines(energy, cascade=not args.no_cascade)
        print(f"\n{element.name} (Z={element.atomic_number}) at {energy:g} keV")
        print(f"  {'line':<8s} {'energy [keV]':>13s} {'rate':>12s}")
        for family in sorted(lines):
            if args.family and family not in args.family:
                continue
            for label, entry in sorted(lines[family].items(), key=lambda kv: -kv[1]["energy"]):
                if entry["rate"] < args.min_rate:
                    continue
                print(f"  {label:<8s} {entry['energy']:13.5f} {entry['rate']:12.5e}")
    return 0


def cmd_vacancies(args):
    """Print the initial photoelectric vacancy distribution."""
    element = _load_element(args, need_eadl=False, need_epdl=True)
    energies = _parse_energies(args.energy)
    distribution = element.get_initial_photoelectric_vacancy_distribution(energies)

    print(f"\n{element.name} (Z={element.atomic_number})")
    header = "".join(f"{e:>12g}" for e in energies)
    print(f"  {'shell':<6s}{header}")
    for shell, values in distribution.items():
        row = "".join(f"{v:12.5f}" for v in values)
        print(f"  {shell:<6s}{row}")
    return 0


def cmd_export(args):
    """Build an element from EPICS files and write it to HDF5."""
    from pyfluo.converters.hdf5 import write_element_hdf5

    element = _load_element(args, need_eadl=True, need_epdl=True)
    out = Path(args.output) if args.output else Path(f"{element_symbol(element.atomic_number)}.h5")
    write_element_hdf5(element, out, overwrite=args.overwrite)
    print(f"Wrote {element.name} -> {out}")
    return 0


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------

def _add_source_arguments(parser: argparse.ArgumentParser, *, element_file: bool = True) -> None:
    parser.add_argument("--eadl", default=None, help="EADL ENDF file")
    parser.add_argument("--epdl", default=None, help="EPDL ENDF file")
    parser.add_argument("-Z", type=int, default=None, help="Atomic number, located under --data-dir")
    parser.add_argument(
        "--data-dir", "-d",
        default=".",
        help="Base EPICS data directory for -Z (default: current directory)",
    )
    parser.add_argument(
        "--no-validate",
        action="store_true",
        help="Skip the partial/total photoelectric consistency check",
    )
    if element_file:
        parser.add_argument(
            "--element-file",
            default=None,
            help="Element HDF5 file written by 'export' (overrides the ENDF sources)",
        )


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="pyfluo",
        description="PyFluo X-ray fluorescence CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
    pyfluo download -Z 29 82 -d data                     # fetch Cu and Pb
    pyfluo lines -Z 29 --energy 20                       # Cu lines at 20 keV
    pyfluo lines -Z 29 --energy 20 --family K L          # K and L lines only
    pyfluo vacancies -Z 82 --energy "20, 50, 100"        # Pb vacancies
    pyfluo export -Z 29 -o Cu.h5 --overwrite             # store Cu
""",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    sub = parser.add_subparsers(dest="command", help="Command to run")

    p_dl = sub.add_parser("download", help="Download EADL/EPDL files from IAEA")
    p_dl.add_argument("-Z", type=int, nargs="*", default=None,
                      help="Atomic numbers to fetch (default: all elements)")
    p_dl.add_argument("--data-dir", "-d", default=".",
                      help="Base directory receiving eadl/ and epdl/ (default: .)")
    p_dl.add_argument("--libraries", nargs="*", choices=list(LIBRARY_CONFIG), default=None,
                      help="Libraries to fetch: atomic (EADL), photon (EPDL); default both")

    p_lines = sub.add_parser("lines", help="X-ray lines after photoelectric absorption")
    _add_source_arguments(p_lines)
    p_lines.add_argument("--energy", "-e", required=True,
                         help="Photon energy in keV, or a comma-separated list")
    p_lines.add_argument("--family", nargs="*", default=None,
                         help="Line families to print (default: all)")
    p_lines.add_argument("--no-cascade", action="store_true",
                         help="Ignore vacancies transferred to shallower shells")
    p_lines.add_argument("--min-rate", type=float, default=0.0,
                         help="Hide lines with a smaller rate (default: 0)")

    p_vac = sub.add_parser("vacancies", help="Initial photoelectric vacancy distribution")
    _add_source_arguments(p_vac)
    p_vac.add_argument("--energy", "-e", required=True,
                       help="Photon energy in keV, or a comma-separated list")

    p_exp = sub.add_parser("export", help="Write an element to HDF5")
    _add_source_arguments(p_exp, element_file=False)
    p_exp.add_argument("--output", "-o", default=None,
                       help="Output HDF5 file (default: <symbol>.h5)")
    p_exp.add_argument("--overwrite", action="store_true",
                       help="Overwrite an existing output file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    if args.command is None:
        parser.print_help()
        return 0

    t0 = time.time()

    commands = {
        "download": cmd_download,
        "lines": cmd_lines,
        "vacancies": cmd_vacancies,
        "export": cmd_export,
    }

    try:
        rc = commands[args.command](args)
    except PyFluoError as exc:
        print(f"ERROR: {exc}")
        return 1
    logger.debug("Completed in %.1fs", time.time() - t0)
    return rc


if __name__ == "__main__":
    sys.exit(main())
