#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
EPICS ENDF file downloader

Fetches the EADL (relaxation) and EPDL (photon) element files used by
:mod:`pyfluo.readers` from the IAEA Nuclear Data Services website, either
for every element or for selected atomic numbers.

Data Sources
------------
* EADL: ``https://www-nds.iaea.org/epics/ENDF2023/EADL.ELEMENTS/``
* EPDL: ``https://www-nds.iaea.org/epics/ENDF2023/EPDL.ELEMENTS/``

Files are saved as ``{PREFIX}.ZA{ZZZ}000.endf`` under one directory per
library, the layout the ``-Z`` option of the CLI looks for::

    data/eadl/EADL.ZA029000.endf
    data/epdl/EPDL.ZA029000.endf

Examples
--------
>>> from pyfluo.io.download import download_epics
>>> download_epics("data", atomic_numbers=[26, 29])
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal
from urllib.parse import urljoin

from pyfluo.exceptions import DownloadError
from pyfluo.utils.parsing import ENDF_FILENAME_PATTERN

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Library metadata
# ---------------------------------------------------------------------------

LIBRARY_URLS: dict[str, dict[str, str]] = {
    "eadl": {
        "url": "https://www-nds.iaea.org/epics/ENDF2023/EADL.ELEMENTS/getza.htm",
        "prefix": "EADL",
        "description": "Evaluated Atomic Data Library",
    },
    "epdl": {
        "url": "https://www-nds.iaea.org/epics/ENDF2023/EPDL.ELEMENTS/getza.htm",
        "prefix": "EPDL",
        "description": "Evaluated Photon Data Library",
    },
}
"""Index page and file prefix of each EPICS library PyFluo reads."""

INDEX_TIMEOUT: float = 30.0
FILE_TIMEOUT: float = 60.0
CHUNK_SIZE: int = 8192


def _beautiful_soup():
    try:
        from bs4 import BeautifulSoup
    except ImportError as exc:
        raise DownloadError(
            "Download requires 'beautifulsoup4'.  Install with: pip install beautifulsoup4"
        ) from exc
    return BeautifulSoup


def _requests():
    try:
        import requests
    except ImportError as exc:
        raise DownloadError(
            "Download requires 'requests'.  Install with: pip install requests"
        ) from exc
    return requests


def find_element_links(html: str, base_url: str) -> dict[int, str]:
    """Map atomic number to file URL for every element link of an index page

    Links whose target does not contain ``ZA{ZZZ}000`` are ignored.

    Raises
    ------
    DownloadError
        If the page holds no element link.
    """
    soup = _beautiful_soup()(html, "html.parser")
    links: dict[int, str] = {}
    for a in soup.find_all("a", href=True):
        m = ENDF_FILENAME_PATTERN.search(Path(a["href"]).name)
        if m is None:
            continue
        links.setdefault(int(m.group(1)), urljoin(base_url, a["href"]))
    if not links:
        raise DownloadError(
            f"No element links found on {base_url}.  "
            "The IAEA page format may have changed."
        )
    return links


def _fetch(requests, url: str, dst: Path) -> None:
    try:
        with requests.get(url, stream=True, timeout=FILE_TIMEOUT) as r:
            r.raise_for_status()
            with open(dst, "wb") as f:
                for chunk in r.iter_content(CHUNK_SIZE):
                    f.write(chunk)
    except (requests.RequestException, OSError):
        dst.unlink(missing_ok=True)
        raise


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def download_library(
    library_name: Literal["eadl", "epdl"],
    out_dir: Path | str | None = None,
    *,
    atomic_numbers: Iterable[int] | None = None,
) -> list[Path]:
    """Download the element files of one EPICS library

    Parameters
    ----------
    library_name : ``"eadl"`` | ``"epdl"``
        Which library to download.
    out_dir : Path | str | None, optional
        Output directory.  Defaults to ``"./{library_name}"``.
    atomic_numbers : iterable of int, optional
        Elements to fetch.  Default: every element on the index page.

    Returns
    -------
    list[Path]
        Files written, in increasing Z order.  Elements that failed to
        download are logged and left out.

    Raises
    ------
    ValueError
        If *library_name* is not supported.
    DownloadError
        If the optional dependencies are missing or the index page
        cannot be fetched or parsed.
    """
    if library_name not in LIBRARY_URLS:
        raise ValueError(
            f"Unknown library: {library_name!r}.  "
            f"Choose from: {sorted(LIBRARY_URLS.keys())}"
        )
    requests = _requests()

    config = LIBRARY_URLS[library_name]
    base_url = config["url"]
    out = Path(library_name) if out_dir is None else Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)

    logger.info("Downloading %s (%s) from %s", config["description"], config["prefix"], base_url)
    try:
        resp = requests.get(base_url, timeout=INDEX_TIMEOUT)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise DownloadError(f"Failed to fetch index page {base_url}: {exc}") from exc

    links = find_element_links(resp.text, base_url)
    if atomic_numbers is None:
        wanted = sorted(links)
    else:
        wanted = sorted(set(int(Z) for Z in atomic_numbers))
        for Z in wanted:
            if Z not in links:
                logger.warning("%s has no file for Z=%d", config["prefix"], Z)
        wanted = [Z for Z in wanted if Z in links]

    written: list[Path] = []
    for Z in wanted:
        dst = out / f"{config['prefix']}.ZA{Z:03d}000.endf"
        logger.debug("Downloading %s -> %s", links[Z], dst)
        try:
            _fetch(requests, links[Z], dst)
        except (requests.RequestException, OSError) as exc:
            logger.warning("Failed to download %s: %s", links[Z], exc)
            continue
        written.append(dst)

    logger.info("Downloaded %d %s files to %s", len(written), config["prefix"], out)
    return written


def download_epics(
    data_dir: Path | str | None = None,
    *,
    atomic_numbers: Iterable[int] | None = None,
    libraries: Iterable[str] = ("eadl", "epdl"),
) -> dict[str, list[Path]]:
    """Download EADL and EPDL files into ``{data_dir}/{library}/``

    Parameters
    ----------
    data_dir : Path | str | None, optional
        Parent directory (default: current directory).
    atomic_numbers : iterable of int, optional
        Elements to fetch (default: all).
    libraries : iterable of str, optional
        Subset of ``LIBRARY_URLS`` to download.

    Returns
    -------
    dict[str, list[Path]]
        Files written per library.
    """
    parent = Path(data_dir) if data_dir else Path.cwd()
    selected = None if atomic_numbers is None else list(atomic_numbers)
    return {
        name: download_library(name, parent / name, atomic_numbers=selected)
        for name in libraries
    }
