#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (c) 2026 Melek Derman
#
# SPDX-License-Identifier: MIT
# -----------------------------------------------------------------------------

"""
Tests for the EPICS downloader

No network access: the HTTP layer is replaced with an in-memory fake
serving one index page and a few element files.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest

pytest.importorskip("bs4")

from pyfluo.exceptions import DownloadError
from pyfluo.io import download
from pyfluo.io.download import download_epics, download_library, find_element_links

BASE = "https://example.org/EPDL.ELEMENTS/getza.htm"

INDEX = """
<html><body>
  <a href="index.htm">back</a>
  <a href="ZA026000">Fe</a>
  <a href="ZA029000">Cu</a>
  <a href="ZA082000">Pb</a>
</body></html>
"""


class FakeRequestException(Exception):
    pass


class FakeResponse:

    def __init__(self, url: str, text: str = "", status: int = 200) -> None:
        self.url = url
        self.text = text
        self.status = status

    def __enter__(self):
        return self

    def __exit__(self, *exc) -> None:
        return None

    def raise_for_status(self) -> None:
        if self.status >= 400:
            raise FakeRequestException(f"HTTP {self.status} for {self.url}")

    def iter_content(self, size: int):
        yield f"data for {self.url}".encode()


@pytest.fixture
def fake_http(monkeypatch):
    calls: list[str] = []

    def get(url, timeout=None, stream=False):
        calls.append(url)
        if url.endswith("getza.htm"):
            return FakeResponse(url, INDEX)
        if url.endswith("ZA082000"):
            return FakeResponse(url, status=404)
        return FakeResponse(url)

    fake = SimpleNamespace(get=get, RequestException=FakeRequestException)
    monkeypatch.setattr(download, "_requests", lambda: fake)
    return calls


class TestFindElementLinks:

    def test_element_links(self) -> None:
        links = find_element_links(INDEX, BASE)
        assert sorted(links) == [26, 29, 82]
        assert links[29] == "https://example.org/EPDL.ELEMENTS/ZA029000"

    def test_no_links(self) -> None:
        with pytest.raises(DownloadError):
            find_element_links("<html><a href='index.htm'>x</a></html>", BASE)


class TestDownloadLibrary:

    def test_unknown_library(self, tmp_path) -> None:
        with pytest.raises(ValueError):
            download_library("eedl", tmp_path)

    def test_selected_elements(self, tmp_path, fake_http) -> None:
        written = download_library("epdl", tmp_path, atomic_numbers=[29, 26, 29])
        assert [p.name for p in written] == ["EPDL.ZA026000.endf", "EPDL.ZA029000.endf"]
        assert written[1].read_bytes().endswith(b"ZA029000")

    def test_missing_element_is_skipped(self, tmp_path, fake_http) -> None:
        assert download_library("epdl", tmp_path, atomic_numbers=[1]) == []

    def test_failed_file_is_skipped(self, tmp_path, fake_http) -> None:
        written = download_library("eadl", tmp_path)
        assert [p.name for p in written] == ["EADL.ZA026000.endf", "EADL.ZA029000.endf"]
        assert not (tmp_path / "EADL.ZA082000.endf").exists()

    def test_index_failure(self, tmp_path, monkeypatch) -> None:
        def get(url, timeout=None, stream=False):
            return FakeResponse(url, status=503)

        fake = SimpleNamespace(get=get, RequestException=FakeRequestException)
        monkeypatch.setattr(download, "_requests", lambda: fake)
        with pytest.raises(DownloadError):
            download_library("eadl", tmp_path)


def test_download_epics_layout(tmp_path, fake_http) -> None:
    result = download_epics(tmp_path, atomic_numbers=[29])
    assert (tmp_path / "eadl" / "EADL.ZA029000.endf").is_file()
    assert (tmp_path / "epdl" / "EPDL.ZA029000.endf").is_file()
    assert set(result) == {"eadl", "epdl"}
