"""Shared fixtures for Hizb Tracker tests."""

import json
from http.client import IncompleteRead
from urllib.error import HTTPError

import pytest

from hizbtracker.reader import ProgressStore, VerseFetcher, parse_mapping_document


class FakeResponse:
    """Minimal stand-in for the object urlopen returns."""

    def __init__(self, body: bytes, status: int = 200):
        self._body = body
        self.status = status

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


class TruncatedResponse(FakeResponse):
    """Response whose body ends early, as http.client reports it."""

    def __init__(self):
        super().__init__(b"")

    def read(self):
        raise IncompleteRead(b"{", 100)


class FakeOpener:
    """
    urlopen replacement serving canned surah payloads.

    `surahs` maps surah number -> payload dict (the API's "data" field).
    `failures` maps surah number -> exception to raise instead.
    """

    def __init__(self, surahs=None, failures=None):
        self.surahs = surahs or {}
        self.failures = failures or {}
        self.requested = []
        self.on_request = None

    def __call__(self, req, timeout=None):
        url = req.full_url
        self.requested.append(url)
        surah_number = int(url.rstrip("/").split("/")[-2])
        if self.on_request:
            self.on_request(surah_number)
        if surah_number in self.failures:
            raise self.failures[surah_number]
        if surah_number not in self.surahs:
            raise HTTPError(url, 404, "Not Found", None, None)
        body = json.dumps({"code": 200, "status": "OK", "data": self.surahs[surah_number]})
        return FakeResponse(body.encode("utf-8"))


def make_surah(number: int, verse_count: int, name: str | None = None) -> dict:
    return {
        "number": number,
        "name": name if name is not None else f"سورة{number}",
        "englishName": f"Surah {number}",
        "ayahs": [
            {"number": i, "numberInSurah": i, "text": f"آية {number}:{i}"}
            for i in range(1, verse_count + 1)
        ],
    }


def keyed_document(mapping_by_division: dict[int, dict[str, str]]) -> dict:
    return {str(n): {"hizb_number": n, "verse_mapping": vm} for n, vm in mapping_by_division.items()}


def full_keyed_document() -> dict:
    """All 60 hizbs, each spanning the end of one surah and the start of the next."""
    return keyed_document({
        n: {str(n + 1): "1-3", str(n): "5-9"} for n in range(1, 61)
    })


@pytest.fixture
def opener():
    return FakeOpener({n: make_surah(n, 10) for n in range(1, 62)})


@pytest.fixture
def fetcher(opener):
    return VerseFetcher(api_base="https://api.example.test/v1", opener=opener)


@pytest.fixture
def store(tmp_path):
    return ProgressStore(tmp_path / "progress.db")


@pytest.fixture
def mapping():
    return parse_mapping_document(full_keyed_document())
