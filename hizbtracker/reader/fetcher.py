"""
VerseFetcher - Fetch surah text from the remote API with a session cache.

Surahs are cached by number for the lifetime of the fetcher. The cache is
never evicted and never written to disk.
"""

import json
import logging
from http.client import HTTPException
from typing import Callable, Iterable, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from hizbtracker.config import DEFAULT_API_BASE, DEFAULT_EDITION, DEFAULT_REQUEST_TIMEOUT, USER_AGENT
from hizbtracker.errors import FetchError
from hizbtracker.schemas import Surah, SurahRange, VerseBlock

logger = logging.getLogger(__name__)


class VerseFetcher:
    """
    Fetch surahs from an alquran.cloud style API.

    Each surah is requested at most once per fetcher instance.
    """

    def __init__(
        self,
        api_base: str = DEFAULT_API_BASE,
        edition: str = DEFAULT_EDITION,
        timeout: Optional[float] = DEFAULT_REQUEST_TIMEOUT,
        opener: Callable = urlopen,
    ):
        """
        Initialize fetcher.

        Args:
            api_base: API root, e.g. https://api.alquran.cloud/v1
            edition: Text edition requested for every surah
            timeout: Socket timeout in seconds (None for the transport default)
            opener: urlopen-compatible callable, replaceable in tests
        """
        self.api_base = api_base.rstrip("/")
        self.edition = edition
        self.timeout = timeout
        self._opener = opener
        self._cache: dict[int, Surah] = {}

    def surah_url(self, surah_number: int) -> str:
        return f"{self.api_base}/surah/{surah_number}/{self.edition}"

    @property
    def cached_surahs(self) -> list[int]:
        """Surah numbers currently in the cache."""
        return sorted(self._cache)

    def clear_cache(self):
        self._cache.clear()

    def _get_json(self, surah_number: int) -> dict:
        url = self.surah_url(surah_number)
        req = Request(url, headers={"User-Agent": USER_AGENT, "Accept": "application/json"})
        try:
            with self._opener(req, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise FetchError(surah_number, f"HTTP {status} for {url}")
                body = response.read()
        except HTTPError as e:
            raise FetchError(surah_number, f"HTTP {e.code} for {url}") from e
        except (URLError, OSError, HTTPException) as e:
            reason = getattr(e, "reason", e)
            raise FetchError(surah_number, str(reason)) from e

        try:
            return json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FetchError(surah_number, f"invalid JSON: {e}") from e

    def fetch_surah(self, surah_number: int) -> Surah:
        """
        Get a surah, from cache when possible.

        Raises:
            FetchError: On HTTP/transport failure or an unexpected payload
        """
        if surah_number in self._cache:
            logger.debug(f"Cache hit for surah {surah_number}")
            return self._cache[surah_number]

        logger.info(f"Fetching surah {surah_number}")
        try:
            payload = self._get_json(surah_number)
        except FetchError as e:
            logger.warning(f"Fetch failed: {e}")
            raise

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, dict):
            raise FetchError(surah_number, "response has no data payload")
        try:
            surah = Surah.model_validate(data)
        except ValidationError as e:
            raise FetchError(surah_number, f"unexpected surah payload: {e.error_count()} errors") from e

        self._cache[surah_number] = surah
        return surah


def fetch_division_blocks(fetcher: VerseFetcher, ranges: Iterable[SurahRange]) -> list[VerseBlock]:
    """
    Fetch and slice every surah of a division, one after another.

    The first FetchError propagates and the remaining surahs are not
    requested.
    """
    blocks = []
    for surah_range in ranges:
        surah = fetcher.fetch_surah(surah_range.surah_number)
        verses = surah_range.verses
        blocks.append(VerseBlock(
            surah_number=surah_range.surah_number,
            surah_name=surah.display_name(surah_range.surah_number),
            ayahs=surah.ayahs_in_range(verses.from_verse, verses.to_verse),
        ))
    return blocks
