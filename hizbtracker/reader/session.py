"""
ReaderSession - Selection state, reading pane and done flags for one user.

Combines the mapping (content), VerseFetcher (remote text) and
ProgressStore (user state). All mutable state lives on the session
instance; the Streamlit app keeps one per browser session.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from hizbtracker.config import TOTAL_DIVISIONS, Settings
from hizbtracker.errors import FetchError, InvalidRangeError, MappingLoadError, NoMappingError
from hizbtracker.schemas import MappingDocument, VerseBlock

from .fetcher import VerseFetcher, fetch_division_blocks
from .loader import check_division_number, load_mapping_document, resolve
from .progress import ProgressStore

logger = logging.getLogger(__name__)


STATUS_MAPPING_LOADED = "Hizb mapping loaded. Choose a hizb."
STATUS_MAPPING_FAILED = "Problem with the hizb mapping file."
STATUS_READY = 'Ready. Choose a hizb, read it, then press "Mark as read".'

MAPPING_LOAD_HINTS = [
    "Check that the mapping file exists (HIZB_MAPPING_PATH, default data/hizb.json).",
    "Generate it with: python scripts/build_hizb_mapping.py",
    "Open the file and make sure it is valid JSON, not an error page.",
]
NO_MAPPING_HINTS = [
    "The mapping file does not match the expected layout.",
    'Expected {"1": {"verse_mapping": {...}}, ...} or a list of 60 records with "verse_mapping".',
    "Share the first 30 lines of the file to get it fixed.",
]
FETCH_HINTS = [
    "Check your internet connection, then select the hizb again.",
]


class PaneState(str, Enum):
    """What the reading pane is currently showing."""
    EMPTY = "empty"       # Nothing selected yet
    LOADING = "loading"   # Selected, text not loaded yet
    READY = "ready"       # Verse blocks available
    ERROR = "error"       # Load failed, message shown instead of text


@dataclass
class ReadingPane:
    state: PaneState = PaneState.EMPTY
    division: Optional[int] = None
    title: str = ""
    blocks: list[VerseBlock] = field(default_factory=list)
    error: Optional[str] = None
    hints: list[str] = field(default_factory=list)


def division_title(division: int) -> str:
    return f"Hizb {division}"


class ReaderSession:
    """
    Selection state machine over the 60 hizbs.

    States are NoSelection (selected is None) and Selected(n). Every
    select() advances selection_token; a load only commits its result
    when the token it started with is still current.
    """

    def __init__(
        self,
        mapping: Optional[MappingDocument],
        fetcher: VerseFetcher,
        store: ProgressStore,
        mapping_error: Optional[MappingLoadError] = None,
    ):
        """
        Initialize session.

        Args:
            mapping: Loaded mapping document, or None if loading failed
            fetcher: VerseFetcher used for every division open
            store: ProgressStore holding the done flags
            mapping_error: The load failure when mapping is None
        """
        self.mapping = mapping
        self.mapping_error = mapping_error
        self.fetcher = fetcher
        self.store = store
        self.done: list[bool] = store.load()
        self.selected: Optional[int] = None
        self.selection_token = 0
        self.pane = ReadingPane()

        if mapping is None:
            self.pane = self._mapping_error_pane(None)
            self.status = STATUS_MAPPING_FAILED
        else:
            self.status = STATUS_MAPPING_LOADED

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReaderSession":
        """Build a session from Settings, tolerating a missing mapping file."""
        mapping, error = None, None
        try:
            mapping = load_mapping_document(settings.mapping_path)
        except MappingLoadError as e:
            logger.error(str(e))
            error = e

        fetcher = VerseFetcher(
            api_base=settings.api_base,
            edition=settings.edition,
            timeout=settings.request_timeout,
        )
        store = ProgressStore(settings.progress_db)
        return cls(mapping, fetcher, store, mapping_error=error)

    # -------------------------------------------------------------------------
    # Selection
    # -------------------------------------------------------------------------

    def select(self, division: int) -> int:
        """
        Select a division and put the pane in the loading state.

        Returns:
            The selection token the matching load_division call must carry
        """
        check_division_number(division)
        self.selected = division
        self.selection_token += 1
        self.pane = ReadingPane(
            state=PaneState.LOADING,
            division=division,
            title=division_title(division),
        )
        return self.selection_token

    def is_current(self, token: int) -> bool:
        return token == self.selection_token

    def load_division(self, division: int, token: int) -> bool:
        """
        Resolve and fetch a division, then commit it to the reading pane.

        Surahs are fetched in ascending order; the first failure stops the
        load and the pane shows an error instead of partial text.

        Returns:
            True if verse text was committed, False on error or when the
            result was discarded because a newer selection exists
        """
        if not self.is_current(token):
            logger.debug(f"Skipping load of hizb {division}: token {token} is stale")
            return False

        pane = self._build_pane(division)

        if not self.is_current(token):
            logger.info(f"Discarding result for hizb {division}: selection moved on")
            return False

        self.pane = pane
        if pane.state == PaneState.READY:
            self.status = STATUS_READY
            return True
        if self.mapping is None:
            self.status = STATUS_MAPPING_FAILED
        return False

    def open_division(self, division: int) -> bool:
        """Select a division and load it straight away."""
        token = self.select(division)
        return self.load_division(division, token)

    def _build_pane(self, division: int) -> ReadingPane:
        title = division_title(division)
        if self.mapping is None:
            return self._mapping_error_pane(division)

        try:
            ranges = resolve(self.mapping, division)
        except NoMappingError as e:
            logger.warning(str(e))
            return ReadingPane(
                state=PaneState.ERROR, division=division, title=title,
                error=str(e), hints=NO_MAPPING_HINTS,
            )
        except InvalidRangeError as e:
            logger.warning(f"Hizb {division}: {e}")
            return ReadingPane(
                state=PaneState.ERROR, division=division, title=title,
                error=f"Hizb {division} has a malformed entry: {e}", hints=NO_MAPPING_HINTS,
            )

        try:
            blocks = fetch_division_blocks(self.fetcher, ranges)
        except FetchError as e:
            return ReadingPane(
                state=PaneState.ERROR, division=division, title=title,
                error=f"Could not load the text from the internet. {e.message}",
                hints=FETCH_HINTS,
            )

        return ReadingPane(state=PaneState.READY, division=division, title=title, blocks=blocks)

    def _mapping_error_pane(self, division: Optional[int]) -> ReadingPane:
        detail = str(self.mapping_error) if self.mapping_error else "Mapping file not loaded"
        return ReadingPane(
            state=PaneState.ERROR,
            division=division,
            title=division_title(division) if division else "",
            error=detail,
            hints=MAPPING_LOAD_HINTS,
        )

    # -------------------------------------------------------------------------
    # Done flags
    # -------------------------------------------------------------------------

    def is_done(self, division: int) -> bool:
        check_division_number(division)
        return self.done[division - 1]

    @property
    def can_mark_done(self) -> bool:
        return self.selected is not None and not self.done[self.selected - 1]

    @property
    def can_undo(self) -> bool:
        return self.selected is not None and self.done[self.selected - 1]

    def _set_done(self, value: bool) -> bool:
        if self.selected is None or self.done[self.selected - 1] == value:
            return False
        self.done[self.selected - 1] = value
        self.store.save(self.done)
        return True

    def mark_done(self) -> bool:
        """Mark the selected hizb as read. No-op without a selection."""
        if not self._set_done(True):
            return False
        self.status = f"Hizb {self.selected} marked as read."
        return True

    def undo(self) -> bool:
        """Clear the read mark of the selected hizb. No-op without a selection."""
        if not self._set_done(False):
            return False
        self.status = f"Hizb {self.selected} unmarked."
        return True

    def reset_progress(self):
        """Clear every done flag, in memory and on disk."""
        self.done = [False] * TOTAL_DIVISIONS
        self.store.reset()
        self.status = "Progress reset."

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def next_unread_division(self, after: Optional[int] = None) -> Optional[int]:
        """
        First hizb not marked as read, searching from `after` + 1 and
        wrapping around. None when every hizb is done.
        """
        start = after if after is not None else 0
        for offset in range(TOTAL_DIVISIONS):
            n = (start + offset) % TOTAL_DIVISIONS + 1
            if not self.done[n - 1]:
                return n
        return None

    def progress_summary(self) -> dict:
        """Get progress summary for display."""
        completed = sum(1 for d in self.done if d)
        return {
            "total": TOTAL_DIVISIONS,
            "completed": completed,
            "remaining": TOTAL_DIVISIONS - completed,
            "completion_percent": round(completed / TOTAL_DIVISIONS * 100, 1),
            "next_unread": self.next_unread_division(self.selected),
        }
