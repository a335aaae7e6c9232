"""
Hizb Tracker Reader - Runtime components for reading and tracking hizbs.

This module provides:
- load_mapping_document / resolve: hizb -> surah verse ranges
- VerseFetcher: surah text from the remote API, cached per session
- build_division_record: hizb.json records from hizb-quarter payloads
- ProgressStore: done flags persisted in SQLite
- ReaderSession: selection state machine tying it all together
"""

from .loader import (
    load_mapping_document,
    parse_mapping_document,
    resolve,
    check_division_number,
)

from .fetcher import (
    VerseFetcher,
    fetch_division_blocks,
)

from .builder import (
    quarters_for_division,
    merge_ayahs_to_mapping,
    build_division_record,
)

from .progress import (
    ProgressStore,
)

from .session import (
    ReaderSession,
    ReadingPane,
    PaneState,
    division_title,
)

__all__ = [
    # Loader
    "load_mapping_document",
    "parse_mapping_document",
    "resolve",
    "check_division_number",
    # Fetcher
    "VerseFetcher",
    "fetch_division_blocks",
    # Builder
    "quarters_for_division",
    "merge_ayahs_to_mapping",
    "build_division_record",
    # Progress
    "ProgressStore",
    # Session
    "ReaderSession",
    "ReadingPane",
    "PaneState",
    "division_title",
]
