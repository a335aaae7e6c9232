"""
Mapping loader - Read data/hizb.json and resolve divisions to verse ranges.

Provides:
- Shape detection for the two accepted document layouts
- Normalisation into a single MappingDocument, done once per load
- Division -> ordered (surah, verse range) resolution
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Optional

from hizbtracker.config import TOTAL_DIVISIONS
from hizbtracker.errors import InvalidRangeError, MappingLoadError, NoMappingError
from hizbtracker.schemas import MappingDocument, MappingShape, SurahRange, VerseRange

logger = logging.getLogger(__name__)

# Record fields that may carry the division number in the sequence shape
DIVISION_TAG_FIELDS = ("hizb", "hizb_number")
TAG_PATTERN = re.compile(r"\s*\d+\s*", re.ASCII)


def check_division_number(division: int) -> int:
    """Raise ValueError unless 1 <= division <= TOTAL_DIVISIONS."""
    if not isinstance(division, int) or isinstance(division, bool) or not 1 <= division <= TOTAL_DIVISIONS:
        raise ValueError(f"Hizb number must be between 1 and {TOTAL_DIVISIONS}, got {division!r}")
    return division


def _extract_verse_mapping(record: Any) -> Optional[dict[str, str]]:
    """Return the record's verse_mapping as {str: str}, or None if unusable."""
    if not isinstance(record, dict):
        return None
    mapping = record.get("verse_mapping")
    if not isinstance(mapping, dict) or not mapping:
        return None
    return {str(surah): str(verses) for surah, verses in mapping.items()}


def _as_division_number(value: Any) -> Optional[int]:
    """Whole number from an int, integral float or digit string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str) and TAG_PATTERN.fullmatch(value):
        return int(value)
    return None


def _record_tag(record: Any) -> Optional[int]:
    """Explicit division number of a sequence record, if it has one."""
    if not isinstance(record, dict):
        return None
    for field in DIVISION_TAG_FIELDS:
        value = record.get(field)
        tag = _as_division_number(value)
        if tag is not None:
            return tag
    return None


# -----------------------------------------------------------------------------
# Shape normalisation
# -----------------------------------------------------------------------------

def _parse_keyed(raw: dict) -> dict[int, dict[str, str]]:
    divisions = {}
    for n in range(1, TOTAL_DIVISIONS + 1):
        mapping = _extract_verse_mapping(raw.get(str(n)))
        if mapping:
            divisions[n] = mapping
    return divisions


def _parse_sequence(raw: list) -> dict[int, dict[str, str]]:
    # First record wins when several carry the same tag
    tagged: dict[int, Any] = {}
    for record in raw:
        tag = _record_tag(record)
        if tag is not None and tag not in tagged:
            tagged[tag] = record

    divisions = {}
    for n in range(1, TOTAL_DIVISIONS + 1):
        record = tagged.get(n)
        if record is None and n - 1 < len(raw):
            record = raw[n - 1]
        mapping = _extract_verse_mapping(record)
        if mapping:
            divisions[n] = mapping
    return divisions


def parse_mapping_document(raw: Any, source: str | Path = "<memory>") -> MappingDocument:
    """
    Classify a decoded mapping document and normalise it.

    Args:
        raw: Decoded JSON (object keyed by hizb number, or array of records)
        source: Where the data came from, for error messages

    Returns:
        MappingDocument holding every division with a usable verse_mapping

    Raises:
        MappingLoadError: If raw is neither an object nor an array
    """
    if isinstance(raw, dict):
        document = MappingDocument(shape=MappingShape.KEYED, divisions=_parse_keyed(raw))
    elif isinstance(raw, list):
        document = MappingDocument(shape=MappingShape.SEQUENCE, divisions=_parse_sequence(raw))
    else:
        raise MappingLoadError(
            source,
            "expected an object keyed by hizb number or an array of hizb records",
        )

    missing = TOTAL_DIVISIONS - document.division_count
    if missing:
        logger.warning(f"{source}: {missing} of {TOTAL_DIVISIONS} hizbs have no verse_mapping")
    return document


def load_mapping_document(path: str | Path) -> MappingDocument:
    """
    Read and normalise the mapping file.

    Raises:
        MappingLoadError: If the file is missing, not JSON, or of unknown shape
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError:
        raise MappingLoadError(path, "file not found") from None
    except (OSError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MappingLoadError(path, str(e)) from e

    document = parse_mapping_document(raw, source=path)
    logger.info(f"Loaded {path} ({document.shape.value} shape, {document.division_count} hizbs)")
    return document


# -----------------------------------------------------------------------------
# Resolution
# -----------------------------------------------------------------------------

def resolve(document: MappingDocument, division: int) -> list[SurahRange]:
    """
    Resolve a division to its (surah, verse range) pairs.

    Pairs are sorted by ascending surah number regardless of the key
    order in the source document.

    Raises:
        ValueError: If division is outside 1..60
        NoMappingError: If the document has no mapping for the division
        InvalidRangeError: If a surah key or range string is malformed
    """
    check_division_number(division)
    mapping = document.divisions.get(division)
    if not mapping:
        raise NoMappingError(division)

    pairs = []
    for surah_key, range_str in mapping.items():
        if not TAG_PATTERN.fullmatch(surah_key):
            raise InvalidRangeError(surah_key, "surah key must be an integer")
        surah_number = int(surah_key)
        if surah_number < 1:
            raise InvalidRangeError(surah_key, "surah number must be positive")
        pairs.append(SurahRange(surah_number=surah_number, verses=VerseRange.parse(range_str)))

    pairs.sort(key=lambda p: p.surah_number)
    return pairs
