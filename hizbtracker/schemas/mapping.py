"""
Mapping schemas for Hizb Tracker.

Defines the canonical form of the hizb mapping document and the verse
ranges resolved from it. Two on-disk shapes are accepted; both are
normalised into MappingDocument once, at load time.
"""

import re
from enum import Enum

from pydantic import BaseModel, Field, model_validator

from hizbtracker.errors import InvalidRangeError

# =============================================================================
# RANGE CONVENTION: "A-B" is inclusive on both ends, 1-based verse positions
# =============================================================================

RANGE_PATTERN = re.compile(r"\s*(\d+)\s*-\s*(\d+)\s*", re.ASCII)


class VerseRange(BaseModel):
    """Inclusive range of verse positions within one surah."""
    from_verse: int = Field(..., ge=1)
    to_verse: int = Field(..., ge=1)

    @model_validator(mode="after")
    def check_order(self):
        if self.from_verse > self.to_verse:
            raise ValueError("Invalid range: start must not exceed end")
        return self

    @classmethod
    def parse(cls, value) -> "VerseRange":
        """
        Parse an "A-B" range string.

        Raises:
            InvalidRangeError: If the value is not two positive integers
                separated by a dash with A <= B
        """
        match = RANGE_PATTERN.fullmatch(str(value))
        if not match:
            raise InvalidRangeError(value, "expected 'start-end' with ASCII digits")
        start, end = int(match.group(1)), int(match.group(2))
        if start < 1 or end < 1:
            raise InvalidRangeError(value, "bounds must be positive")
        if start > end:
            raise InvalidRangeError(value, "start is after end")
        return cls(from_verse=start, to_verse=end)

    def contains(self, verse: int) -> bool:
        return self.from_verse <= verse <= self.to_verse


class SurahRange(BaseModel):
    """One (surah -> verse range) pair of a division."""
    surah_number: int = Field(..., ge=1)
    verses: VerseRange


class MappingShape(str, Enum):
    KEYED = "keyed"        # {"1": {"verse_mapping": {...}}, ...}
    SEQUENCE = "sequence"  # [{"hizb": 1, "verse_mapping": {...}}, ...]


class MappingDocument(BaseModel):
    """
    Canonical mapping: division number -> {surah key: range string}.

    Divisions without a usable verse_mapping are simply absent; resolving
    them is a per-division failure, not a load failure.
    """
    shape: MappingShape
    divisions: dict[int, dict[str, str]] = {}

    def has_division(self, division: int) -> bool:
        return division in self.divisions

    @property
    def division_count(self) -> int:
        return len(self.divisions)
