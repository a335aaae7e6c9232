"""
Hizb Tracker Schemas - Pydantic models for the reading tracker.

This module exports all schema classes for:
- Mapping: verse ranges and the canonical hizb mapping document
- Surah: API surah/ayah payloads and rendered verse blocks
- Progress: the persisted done flags
"""

# Mapping schemas
from .mapping import (
    VerseRange,
    SurahRange,
    MappingShape,
    MappingDocument,
)

# Surah schemas
from .surah import (
    Ayah,
    Surah,
    VerseBlock,
)

# Progress schemas
from .progress import (
    ProgressSnapshot,
    default_done,
)

__all__ = [
    # Mapping
    'VerseRange',
    'SurahRange',
    'MappingShape',
    'MappingDocument',
    # Surah
    'Ayah',
    'Surah',
    'VerseBlock',
    # Progress
    'ProgressSnapshot',
    'default_done',
]
