"""
Hizb Tracker Viewer - Rendering components for the reading pane.
"""

from .reader import (
    division_label,
    get_reader_css,
    grid_label,
    render_surah_header,
    render_ayah_line,
    render_verse_blocks,
    render_empty,
    render_loading,
    render_error,
    render_reading_pane,
    INDICATOR_SELECTED,
    INDICATOR_DONE,
    INDICATOR_UNREAD,
)

__all__ = [
    "division_label",
    "get_reader_css",
    "grid_label",
    "render_surah_header",
    "render_ayah_line",
    "render_verse_blocks",
    "render_empty",
    "render_loading",
    "render_error",
    "render_reading_pane",
    "INDICATOR_SELECTED",
    "INDICATOR_DONE",
    "INDICATOR_UNREAD",
]
