"""
Reading pane renderer - Generate HTML for the hizb reading pane.

Features:
- Right-to-left Uthmani text with surah headers
- Verse numbers in ornate brackets
- Loading, empty and error placeholders
- Grid button labels with read/selected indicators
"""

import html
from typing import Optional

from hizbtracker.reader.session import PaneState, ReadingPane
from hizbtracker.schemas import Ayah, VerseBlock


# Grid indicators, same order of precedence as in grid_label()
INDICATOR_SELECTED = "→"
INDICATOR_DONE = "✓"
INDICATOR_UNREAD = "○"


def get_reader_css() -> str:
    """Get CSS styles for the reading pane."""
    return """
    <style>
    .reader {
        direction: rtl;
        text-align: right;
        font-family: "Amiri Quran", "KFGQPC Uthmanic Script HAFS", "Scheherazade New", serif;
    }
    .sura-header {
        background: #f1f8e9;
        border-right: 4px solid #388E3C;
        border-radius: 6px;
        padding: 0.5em 1em;
        margin: 1.5em 0 0.8em 0;
        font-size: 1.3em;
        font-weight: 600;
        color: #2E7D32;
        text-align: center;
    }
    .ayah-line {
        font-size: 1.6em;
        line-height: 2.4em;
        margin: 0.2em 0;
    }
    .ayah-num {
        color: #8D6E63;
        font-size: 0.8em;
        white-space: nowrap;
    }
    .reader-empty {
        color: #888;
        padding: 2em;
        text-align: center;
        direction: ltr;
    }
    .reader-error {
        background: #ffebee;
        border-left: 4px solid #D32F2F;
        border-radius: 6px;
        padding: 1em 1.5em;
        color: #B71C1C;
        direction: ltr;
        text-align: left;
    }
    .reader-error small {
        color: #666;
        display: block;
        margin-top: 0.5em;
    }
    </style>
    """


def division_label(division: int) -> str:
    """Arabic hizb label, used for pane titles and grid buttons."""
    return f"حزب {division}"


def grid_label(division: int, done: bool, selected: bool) -> str:
    """Button label for the hizb grid, e.g. '✓ حزب 12'."""
    if selected:
        indicator = INDICATOR_SELECTED
    elif done:
        indicator = INDICATOR_DONE
    else:
        indicator = INDICATOR_UNREAD
    return f"{indicator} {division_label(division)}"


def render_surah_header(block: VerseBlock) -> str:
    name = html.escape(block.surah_name)
    return f'<div class="sura-header">سورة {name} ({block.surah_number})</div>'


def render_ayah_line(ayah: Ayah) -> str:
    return (
        f'<div class="ayah-line"><span>{html.escape(ayah.text)}</span> '
        f'<span class="ayah-num">﴿{ayah.number_in_surah}﴾</span></div>'
    )


def render_verse_blocks(blocks: list[VerseBlock]) -> str:
    """Render every block as a surah header followed by its ayahs."""
    parts = []
    for block in blocks:
        parts.append(render_surah_header(block))
        parts.extend(render_ayah_line(ayah) for ayah in block.ayahs)
    return '<div class="reader">' + "".join(parts) + "</div>"


def render_empty(message: str = "Select a hizb to start reading.") -> str:
    return f'<div class="reader-empty">{html.escape(message)}</div>'


def render_loading() -> str:
    return render_empty("Loading hizb text...")


def render_error(message: str, hints: Optional[list[str]] = None) -> str:
    """Error box with optional remediation hints."""
    hint_html = ""
    if hints:
        hint_html = "".join(f"<small>{html.escape(h)}</small>" for h in hints)
    return f'<div class="reader-error">{html.escape(message)}{hint_html}</div>'


def render_reading_pane(pane: ReadingPane) -> str:
    """Render whatever the pane currently holds."""
    if pane.state == PaneState.READY:
        return render_verse_blocks(pane.blocks)
    if pane.state == PaneState.LOADING:
        return render_loading()
    if pane.state == PaneState.ERROR:
        return render_error(pane.error or "Unknown error", pane.hints)
    return render_empty()
