"""
Hizb Tracker - Read the 60 hizbs of the Quran and track what is done.

Streamlit application: pick a hizb from the grid, read its verses fetched
from alquran.cloud, and mark it as read.

Usage:
    streamlit run app.py
"""

import logging

import streamlit as st

from hizbtracker.config import TOTAL_DIVISIONS, load_settings
from hizbtracker.reader import PaneState, ReaderSession
from hizbtracker.viewer import division_label, get_reader_css, grid_label, render_reading_pane


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

GRID_COLUMNS = 10

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)

st.set_page_config(
    page_title="Hizb Tracker",
    page_icon="📖",
    layout="wide",
    initial_sidebar_state="expanded",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def init_session_state():
    """Initialize session state variables."""
    if "session" not in st.session_state:
        st.session_state.session = ReaderSession.from_settings(load_settings())


def open_division(division: int):
    """Button callback: select a hizb; its text loads on the next run."""
    st.session_state.session.select(division)


# -----------------------------------------------------------------------------
# Sidebar: Progress
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with progress summary and shortcuts."""
    session = st.session_state.session
    st.sidebar.title("📖 Hizb Tracker")

    stats = session.progress_summary()
    st.sidebar.markdown(
        f"**Progress:** {stats['completed']}/{stats['total']} hizbs ({stats['completion_percent']}%)"
    )
    st.sidebar.progress(stats["completed"] / stats["total"])

    st.sidebar.divider()

    next_unread = stats["next_unread"]
    if next_unread:
        st.sidebar.button(
            f"Continue with hizb {next_unread}",
            on_click=open_division,
            args=(next_unread,),
            width="stretch",
        )
    else:
        st.sidebar.success("All hizbs read!")

    with st.sidebar.expander("Reset progress"):
        st.warning("This clears every read mark.")
        if st.button("Reset all progress"):
            session.reset_progress()
            st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Grid and Reading Pane
# -----------------------------------------------------------------------------

def render_grid():
    """Render the 60 hizb buttons."""
    session = st.session_state.session

    for row_start in range(1, TOTAL_DIVISIONS + 1, GRID_COLUMNS):
        cols = st.columns(GRID_COLUMNS)
        for offset, col in enumerate(cols):
            n = row_start + offset
            with col:
                st.button(
                    grid_label(n, session.done[n - 1], session.selected == n),
                    key=f"hizb_{n}",
                    type="primary" if session.selected == n else "secondary",
                    on_click=open_division,
                    args=(n,),
                    width="stretch",
                )


def render_actions():
    """Render Mark as read / Undo buttons and the status line."""
    session = st.session_state.session

    col1, col2, col3 = st.columns([1, 1, 4])
    with col1:
        if st.button("Mark as read", type="primary", disabled=not session.can_mark_done,
                     width="stretch"):
            session.mark_done()
            st.rerun()
    with col2:
        if st.button("Undo", disabled=not session.can_undo, width="stretch"):
            session.undo()
            st.rerun()
    with col3:
        st.caption(session.status)


def render_reading_view():
    """Render the selected hizb, loading it first if needed."""
    session = st.session_state.session
    pane = session.pane

    if pane.state == PaneState.LOADING and session.selected is not None:
        token = session.selection_token
        with st.spinner(f"Loading {pane.title}..."):
            session.load_division(session.selected, token)
        pane = session.pane

    if pane.division:
        st.subheader(division_label(pane.division))
    st.markdown(get_reader_css(), unsafe_allow_html=True)
    st.markdown(render_reading_pane(pane), unsafe_allow_html=True)


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()

    st.title("Hizb Tracker")
    render_grid()
    st.divider()
    render_actions()
    st.divider()
    render_reading_view()


if __name__ == "__main__":
    main()
