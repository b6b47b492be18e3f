"""ArtSpace Navigator - Streamlit application."""

import time
from datetime import datetime

import streamlit as st

from art_navigator.config import get_settings
from art_navigator.mappings import get_canonical_countries
from art_navigator.models import Artwork
from art_navigator.session import NavigatorSession

# Configuration
MAX_LOG_ENTRIES = 200
ANY_COUNTRY_LABEL = "Any country"
TIMELINE_MIN_YEAR = 1000
TIMELINE_MAX_YEAR = 2030
RESULTS_COLUMNS = 3

st.set_page_config(page_title="ArtSpace Navigator", layout="wide")


# =============================================================================
# Logging
# =============================================================================

def _append_log(level: str, message: str):
    """Append a log entry to session state."""
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    entry = f"{timestamp} | {level:<5} | {message}"
    st.session_state.debug_logs.append(entry)
    st.session_state.debug_logs = st.session_state.debug_logs[-MAX_LOG_ENTRIES:]


def log_event(message: str):
    _append_log("INFO", message)


def component_log_callback(level: str, message: str):
    """Callback for navigator components to log through our system."""
    _append_log(level, message)


# =============================================================================
# Address bar
# =============================================================================

class StreamlitAddressBar:
    """Shareable address backed by st.query_params.

    Streamlit keeps a single history entry per page, so replace and push
    both rewrite the current query string.
    """

    def read(self) -> dict[str, str]:
        return {key: st.query_params[key] for key in st.query_params.keys()}

    def write(self, params: dict[str, str], replace: bool) -> None:
        st.query_params.clear()
        if params:
            st.query_params.update(params)
        st.session_state.address_snapshot = dict(params)


# =============================================================================
# Session State Initialization
# =============================================================================

def init_session_state():
    """Initialize all session state variables."""
    if "debug_logs" not in st.session_state:
        st.session_state.debug_logs = []
    if "notice" not in st.session_state:
        st.session_state.notice = None
    if "navigator" not in st.session_state:
        address_bar = StreamlitAddressBar()
        session = NavigatorSession(address_bar=address_bar, settings=get_settings())
        session.set_logger(component_log_callback)
        session.start()
        st.session_state.address_snapshot = address_bar.read()
        st.session_state.navigator = session
        log_event("Session started")


init_session_state()


def navigator() -> NavigatorSession:
    return st.session_state.navigator


def sync_from_address():
    """Treat an address we did not write ourselves as back/forward navigation."""
    current = navigator().url.address_bar.read()
    if current != st.session_state.address_snapshot:
        log_event(f"Navigation to {current or 'bare path'}")
        st.session_state.address_snapshot = current
        navigator().navigate(current)


# =============================================================================
# Input handlers
# =============================================================================

def on_timeline_change():
    start, end = st.session_state.timeline
    navigator().change_time_range(start, end)


def on_country_change():
    country = st.session_state.country_picker
    if country == ANY_COUNTRY_LABEL:
        return
    st.session_state.notice = navigator().select_country(country)


def on_point_pick():
    st.session_state.notice = navigator().click_map(st.session_state.pick_lat, st.session_state.pick_lng)


def on_clear_filters():
    navigator().clear_filters()
    navigator().close_results()
    st.session_state.notice = None


# =============================================================================
# UI Components
# =============================================================================

def render_sidebar():
    """Render the sidebar with the timeline, map picker and debug console."""
    session = navigator()
    current = session.filter

    with st.sidebar:
        st.subheader("Timeline")
        st.session_state.timeline = (current.time_range.start, current.time_range.end)
        st.slider(
            "Years",
            min_value=min(TIMELINE_MIN_YEAR, current.time_range.start),
            max_value=max(TIMELINE_MAX_YEAR, current.time_range.end),
            key="timeline",
            on_change=on_timeline_change,
        )

        st.subheader("Map")
        counts = session.catalog.country_counts(current.time_range)
        options = [ANY_COUNTRY_LABEL] + get_canonical_countries()
        st.session_state.country_picker = current.location if current.location in options else ANY_COUNTRY_LABEL
        st.selectbox(
            "Country",
            options,
            key="country_picker",
            format_func=lambda c: c if c == ANY_COUNTRY_LABEL else f"{c} ({counts.get(c, 0)})",
            on_change=on_country_change,
            help="Pick a country to see its artworks in the selected years",
        )

        with st.expander("Pick a point", expanded=False):
            col1, col2 = st.columns(2)
            with col1:
                st.number_input("Latitude", min_value=-90.0, max_value=90.0, value=43.77, key="pick_lat")
            with col2:
                st.number_input("Longitude", min_value=-180.0, max_value=180.0, value=11.25, key="pick_lng")
            st.button("Select point", on_click=on_point_pick)

        st.button("Clear filters", on_click=on_clear_filters)

        with st.expander("Debug Console", expanded=False):
            if st.button("Clear Logs"):
                st.session_state.debug_logs = []
            log_text = "\n".join(st.session_state.debug_logs) if st.session_state.debug_logs else "No logs yet."
            st.code(log_text, language=None)


def render_header(artworks: list[Artwork]):
    current = navigator().filter
    st.markdown("### ArtSpace Navigator")
    st.caption("Explore art through time and space")

    cols = st.columns(4)
    cols[0].metric("Artworks found", len(artworks))
    cols[1].metric("Years", f"{current.time_range.start} - {current.time_range.end}")
    cols[2].metric("Location", current.location or "Anywhere")
    cols[3].metric("Artist / Movement", current.artist or current.movement or "Any")


def render_chat():
    """Render the chat history and input."""
    session = navigator()
    st.markdown("**AI 艺术品助手**")

    with st.container(height=320):
        for message in session.chat.messages:
            with st.chat_message("user" if message.sender == "user" else "assistant"):
                st.write(message.text)
                st.caption(message.timestamp.strftime("%H:%M:%S"))

    prompt = st.chat_input(
        "例如：显示文艺复兴时期意大利的画作，或查找19世纪法国印象派作品...",
        disabled=session.chat.busy,
    )
    if prompt:
        log_event(f"Chat submitted ({len(prompt)} chars)")
        with st.spinner("正在解析您的查询..."):
            session.submit_chat(prompt)
        st.rerun()


def render_map(artworks: list[Artwork]):
    if not artworks:
        st.info("No artworks in the selected place and period.")
        return
    st.map(
        {
            "lat": [a.coordinates[1] for a in artworks],
            "lon": [a.coordinates[0] for a in artworks],
        },
        zoom=1,
    )


def render_artwork(artwork: Artwork):
    st.image(artwork.image_url, use_container_width=True)
    st.markdown(f"**{artwork.title}**")
    st.caption(f"{artwork.artist}, {artwork.year}")
    with st.expander("Details", expanded=False):
        metadata_fields = [
            ("Location", str(artwork.location)),
            ("Period", artwork.period),
            ("Movement", artwork.movement),
            ("Medium", artwork.medium),
        ]
        for label, value in metadata_fields:
            if value:
                st.write(f"**{label}:** {value}")
        if artwork.description:
            st.write(artwork.description)


def render_results():
    """Render the results view opened by a cascade."""
    view = navigator().results
    if view is None:
        return

    st.divider()
    header_col, close_col = st.columns([5, 1])
    header_col.markdown(f"#### {view.message}")
    if close_col.button("Close"):
        navigator().close_results()
        st.rerun()

    for error in view.errors:
        st.error(error)

    for row_start in range(0, len(view.artworks), RESULTS_COLUMNS):
        cols = st.columns(RESULTS_COLUMNS)
        for col, artwork in zip(cols, view.artworks[row_start:row_start + RESULTS_COLUMNS]):
            with col:
                render_artwork(artwork)


def run_pending_cascade():
    """Let the controls settle, then open the results view if a cascade is due."""
    scheduler = navigator().reconciler.scheduler
    remaining = scheduler.time_remaining()
    if remaining is None:
        return
    time.sleep(remaining)
    if navigator().tick():
        st.rerun()


# =============================================================================
# Main Application
# =============================================================================

def main():
    """Main application entry point."""
    sync_from_address()

    render_sidebar()

    artworks = navigator().filtered_artworks()
    render_header(artworks)

    if st.session_state.notice:
        st.warning(st.session_state.notice)
        st.session_state.notice = None

    col_map, col_chat = st.columns([3, 2], gap="large")
    with col_map:
        render_map(artworks)
    with col_chat:
        render_chat()

    render_results()
    run_pending_cascade()


if __name__ == "__main__":
    main()
