"""
Roadmap Tracker - Step-by-step learning roadmaps

Streamlit application showing a track's roadmap: one step open at a time,
later steps locked until earlier ones are completed or skipped.

Usage:
    streamlit run app.py
"""

import streamlit as st

from roadmap.schemas import StepStatus
from roadmap.tracker import RoadmapSession, LoadState, StepView
from roadmap.utils import load_settings, configure_logging
from roadmap.viewer import (
    get_roadmap_css,
    render_step_header,
    render_step_body,
    render_progress,
    view_more_label,
    render_empty_roadmap,
    render_load_error,
    LOADING_MESSAGE,
)


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

st.set_page_config(
    page_title="Roadmap",
    page_icon="🗺️",
    layout="centered",
)


# -----------------------------------------------------------------------------
# Session State Initialization
# -----------------------------------------------------------------------------

def on_progress_update(percentage: int):
    """Progress callback fired by the session after load and status changes."""
    st.session_state.progress_percentage = percentage


def init_session_state():
    """Initialize session state variables."""
    if "settings" not in st.session_state:
        st.session_state.settings = load_settings()
        configure_logging(st.session_state.settings.log_level)

    if "roadmap" not in st.session_state:
        settings = st.session_state.settings
        if settings.db_path.exists():
            st.session_state.roadmap = RoadmapSession.from_settings(
                settings, on_progress_update=on_progress_update
            )
        else:
            st.session_state.roadmap = None

    if "progress_percentage" not in st.session_state:
        st.session_state.progress_percentage = 0


# -----------------------------------------------------------------------------
# Sidebar: Track Selection
# -----------------------------------------------------------------------------

def render_sidebar():
    """Render the sidebar with track selector and progress."""
    st.sidebar.title("🗺️ Roadmap")

    session = st.session_state.roadmap
    if not session:
        st.sidebar.error("Database not found. Please run scripts/compile_roadmap.py first.")
        return

    tracks = session.step_store.get_tracks()
    if not tracks:
        st.sidebar.info("No tracks available.")
        return

    index = tracks.index(session.track_id) if session.track_id in tracks else 0
    track_id = st.sidebar.selectbox("Track", tracks, index=index)
    if track_id != session.track_id:
        with st.spinner(LOADING_MESSAGE):
            session.activate(track_id)

    if session.state == LoadState.READY:
        percentage = st.session_state.progress_percentage
        st.sidebar.markdown(
            f"**Progress:** {session.engine.completed_count}/{session.engine.total_steps} steps ({percentage}%)"
        )
        st.sidebar.progress(percentage / 100)

        if st.sidebar.button("Reset progress", disabled=not session.engine.statuses):
            session.reset_progress()
            st.rerun()


# -----------------------------------------------------------------------------
# Main Content: Roadmap
# -----------------------------------------------------------------------------

def render_roadmap_view():
    """Render the steps of the active track."""
    session = st.session_state.roadmap
    if not session:
        return

    if session.state == LoadState.FAILED:
        st.markdown(render_load_error(str(session.error)), unsafe_allow_html=True)
        if st.button("Retry"):
            session.activate(session.track_id)
            st.rerun()
        return

    if session.state == LoadState.IDLE:
        st.info("Sign in and pick a track to see your roadmap.")
        return

    if session.error:
        st.warning(str(session.error))

    st.markdown(get_roadmap_css(), unsafe_allow_html=True)
    st.markdown(render_progress(st.session_state.progress_percentage), unsafe_allow_html=True)

    views = session.step_views()
    if not views:
        st.markdown(render_empty_roadmap(), unsafe_allow_html=True)
        return

    for view in views:
        render_step(view)

    render_paging_buttons()


def render_step(view: StepView):
    """Render one step: header, toggle and (when open) its content."""
    session = st.session_state.roadmap
    step_id = view.step.id

    col1, col2 = st.columns([8, 2])
    with col1:
        st.markdown(render_step_header(view), unsafe_allow_html=True)
    with col2:
        if st.button(
            "Close" if view.is_expanded else "Open",
            key=f"toggle_{step_id}",
            disabled=not view.is_accessible,
            use_container_width=True,
        ):
            session.toggle_expand(step_id)
            st.rerun()

    if not view.is_expanded:
        return

    with st.container(border=True):
        st.markdown(render_step_body(view), unsafe_allow_html=True)

        col1, col2, col3, col4 = st.columns(4)
        with col1:
            if st.button("Complete", key=f"complete_{step_id}", type="primary",
                         disabled=view.status == StepStatus.COMPLETED):
                set_status(step_id, StepStatus.COMPLETED)
        with col2:
            if st.button("Skip", key=f"skip_{step_id}",
                         disabled=view.status == StepStatus.SKIPPED):
                set_status(step_id, StepStatus.SKIPPED)
        with col3:
            if st.button("Reset", key=f"reset_{step_id}",
                         disabled=view.status == StepStatus.NOT_STARTED):
                set_status(step_id, StepStatus.NOT_STARTED)
        with col4:
            if st.button("Next →", key=f"next_{step_id}",
                         disabled=not session.engine.can_advance(step_id)):
                next_id = session.advance(step_id)
                if next_id:
                    st.toast(f"Next: {session.engine.get_step(next_id).title}")
                st.rerun()


def set_status(step_id: str, status: StepStatus):
    """Change a step's status and rerun."""
    st.session_state.roadmap.change_status(step_id, status)
    st.rerun()


def render_paging_buttons():
    """Render "view more" or "hide steps" under the list."""
    session = st.session_state.roadmap
    engine = session.engine

    label = view_more_label(engine.remaining_count, engine.steps_per_load)
    if label:
        if st.button(f"＋ {label}", use_container_width=True):
            session.view_more()
            st.rerun()
    elif engine.can_hide:
        if st.button("－ Hide steps", use_container_width=True):
            session.hide_extra()
            st.rerun()


# -----------------------------------------------------------------------------
# Main App
# -----------------------------------------------------------------------------

def main():
    """Main application entry point."""
    init_session_state()
    render_sidebar()
    render_roadmap_view()


if __name__ == "__main__":
    main()
