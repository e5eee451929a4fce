"""
Roadmap Viewer - Rendering components for roadmap display.

This module provides:
- Step header/body rendering with status badges
- Progress bar and empty/error states
- Paging labels
"""

from .roadmap import (
    get_roadmap_css,
    render_status_badge,
    render_step_header,
    render_video_links,
    render_step_body,
    render_progress,
    view_more_label,
    render_empty_roadmap,
    render_load_error,
    STATUS_LABELS,
    STATUS_COLORS,
    EMPTY_ROADMAP_MESSAGE,
    LOAD_ERROR_TITLE,
    LOADING_MESSAGE,
)

__all__ = [
    "get_roadmap_css",
    "render_status_badge",
    "render_step_header",
    "render_video_links",
    "render_step_body",
    "render_progress",
    "view_more_label",
    "render_empty_roadmap",
    "render_load_error",
    "STATUS_LABELS",
    "STATUS_COLORS",
    "EMPTY_ROADMAP_MESSAGE",
    "LOAD_ERROR_TITLE",
    "LOADING_MESSAGE",
]
