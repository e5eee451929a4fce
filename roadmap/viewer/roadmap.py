"""
Roadmap renderer - Step cards, status badges and paging labels.

Provides:
- Step header and body rendering
- Video link lists
- Progress bar and empty/error states
- "View more" / "Hide steps" labels
"""

import html
from typing import Optional

from roadmap.schemas import StepStatus
from roadmap.tracker import StepView


STATUS_LABELS = {
    StepStatus.NOT_STARTED: "Not started",
    StepStatus.COMPLETED: "Completed",
    StepStatus.SKIPPED: "Skipped",
}

STATUS_COLORS = {
    StepStatus.NOT_STARTED: "#757575",
    StepStatus.COMPLETED: "#388E3C",
    StepStatus.SKIPPED: "#F57C00",
}

EMPTY_ROADMAP_MESSAGE = "No steps have been added to this roadmap yet."
LOAD_ERROR_TITLE = "Failed to load roadmap"
LOADING_MESSAGE = "Loading roadmap..."


def get_roadmap_css() -> str:
    """Get CSS styles for roadmap display."""
    return """
    <style>
    .roadmap-step {
        display: flex;
        align-items: center;
        gap: 0.8em;
        padding: 0.4em 0;
    }
    .roadmap-step-number {
        background: #ede7ff;
        color: #6B46FE;
        width: 28px;
        height: 28px;
        border-radius: 50%;
        display: flex;
        align-items: center;
        justify-content: center;
        font-weight: 600;
        font-size: 0.85em;
    }
    .roadmap-step.locked {
        color: #999;
    }
    .roadmap-step.locked .roadmap-step-number {
        background: #f0f0f0;
        color: #999;
    }
    .roadmap-step-title {
        font-weight: 600;
        flex: 1;
    }
    .roadmap-status {
        font-size: 0.8em;
        padding: 0.2em 0.6em;
        border-radius: 12px;
        background: #f5f5f5;
    }
    .roadmap-description {
        color: #444;
        line-height: 1.6;
        margin-bottom: 0.8em;
    }
    .roadmap-videos {
        margin: 0.5em 0 1em 0;
        padding-left: 1.2em;
    }
    .roadmap-progress {
        background: #f0f0f0;
        border-radius: 8px;
        height: 10px;
        overflow: hidden;
    }
    .roadmap-progress-fill {
        background: #6B46FE;
        height: 100%;
    }
    .roadmap-empty, .roadmap-error {
        padding: 1.5em;
        text-align: center;
        color: #666;
    }
    .roadmap-error-title {
        color: #D32F2F;
        margin-bottom: 0.5em;
    }
    </style>
    """


def render_status_badge(status: StepStatus) -> str:
    """Render a small colored status badge."""
    status = StepStatus(status)
    return (
        f'<span class="roadmap-status" style="color: {STATUS_COLORS[status]};">'
        f'{STATUS_LABELS[status]}</span>'
    )


def render_step_header(view: StepView) -> str:
    """
    Render the always-visible header line of a step.

    Args:
        view: StepView from the engine

    Returns:
        HTML string for the header
    """
    classes = ["roadmap-step"]
    if not view.is_accessible:
        classes.append("locked")
    if view.is_expanded:
        classes.append("expanded")

    parts = [f'<div class="{" ".join(classes)}" id="step-{html.escape(view.step.id)}">']
    parts.append(f'<span class="roadmap-step-number">{view.step_number}</span>')
    parts.append(f'<span class="roadmap-step-title">{html.escape(view.step.title)}</span>')
    parts.append(render_status_badge(view.status))
    parts.append('</div>')
    return ''.join(parts)


def render_video_links(links: list[str]) -> str:
    """Render a step's video links as a list. Empty string when there are none."""
    if not links:
        return ""
    items = [
        f'<li><a href="{html.escape(link, quote=True)}" target="_blank">{html.escape(link)}</a></li>'
        for link in links
    ]
    return f'<ul class="roadmap-videos">{"".join(items)}</ul>'


def render_step_body(view: StepView) -> str:
    """Render the expanded content of a step (description and videos)."""
    parts = [f'<div class="roadmap-description">{html.escape(view.step.description)}</div>']
    videos = render_video_links(view.step.video_links)
    if videos:
        parts.append(videos)
    return ''.join(parts)


def render_progress(percentage: int) -> str:
    """Render a completion bar."""
    percentage = max(0, min(100, int(percentage)))
    return (
        '<div class="roadmap-progress">'
        f'<div class="roadmap-progress-fill" style="width: {percentage}%;"></div>'
        '</div>'
    )


def view_more_label(remaining: int, steps_per_load: int = 5) -> Optional[str]:
    """Label for the "view more" button, or None when nothing is hidden."""
    if remaining <= 0:
        return None
    return f"View more {min(remaining, steps_per_load)} steps"


def render_empty_roadmap() -> str:
    return f'<div class="roadmap-empty">{EMPTY_ROADMAP_MESSAGE}</div>'


def render_load_error(message: str) -> str:
    """Render the blocking load-error state."""
    return (
        '<div class="roadmap-error">'
        f'<div class="roadmap-error-title">{LOAD_ERROR_TITLE}</div>'
        f'<p>{html.escape(message)}</p>'
        '</div>'
    )
