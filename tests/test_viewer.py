"""Tests for roadmap.viewer - HTML rendering and paging labels."""

from roadmap.schemas import Step, StepStatus
from roadmap.tracker import StepView
from roadmap.viewer import (
    get_roadmap_css,
    render_status_badge,
    render_step_header,
    render_video_links,
    render_step_body,
    render_progress,
    view_more_label,
    render_empty_roadmap,
    render_load_error,
    EMPTY_ROADMAP_MESSAGE,
    LOAD_ERROR_TITLE,
)


def make_view(title="Install <Python>", accessible=True, expanded=False,
              status=StepStatus.NOT_STARTED, video_links=None) -> StepView:
    return StepView(
        step=Step(id="py-01", position=0, title=title, description="Use & enjoy",
                  video_links=video_links or []),
        status=status,
        is_accessible=accessible,
        is_expanded=expanded,
        step_number=1,
        is_first=True,
        is_last=False,
    )


class TestViewMoreLabel:
    def test_fewer_than_increment(self):
        assert view_more_label(2) == "View more 2 steps"

    def test_capped_at_increment(self):
        assert view_more_label(12) == "View more 5 steps"

    def test_custom_increment(self):
        assert view_more_label(12, steps_per_load=3) == "View more 3 steps"

    def test_nothing_remaining(self):
        assert view_more_label(0) is None
        assert view_more_label(-1) is None


class TestStepRendering:
    def test_header_escapes_title(self):
        out = render_step_header(make_view())
        assert "Install &lt;Python&gt;" in out
        assert 'id="step-py-01"' in out

    def test_header_locked_class(self):
        assert "locked" in render_step_header(make_view(accessible=False))
        assert "locked" not in render_step_header(make_view())

    def test_header_expanded_class(self):
        assert "expanded" in render_step_header(make_view(expanded=True))

    def test_header_shows_status(self):
        out = render_step_header(make_view(status=StepStatus.COMPLETED))
        assert "Completed" in out

    def test_status_badge_from_string(self):
        assert "Skipped" in render_status_badge("skipped")

    def test_body(self):
        out = render_step_body(make_view(video_links=["https://example.com/v?a=1&b=2"]))
        assert "Use &amp; enjoy" in out
        assert "roadmap-videos" in out
        assert "a=1&amp;b=2" in out

    def test_body_without_videos(self):
        assert "roadmap-videos" not in render_step_body(make_view())

    def test_video_links_empty(self):
        assert render_video_links([]) == ""


class TestStates:
    def test_progress_width(self):
        assert "width: 29%" in render_progress(29)

    def test_progress_clamped(self):
        assert "width: 100%" in render_progress(140)
        assert "width: 0%" in render_progress(-5)

    def test_empty_roadmap(self):
        assert EMPTY_ROADMAP_MESSAGE in render_empty_roadmap()

    def test_load_error(self):
        out = render_load_error("no such table: <roadmap_tasks>")
        assert LOAD_ERROR_TITLE in out
        assert "&lt;roadmap_tasks&gt;" in out

    def test_css(self):
        assert "<style>" in get_roadmap_css()
