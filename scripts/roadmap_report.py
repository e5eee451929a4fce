#!/usr/bin/env python3
"""
roadmap_report.py - Show (and update) a user's roadmap from the terminal.

Prints the visible window of a track's roadmap with lock/status markers.
A status change can be applied before printing.

Usage:
  python scripts/roadmap_report.py --track python_basics
  python scripts/roadmap_report.py --track python_basics --user demo --complete py-01
  python scripts/roadmap_report.py --track python_basics --all
  python scripts/roadmap_report.py --track python_basics --reset-all
"""

import argparse
import logging
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from roadmap.schemas import StepStatus
from roadmap.tracker import RoadmapSession, LoadState, StepView
from roadmap.utils import load_settings, configure_logging
from roadmap.viewer import EMPTY_ROADMAP_MESSAGE, view_more_label

logger = logging.getLogger(__name__)


STATUS_MARKERS = {
    StepStatus.COMPLETED: "✓",
    StepStatus.SKIPPED: "»",
    StepStatus.NOT_STARTED: "○",
}


def format_step(view: StepView) -> str:
    """One line per step, with '>' marking the open step."""
    marker = STATUS_MARKERS[view.status] if view.is_accessible else "◌"
    cursor = ">" if view.is_expanded else " "
    return f"{cursor} {marker} {view.step_number:>2}. {view.step.title}"


def format_report(session: RoadmapSession) -> list[str]:
    """Lines describing the session's roadmap."""
    engine = session.engine
    lines = [
        f"Track: {session.track_id}",
        f"Progress: {engine.completed_count}/{engine.total_steps} steps ({engine.progress}%)",
        "",
    ]
    views = session.step_views()
    if not views:
        lines.append(EMPTY_ROADMAP_MESSAGE)
        return lines

    lines.extend(format_step(view) for view in views)
    label = view_more_label(engine.remaining_count, engine.steps_per_load)
    if label:
        lines.append(f"  ... {label}")
    return lines


def main():
    parser = argparse.ArgumentParser(
        description="Show a user's roadmap progress",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--track", required=True, help="Track (interest area) ID")
    parser.add_argument("--user", default=None, help="User ID (default: ROADMAP_USER)")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML")
    parser.add_argument("--all", action="store_true", help="Show every step, not just the first page")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--complete", metavar="STEP_ID", help="Mark a step completed")
    group.add_argument("--skip", metavar="STEP_ID", help="Mark a step skipped")
    group.add_argument("--reset", metavar="STEP_ID", help="Mark a step not started")
    group.add_argument("--reset-all", action="store_true", help="Clear all progress on the track")

    args = parser.parse_args()

    settings = load_settings(args.config)
    if args.user:
        settings = settings.model_copy(update={"user_id": args.user})
    configure_logging(settings.log_level)

    session = RoadmapSession.from_settings(settings)
    state = session.activate(args.track)
    if state == LoadState.FAILED:
        logger.error(f"Failed to load roadmap: {session.error}")
        sys.exit(1)
    if state == LoadState.IDLE:
        logger.error("No roadmap for this user and track (check ROADMAP_USER and dashboards)")
        sys.exit(1)

    if args.reset_all:
        session.reset_progress()

    for step_id, status in (
        (args.complete, StepStatus.COMPLETED),
        (args.skip, StepStatus.SKIPPED),
        (args.reset, StepStatus.NOT_STARTED),
    ):
        if step_id:
            try:
                error = session.change_status(step_id, status)
            except KeyError as e:
                logger.error(e.args[0])
                sys.exit(1)
            if error:
                logger.warning(str(error))

    if args.all:
        while session.engine.can_view_more:
            session.view_more()

    print("\n".join(format_report(session)))


if __name__ == "__main__":
    main()
