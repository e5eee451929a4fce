#!/usr/bin/env python3
"""
compile_roadmap.py - Build roadmap.db from a YAML roadmap definition.

Loads tracks and their ordered steps, writes them to the roadmap_tasks table
and optionally registers users with a dashboard per track.

Input format:
  tracks:
    python_basics:
      - id: py-01
        title: Install Python
        description: ...
        video_links: [https://...]
  users:
    - user_id: demo
      tracks: [python_basics]

Usage:
  python scripts/compile_roadmap.py --input data/roadmap.yaml
  python scripts/compile_roadmap.py --input data/roadmap.yaml --output data/roadmap.db --replace
"""

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import yaml

from roadmap.schemas import Step
from roadmap.tracker import (
    STEPS_SCHEMA,
    IdentityStore,
    NotificationStore,
    ProgressStore,
    StepStore,
)

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Data Loading
# -----------------------------------------------------------------------------

def load_roadmap_file(path: Path) -> dict:
    """Load and sanity-check the YAML definition."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict) or not isinstance(data.get("tracks"), dict):
        raise ValueError(f"{path}: expected a 'tracks' mapping")
    return data


def build_steps(tracks: dict) -> dict[str, list[Step]]:
    """Validate raw step entries into Step models, in file order."""
    result = {}
    for track_id, entries in tracks.items():
        steps = []
        for position, entry in enumerate(entries or []):
            steps.append(Step(
                id=str(entry["id"]),
                position=position,
                title=entry["title"],
                description=entry.get("description", ""),
                video_links=entry.get("video_links") or [],
                track_id=track_id,
            ))
        result[track_id] = steps
    return result


# -----------------------------------------------------------------------------
# Database
# -----------------------------------------------------------------------------

def create_database(db_path: Path, replace: bool = False) -> sqlite3.Connection:
    """Create the database with the steps table, and the store tables."""
    db_path.parent.mkdir(parents=True, exist_ok=True)
    if replace and db_path.exists():
        db_path.unlink()

    # Store tables are created by the stores themselves
    ProgressStore(db_path)
    NotificationStore(db_path)
    IdentityStore(db_path)

    conn = sqlite3.connect(str(db_path))
    conn.executescript(STEPS_SCHEMA)
    conn.commit()
    return conn


def populate_steps(conn: sqlite3.Connection, steps_by_track: dict[str, list[Step]]) -> int:
    """Write steps, replacing any previous steps of the same tracks."""
    count = 0
    for track_id, steps in steps_by_track.items():
        conn.execute("DELETE FROM roadmap_tasks WHERE interest_area_id = ?", (track_id,))
        for step in steps:
            conn.execute(
                """INSERT INTO roadmap_tasks
                   (id, interest_area_id, title, description, order_index, video_links)
                   VALUES (?, ?, ?, ?, ?, ?)""",
                (step.id, track_id, step.title, step.description,
                 step.position, json.dumps(step.video_links))
            )
            count += 1
    conn.commit()
    return count


def register_users(db_path: Path, users: list[dict]) -> int:
    """Create profiles and dashboards. Returns the number of dashboards."""
    identity = IdentityStore(db_path)
    dashboards = 0
    for user in users:
        profile_id = identity.create_profile(str(user["user_id"]))
        for track_id in user.get("tracks", []):
            identity.create_dashboard(profile_id, track_id)
            dashboards += 1
    return dashboards


def run_integrity_checks(conn: sqlite3.Connection) -> list[str]:
    """Check for empty tracks and steps without titles."""
    issues = []

    cursor = conn.execute(
        "SELECT id FROM roadmap_tasks WHERE title IS NULL OR TRIM(title) = ''"
    )
    for row in cursor.fetchall():
        issues.append(f"Step {row[0]} has no title")

    cursor = conn.execute(
        """SELECT d.interest_area FROM dashboards d
           LEFT JOIN roadmap_tasks t ON t.interest_area_id = d.interest_area
           WHERE t.id IS NULL
           GROUP BY d.interest_area"""
    )
    for row in cursor.fetchall():
        issues.append(f"Dashboard track {row[0]} has no steps")

    return issues


def main():
    parser = argparse.ArgumentParser(
        description="Compile roadmap database from a YAML definition",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        "--input",
        type=Path,
        default=PROJECT_ROOT / "data" / "roadmap.yaml",
        help="Path to roadmap YAML"
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=PROJECT_ROOT / "data" / "roadmap.db",
        help="Output database path"
    )
    parser.add_argument(
        "--replace",
        action="store_true",
        help="Delete the existing database (including user progress) first"
    )

    args = parser.parse_args()

    logger.info(f"Loading roadmap from {args.input}...")
    data = load_roadmap_file(args.input)
    steps_by_track = build_steps(data["tracks"])
    logger.info(f"  Loaded {len(steps_by_track)} tracks")

    logger.info("Creating database...")
    conn = create_database(args.output, replace=args.replace)

    try:
        count = populate_steps(conn, steps_by_track)
        logger.info(f"  Wrote {count} steps")
        step_store = StepStore(args.output)
        for track_id in step_store.get_tracks():
            logger.info(f"    {track_id}: {step_store.get_step_count(track_id)} steps")

        dashboards = register_users(args.output, data.get("users") or [])
        if dashboards:
            logger.info(f"  Registered {dashboards} dashboards")

        logger.info("Running integrity checks...")
        issues = run_integrity_checks(conn)
        if issues:
            logger.warning(f"Found {len(issues)} integrity issues:")
            for issue in issues[:10]:
                logger.warning(f"  - {issue}")
        else:
            logger.info("  All integrity checks passed!")
    finally:
        conn.close()

    logger.info(f"Database: {args.output}")


if __name__ == "__main__":
    main()
