"""Shared fixtures: step builders and a seeded roadmap database."""

import json
import sqlite3
import string
from pathlib import Path

import pytest

from roadmap.schemas import Step
from roadmap.tracker import STEPS_SCHEMA


def _build_steps(count: int, track_id: str = "python", prefix: str = "") -> list[Step]:
    letters = string.ascii_uppercase
    return [
        Step(
            id=f"{prefix}{letters[i]}",
            position=i,
            title=f"Step {letters[i]}",
            description=f"Do {letters[i]}",
            track_id=track_id,
        )
        for i in range(count)
    ]


@pytest.fixture()
def make_steps():
    """Factory for steps A, B, C, ... at positions 0, 1, 2, ..."""
    return _build_steps


@pytest.fixture()
def db_path(tmp_path: Path) -> Path:
    """Roadmap database containing only the steps table."""
    path = tmp_path / "roadmap.db"
    conn = sqlite3.connect(str(path))
    try:
        conn.executescript(STEPS_SCHEMA)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture()
def seed_steps(db_path: Path):
    """Insert steps for a track and return them.

    Step IDs are A, B, C, ... for the "python" track and "<track>-A", ...
    for any other track (IDs are unique across the table).
    """
    def _seed(count: int, track_id: str = "python") -> list[Step]:
        prefix = "" if track_id == "python" else f"{track_id}-"
        steps = _build_steps(count, track_id, prefix)
        conn = sqlite3.connect(str(db_path))
        try:
            for step in steps:
                conn.execute(
                    """INSERT INTO roadmap_tasks
                       (id, interest_area_id, title, description, order_index, video_links)
                       VALUES (?, ?, ?, ?, ?, ?)""",
                    (step.id, track_id, step.title, step.description,
                     step.position, json.dumps(step.video_links))
                )
            conn.commit()
        finally:
            conn.close()
        return steps
    return _seed
