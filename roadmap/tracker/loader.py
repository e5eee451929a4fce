"""
StepStore - Load roadmap steps from the roadmap SQLite database.

Provides read-only access to:
- Tracks (interest areas) that have a roadmap
- Ordered steps of a track
"""

import json
import sqlite3
from pathlib import Path

from roadmap.schemas import Step


STEPS_SCHEMA = """
CREATE TABLE IF NOT EXISTS roadmap_tasks (
    id TEXT PRIMARY KEY,
    interest_area_id TEXT NOT NULL,
    title TEXT NOT NULL,
    description TEXT,
    order_index INTEGER NOT NULL,
    video_links JSON NOT NULL DEFAULT '[]',
    UNIQUE (interest_area_id, order_index)
);

CREATE INDEX IF NOT EXISTS idx_roadmap_tasks_track
ON roadmap_tasks(interest_area_id);
"""


class StepStore:
    """
    Load steps from SQLite database.

    Thread-safe for read operations. Each method creates a new connection.
    """

    def __init__(self, db_path: str | Path):
        """
        Initialize store with path to the roadmap database.

        Args:
            db_path: Path to roadmap.db file
        """
        self.db_path = Path(db_path)
        if not self.db_path.exists():
            raise FileNotFoundError(f"Roadmap database not found: {db_path}")

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def get_tracks(self) -> list[str]:
        """Get all track IDs that have at least one step."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT DISTINCT interest_area_id FROM roadmap_tasks ORDER BY interest_area_id"
            )
            return [row["interest_area_id"] for row in cursor.fetchall()]
        finally:
            conn.close()

    def load_steps(self, track_id: str) -> list[Step]:
        """
        Get all steps for a track, ordered by order_index.

        Positions are renumbered 0..n-1 so gaps in order_index don't matter.
        """
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, interest_area_id, title, description, video_links
                   FROM roadmap_tasks
                   WHERE interest_area_id = ?
                   ORDER BY order_index""",
                (track_id,)
            )
            return [
                Step(
                    id=row["id"],
                    position=position,
                    title=row["title"],
                    description=row["description"] or "",
                    video_links=json.loads(row["video_links"] or "[]"),
                    track_id=row["interest_area_id"],
                )
                for position, row in enumerate(cursor.fetchall())
            ]
        finally:
            conn.close()

    def get_step_count(self, track_id: str) -> int:
        """Number of steps in a track."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT COUNT(*) FROM roadmap_tasks WHERE interest_area_id = ?",
                (track_id,)
            )
            return cursor.fetchone()[0]
        finally:
            conn.close()
