"""
ProgressStore - Per-user step status records in the roadmap database.

Stores one status row per (profile, dashboard, step):
- Upsert with last-write-wins semantics
- Missing rows read back as not started
"""

import logging
import sqlite3
from datetime import datetime
from pathlib import Path

from roadmap.schemas import StepStatus, StepProgress


logger = logging.getLogger(__name__)


class ProgressStore:
    """
    Track step status in SQLite database.

    Rows are keyed by (profile_id, dashboard_id, roadmap_id) so one user can
    follow several tracks without their progress mixing.
    """

    def __init__(self, db_path: str | Path):
        """
        Initialize progress store.

        Args:
            db_path: Path to roadmap.db (created if missing)
        """
        self.db_path = Path(db_path)
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS roadmap_to_user (
                    profile_id TEXT NOT NULL,
                    dashboard_id TEXT NOT NULL,
                    roadmap_id TEXT NOT NULL,
                    status TEXT NOT NULL DEFAULT 'not_started',
                    updated_at TEXT,
                    PRIMARY KEY (profile_id, dashboard_id, roadmap_id)
                );

                CREATE INDEX IF NOT EXISTS idx_roadmap_to_user_dashboard
                ON roadmap_to_user(profile_id, dashboard_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def get_step_progress(self, profile_id: str, dashboard_id: str) -> dict[str, StepProgress]:
        """Get stored progress records for a user's track."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT roadmap_id, status, updated_at
                   FROM roadmap_to_user
                   WHERE profile_id = ? AND dashboard_id = ?""",
                (profile_id, dashboard_id)
            )
            result = {}
            for row in cursor.fetchall():
                try:
                    status = StepStatus(row["status"])
                except ValueError:
                    logger.warning(
                        f"Ignoring unknown status {row['status']!r} for step {row['roadmap_id']}"
                    )
                    continue
                result[row["roadmap_id"]] = StepProgress(
                    step_id=row["roadmap_id"],
                    status=status,
                    updated_at=datetime.fromisoformat(row["updated_at"]) if row["updated_at"] else None,
                )
            return result
        finally:
            conn.close()

    def load_statuses(self, profile_id: str, dashboard_id: str) -> dict[str, StepStatus]:
        """Get a step ID -> status mapping for a user's track."""
        return {
            step_id: progress.status
            for step_id, progress in self.get_step_progress(profile_id, dashboard_id).items()
        }

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def upsert_status(self, profile_id: str, dashboard_id: str, step_id: str, status: StepStatus):
        """Insert or overwrite the status of a step."""
        status = StepStatus(status)
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO roadmap_to_user (profile_id, dashboard_id, roadmap_id, status, updated_at)
                   VALUES (?, ?, ?, ?, ?)
                   ON CONFLICT(profile_id, dashboard_id, roadmap_id) DO UPDATE SET
                     status = excluded.status,
                     updated_at = excluded.updated_at""",
                (profile_id, dashboard_id, step_id, status.value, now)
            )
            conn.commit()
        finally:
            conn.close()

    def reset_track(self, profile_id: str, dashboard_id: str):
        """Remove all status rows for a user's track."""
        conn = self._get_connection()
        try:
            conn.execute(
                "DELETE FROM roadmap_to_user WHERE profile_id = ? AND dashboard_id = ?",
                (profile_id, dashboard_id)
            )
            conn.commit()
        finally:
            conn.close()
