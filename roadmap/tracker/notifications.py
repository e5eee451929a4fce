"""
NotificationStore - Calendar reminders attached to a user's track.

Reminders are matched to steps by title; completing a step clears them.
"""

import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional

from roadmap.schemas import Reminder


class NotificationStore:
    """Reminder rows in the user_calendar table."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS user_calendar (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    profile_id TEXT NOT NULL,
                    dashboard_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    scheduled_for TEXT
                );

                CREATE INDEX IF NOT EXISTS idx_user_calendar_dashboard
                ON user_calendar(profile_id, dashboard_id);
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def add_reminder(
        self,
        profile_id: str,
        dashboard_id: str,
        title: str,
        scheduled_for: Optional[datetime] = None,
    ) -> int:
        """Schedule a reminder. Returns the new reminder ID."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """INSERT INTO user_calendar (profile_id, dashboard_id, title, scheduled_for)
                   VALUES (?, ?, ?, ?)""",
                (profile_id, dashboard_id, title,
                 scheduled_for.isoformat() if scheduled_for else None)
            )
            conn.commit()
            return cursor.lastrowid
        finally:
            conn.close()

    def get_reminders(self, profile_id: str, dashboard_id: str) -> list[Reminder]:
        """Get reminders for a user's track, soonest first."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id, title, scheduled_for
                   FROM user_calendar
                   WHERE profile_id = ? AND dashboard_id = ?
                   ORDER BY scheduled_for, id""",
                (profile_id, dashboard_id)
            )
            return [
                Reminder(
                    id=row["id"],
                    title=row["title"],
                    scheduled_for=datetime.fromisoformat(row["scheduled_for"]) if row["scheduled_for"] else None,
                )
                for row in cursor.fetchall()
            ]
        finally:
            conn.close()

    def delete_notifications(self, profile_id: str, dashboard_id: str, title: str) -> int:
        """Delete reminders whose title matches. Returns the number removed."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """DELETE FROM user_calendar
                   WHERE profile_id = ? AND dashboard_id = ? AND title = ?""",
                (profile_id, dashboard_id, title)
            )
            conn.commit()
            return cursor.rowcount
        finally:
            conn.close()
