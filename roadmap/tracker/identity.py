"""
IdentityStore - Resolve the signed-in user to the keys progress is stored under.

Resolution runs in two steps before any roadmap data loads:
1. user -> profile
2. profile + track -> dashboard
"""

import sqlite3
import uuid
from pathlib import Path
from typing import Optional


class IdentityStore:
    """
    Profiles and dashboards in the roadmap database.

    The current user comes from configuration (ROADMAP_USER); there is no
    sign-in flow here.
    """

    def __init__(self, db_path: str | Path, user_id: Optional[str] = None):
        """
        Initialize identity store.

        Args:
            db_path: Path to roadmap.db (created if missing)
            user_id: ID of the signed-in user, or None when nobody is signed in
        """
        self.db_path = Path(db_path)
        self.user_id = user_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and tables if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS profiles (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL UNIQUE
                );

                CREATE TABLE IF NOT EXISTS dashboards (
                    id TEXT PRIMARY KEY,
                    profile_id TEXT NOT NULL REFERENCES profiles(id),
                    interest_area TEXT NOT NULL,
                    UNIQUE (profile_id, interest_area)
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def current_user(self) -> Optional[str]:
        return self.user_id

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_profile_id(self, user_id: str) -> Optional[str]:
        """Get the profile ID of a user."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT id FROM profiles WHERE user_id = ?", (user_id,)
            )
            row = cursor.fetchone()
            return row["id"] if row else None
        finally:
            conn.close()

    def get_dashboard_id(self, profile_id: str, track_id: str) -> Optional[str]:
        """Get the dashboard a profile uses for a track."""
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                """SELECT id FROM dashboards
                   WHERE profile_id = ? AND interest_area = ?""",
                (profile_id, track_id)
            )
            row = cursor.fetchone()
            return row["id"] if row else None
        finally:
            conn.close()

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def create_profile(self, user_id: str) -> str:
        """Create a profile for a user if missing. Returns the profile ID."""
        conn = self._get_connection()
        try:
            conn.execute(
                "INSERT OR IGNORE INTO profiles (id, user_id) VALUES (?, ?)",
                (uuid.uuid4().hex, user_id)
            )
            conn.commit()
            row = conn.execute(
                "SELECT id FROM profiles WHERE user_id = ?", (user_id,)
            ).fetchone()
            return row["id"]
        finally:
            conn.close()

    def create_dashboard(self, profile_id: str, track_id: str) -> str:
        """Create a dashboard for a profile's track if missing. Returns its ID."""
        conn = self._get_connection()
        try:
            conn.execute(
                """INSERT OR IGNORE INTO dashboards (id, profile_id, interest_area)
                   VALUES (?, ?, ?)""",
                (uuid.uuid4().hex, profile_id, track_id)
            )
            conn.commit()
            row = conn.execute(
                """SELECT id FROM dashboards
                   WHERE profile_id = ? AND interest_area = ?""",
                (profile_id, track_id)
            ).fetchone()
            return row["id"]
        finally:
            conn.close()
