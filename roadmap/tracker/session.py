"""
RoadmapSession - One user's roadmap on one track.

Wires the ProgressionEngine to the stores:
- Two-phase activation (identity, then track data)
- Optimistic status changes with reminder cleanup
- Load and mutation errors captured for the presentation layer
"""

import logging
import sqlite3
from enum import Enum
from typing import Callable, Optional

from roadmap.errors import LoadError, MutationError, RoadmapError
from roadmap.schemas import StepStatus
from roadmap.utils.config import RoadmapSettings

from .engine import ProgressionEngine, StepView
from .identity import IdentityStore
from .loader import StepStore
from .notifications import NotificationStore
from .progress import ProgressStore


logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int], None]


class LoadState(str, Enum):
    """Lifecycle of a session's roadmap data."""
    IDLE = "idle"         # no user, profile or dashboard resolved
    READY = "ready"       # steps and statuses loaded
    FAILED = "failed"     # load error; no steps exposed


class RoadmapSession:
    """
    Owns the engine for one user+track and forwards intents to it.

    The presentation layer reads state from here and never mutates the
    engine directly.
    """

    def __init__(
        self,
        step_store: StepStore,
        progress_store: ProgressStore,
        notification_store: NotificationStore,
        identity: IdentityStore,
        on_progress_update: Optional[ProgressCallback] = None,
        initial_visible: int = 5,
        steps_per_load: int = 5,
    ):
        self.step_store = step_store
        self.progress_store = progress_store
        self.notification_store = notification_store
        self.identity = identity
        self.on_progress_update = on_progress_update
        self._initial_visible = initial_visible
        self._steps_per_load = steps_per_load

        self.engine = self._new_engine()
        self.track_id: Optional[str] = None
        self.profile_id: Optional[str] = None
        self.dashboard_id: Optional[str] = None
        self.state = LoadState.IDLE
        self.error: Optional[RoadmapError] = None

    @classmethod
    def from_settings(
        cls,
        settings: RoadmapSettings,
        on_progress_update: Optional[ProgressCallback] = None,
    ) -> "RoadmapSession":
        """Build a session with SQLite stores from settings."""
        db_path = settings.db_path
        return cls(
            step_store=StepStore(db_path),
            progress_store=ProgressStore(db_path),
            notification_store=NotificationStore(db_path),
            identity=IdentityStore(db_path, user_id=settings.user_id),
            on_progress_update=on_progress_update,
            initial_visible=settings.initial_visible_steps,
            steps_per_load=settings.steps_per_load,
        )

    def _new_engine(self) -> ProgressionEngine:
        return ProgressionEngine(
            initial_visible=self._initial_visible,
            steps_per_load=self._steps_per_load,
        )

    def _emit_progress(self, percentage: int):
        if self.on_progress_update:
            self.on_progress_update(percentage)

    # -------------------------------------------------------------------------
    # Activation
    # -------------------------------------------------------------------------

    def activate(self, track_id: str) -> LoadState:
        """
        Switch to a track: resolve identity, then load steps and statuses.

        All previous state is replaced.
        """
        self.track_id = track_id
        self.profile_id = None
        self.dashboard_id = None
        self.engine = self._new_engine()
        self.state = LoadState.IDLE
        self.error = None

        try:
            user_id = self.identity.current_user()
            if not user_id:
                logger.warning("No signed-in user; roadmap not loaded")
                return self.state

            profile_id = self.identity.get_profile_id(user_id)
            if not profile_id:
                logger.warning(f"No profile for user {user_id}")
                return self.state

            dashboard_id = self.identity.get_dashboard_id(profile_id, track_id)
            if not dashboard_id:
                logger.warning(f"No dashboard for profile {profile_id} on track {track_id}")
                return self.state
        except sqlite3.Error as e:
            return self._fail_load(f"Error fetching user data: {e}")

        self.profile_id = profile_id
        self.dashboard_id = dashboard_id
        return self.reload()

    def reload(self) -> LoadState:
        """Load steps and statuses for the resolved track."""
        if not (self.track_id and self.profile_id and self.dashboard_id):
            raise RoadmapError("Cannot reload before a track has been activated")

        try:
            steps = self.step_store.load_steps(self.track_id)
            statuses = self.progress_store.load_statuses(self.profile_id, self.dashboard_id)
            engine = self._new_engine()
            percentage = engine.load(steps, statuses)
        except (sqlite3.Error, ValueError) as e:
            return self._fail_load(f"Error fetching roadmap steps: {e}")

        self.engine = engine
        self.state = LoadState.READY
        self.error = None
        logger.info(
            f"Loaded track {self.track_id}: {engine.total_steps} steps, {percentage}% complete"
        )
        self._emit_progress(percentage)
        return self.state

    def _fail_load(self, message: str) -> LoadState:
        logger.error(message)
        self.engine = self._new_engine()
        self.state = LoadState.FAILED
        self.error = LoadError(message)
        return self.state

    def _require_ready(self):
        if self.state != LoadState.READY:
            raise RoadmapError(f"Roadmap is not loaded (state: {self.state.value})")

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> int:
        return self.engine.progress

    def step_views(self) -> list[StepView]:
        if self.state != LoadState.READY:
            return []
        return self.engine.step_views()

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def change_status(self, step_id: str, status: StepStatus) -> Optional[MutationError]:
        """
        Change a step's status.

        The in-memory state is updated and progress emitted before the write;
        a failed write or reminder cleanup is reported but not rolled back.

        Returns:
            The MutationError if persisting failed, else None
        """
        self._require_ready()
        status = StepStatus(status)

        self.engine.apply_status(step_id, status)
        self._emit_progress(self.engine.progress)

        try:
            self.progress_store.upsert_status(self.profile_id, self.dashboard_id, step_id, status)
        except sqlite3.Error as e:
            return self._fail_mutation(f"Error updating step status: {e}", "upsert_status", step_id)

        if status == StepStatus.COMPLETED:
            title = self.engine.get_step(step_id).title
            try:
                removed = self.notification_store.delete_notifications(
                    self.profile_id, self.dashboard_id, title
                )
            except sqlite3.Error as e:
                return self._fail_mutation(
                    f"Error removing reminders: {e}", "delete_notifications", step_id
                )
            if removed:
                logger.info(f"Removed {removed} reminder(s) for completed step {title!r}")

        self.error = None
        return None

    def _fail_mutation(self, message: str, operation: str, step_id: str) -> MutationError:
        logger.error(message)
        self.error = MutationError(message, operation=operation, step_id=step_id)
        return self.error

    def reset_progress(self) -> LoadState:
        """
        Clear every stored status of the active track and reload it.

        Raises:
            sqlite3.Error: If the stored statuses could not be removed
        """
        self._require_ready()
        self.progress_store.reset_track(self.profile_id, self.dashboard_id)
        logger.info(f"Reset progress on track {self.track_id}")
        return self.reload()

    def toggle_expand(self, step_id: str) -> bool:
        self._require_ready()
        return self.engine.toggle_expand(step_id)

    def advance(self, step_id: str) -> Optional[str]:
        """Open the next step. Returns the ID the view should scroll to."""
        self._require_ready()
        return self.engine.advance(step_id)

    def view_more(self) -> int:
        self._require_ready()
        return self.engine.view_more()

    def hide_extra(self) -> int:
        self._require_ready()
        return self.engine.hide_extra()
