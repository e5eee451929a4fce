"""
ProgressionEngine - Step gating, expansion and visible window for one roadmap.

Provides:
- Accessibility checks (a step unlocks once its predecessor is completed or skipped)
- Single-open-panel expansion with a default "next actionable step"
- Visible window paging (view more / hide steps)
- Completion percentage
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Sequence

from roadmap.schemas import Step, StepStatus, RESOLVED_STATUSES


logger = logging.getLogger(__name__)

INITIAL_VISIBLE_STEPS = 5
STEPS_PER_LOAD = 5


@dataclass
class StepView:
    """Per-step render data for the presentation layer."""
    step: Step
    status: StepStatus
    is_accessible: bool
    is_expanded: bool
    step_number: int    # 1-based
    is_first: bool
    is_last: bool       # last step of the visible window


# -----------------------------------------------------------------------------
# Pure rules
# -----------------------------------------------------------------------------

def compute_progress(steps: Sequence[Step], statuses: Mapping[str, StepStatus]) -> int:
    """
    Percentage of steps marked completed, rounded half up.

    Skipped steps unlock the next step but do not count as progress.
    Returns 0 for an empty roadmap.
    """
    total = len(steps)
    if total == 0:
        return 0
    completed = sum(1 for step in steps if statuses.get(step.id) == StepStatus.COMPLETED)
    return (200 * completed + total) // (2 * total)


def is_step_accessible(steps: Sequence[Step], statuses: Mapping[str, StepStatus], index: int) -> bool:
    """Check whether the step at index can be opened."""
    if index == 0:
        return True
    if index < 0 or index >= len(steps):
        raise IndexError(f"Step index out of range: {index}")
    previous = steps[index - 1]
    return statuses.get(previous.id) in RESOLVED_STATUSES


def find_expansion_target(steps: Sequence[Step], statuses: Mapping[str, StepStatus]) -> Optional[int]:
    """
    Find the index of the step to open by default.

    Returns the step after the last completed one (the frontier), the first
    step when nothing is completed, or None when the frontier is the last step.
    """
    frontier = -1
    for index, step in enumerate(steps):
        if statuses.get(step.id) == StepStatus.COMPLETED:
            frontier = index

    if frontier == -1:
        return 0 if steps else None
    if frontier < len(steps) - 1:
        return frontier + 1
    return None


# -----------------------------------------------------------------------------
# Engine
# -----------------------------------------------------------------------------

class ProgressionEngine:
    """
    State machine for one user's roadmap on one track.

    Holds the ordered steps, the status map and the view state (expanded step
    and visible window). Performs no I/O; callers persist status changes.
    """

    def __init__(
        self,
        initial_visible: int = INITIAL_VISIBLE_STEPS,
        steps_per_load: int = STEPS_PER_LOAD,
    ):
        """
        Initialize an empty engine.

        Args:
            initial_visible: Size of the visible window after load or hide
            steps_per_load: How many steps "view more" reveals
        """
        if initial_visible < 1 or steps_per_load < 1:
            raise ValueError("Window sizes must be positive")
        self.initial_visible = initial_visible
        self.steps_per_load = steps_per_load
        self._steps: tuple[Step, ...] = ()
        self._index: dict[str, int] = {}
        self._statuses: dict[str, StepStatus] = {}
        self.expanded_step_id: Optional[str] = None
        self._visible_count = 0

    # -------------------------------------------------------------------------
    # Load
    # -------------------------------------------------------------------------

    def load(self, steps: Iterable[Step], statuses: Optional[Mapping[str, str]] = None) -> int:
        """
        Replace steps and statuses, then open the next actionable step.

        Args:
            steps: Steps of the track, in any order (sorted by position)
            statuses: Mapping of step ID to status; missing IDs are not started

        Returns:
            Completion percentage

        Raises:
            ValueError: Duplicate step IDs or positions, or an unknown status
        """
        ordered = tuple(sorted(steps, key=lambda s: s.position))
        index = {}
        positions = set()
        for idx, step in enumerate(ordered):
            if step.id in index:
                raise ValueError(f"Duplicate step id: {step.id}")
            if step.position in positions:
                raise ValueError(f"Duplicate step position: {step.position}")
            index[step.id] = idx
            positions.add(step.position)

        self._steps = ordered
        self._index = index
        self._statuses = {
            step_id: StepStatus(status) for step_id, status in (statuses or {}).items()
        }
        self.expanded_step_id = None
        self._visible_count = self._window_floor()
        self._open_default_step()

        logger.debug(
            f"Loaded {len(ordered)} steps, expanded={self.expanded_step_id}, "
            f"visible={self._visible_count}"
        )
        return self.progress

    def _window_floor(self) -> int:
        return min(self.initial_visible, len(self._steps))

    def _ensure_visible(self, index: int):
        """Grow the window so the step at index is rendered."""
        self._visible_count = min(max(self._visible_count, index + 1), len(self._steps))

    def _open_default_step(self):
        target = find_expansion_target(self._steps, self._statuses)
        if target is None:
            self.expanded_step_id = None
            return
        self.expanded_step_id = self._steps[target].id
        self._ensure_visible(target)

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def steps(self) -> tuple[Step, ...]:
        return self._steps

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def statuses(self) -> dict[str, StepStatus]:
        """Copy of the status map."""
        return dict(self._statuses)

    @property
    def visible_count(self) -> int:
        return self._visible_count

    @property
    def visible_steps(self) -> tuple[Step, ...]:
        return self._steps[:self._visible_count]

    @property
    def remaining_count(self) -> int:
        """Steps hidden below the visible window."""
        return len(self._steps) - self._visible_count

    @property
    def view_more_count(self) -> int:
        """How many steps the next "view more" would reveal."""
        return max(0, min(self.remaining_count, self.steps_per_load))

    @property
    def can_view_more(self) -> bool:
        return self.remaining_count > 0

    @property
    def can_hide(self) -> bool:
        return self.remaining_count <= 0 and self._visible_count > self.initial_visible

    @property
    def completed_count(self) -> int:
        return sum(1 for s in self._steps if self._statuses.get(s.id) == StepStatus.COMPLETED)

    @property
    def progress(self) -> int:
        return compute_progress(self._steps, self._statuses)

    def index_of(self, step_id: str) -> int:
        """Position of a step in the roadmap."""
        try:
            return self._index[step_id]
        except KeyError:
            raise KeyError(f"Unknown step: {step_id}") from None

    def get_step(self, step_id: str) -> Step:
        return self._steps[self.index_of(step_id)]

    def status_of(self, step_id: str) -> StepStatus:
        return self._statuses.get(step_id, StepStatus.NOT_STARTED)

    def is_accessible(self, index: int) -> bool:
        return is_step_accessible(self._steps, self._statuses, index)

    def can_advance(self, step_id: str) -> bool:
        """True when the step after step_id exists and is unlocked."""
        next_index = self.index_of(step_id) + 1
        return next_index < len(self._steps) and self.is_accessible(next_index)

    def step_views(self) -> list[StepView]:
        """Render data for the steps inside the visible window."""
        last = self._visible_count - 1
        return [
            StepView(
                step=step,
                status=self.status_of(step.id),
                is_accessible=self.is_accessible(idx),
                is_expanded=step.id == self.expanded_step_id,
                step_number=idx + 1,
                is_first=idx == 0,
                is_last=idx == last,
            )
            for idx, step in enumerate(self.visible_steps)
        ]

    # -------------------------------------------------------------------------
    # Intents
    # -------------------------------------------------------------------------

    def toggle_expand(self, step_id: str, index: Optional[int] = None) -> bool:
        """
        Open or close a step.

        Locked steps are ignored. Opening a step closes any other open step.

        Returns:
            True if the expanded step changed, False if the step is locked
        """
        if index is None:
            index = self.index_of(step_id)
        elif self._steps[index].id != step_id:
            raise ValueError(f"Step {step_id} is not at index {index}")

        if not self.is_accessible(index):
            logger.debug(f"Ignoring toggle on locked step {step_id}")
            return False

        if self.expanded_step_id == step_id:
            self.expanded_step_id = None
        else:
            self.expanded_step_id = step_id
            self._ensure_visible(index)
        return True

    def apply_status(self, step_id: str, status: StepStatus) -> Optional[str]:
        """
        Record a status change in memory.

        Completing a step opens the step after it and brings it into the
        visible window.

        Returns:
            ID of the step opened as a result, or None
        """
        status = StepStatus(status)
        index = self.index_of(step_id)
        self._statuses[step_id] = status

        if status == StepStatus.COMPLETED and index < len(self._steps) - 1:
            next_index = index + 1
            self.expanded_step_id = self._steps[next_index].id
            self._ensure_visible(next_index)
            return self.expanded_step_id

        # Reverting a step can relock the open one
        if self.expanded_step_id is not None:
            if not self.is_accessible(self.index_of(self.expanded_step_id)):
                logger.debug(f"Closing {self.expanded_step_id}, now locked")
                self.expanded_step_id = None
        return None

    def advance(self, step_id: str) -> Optional[str]:
        """
        Open the step after step_id.

        Returns:
            ID of the step to bring into view, or None when step_id is the
            last step or the next step is still locked
        """
        if not self.can_advance(step_id):
            logger.debug(f"Cannot advance past {step_id}")
            return None

        index = self.index_of(step_id)
        next_index = index + 1
        next_id = self._steps[next_index].id
        self.expanded_step_id = next_id
        if next_index >= self._visible_count:
            self._visible_count = index + 2
        return next_id

    def view_more(self) -> int:
        """Reveal the next page of steps. Returns the new visible count."""
        self._visible_count = min(self._visible_count + self.steps_per_load, len(self._steps))
        return self._visible_count

    def hide_extra(self) -> int:
        """Shrink back to the initial window and reopen the default step."""
        self._visible_count = self._window_floor()
        self._open_default_step()
        return self._visible_count
