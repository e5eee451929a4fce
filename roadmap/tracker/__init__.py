"""
Roadmap Tracker - Runtime components for gating and tracking roadmap steps.

This module provides:
- ProgressionEngine: Step gating, expansion and visible window
- StepStore: Load steps from roadmap.db
- ProgressStore: Per-user step status
- NotificationStore: Step reminders
- IdentityStore: User, profile and dashboard resolution
- RoadmapSession: Engine + stores for one user and track
"""

from .engine import (
    ProgressionEngine,
    StepView,
    compute_progress,
    is_step_accessible,
    find_expansion_target,
    INITIAL_VISIBLE_STEPS,
    STEPS_PER_LOAD,
)

from .loader import (
    StepStore,
    STEPS_SCHEMA,
)

from .progress import (
    ProgressStore,
)

from .notifications import (
    NotificationStore,
)

from .identity import (
    IdentityStore,
)

from .session import (
    RoadmapSession,
    LoadState,
)

__all__ = [
    # Engine
    "ProgressionEngine",
    "StepView",
    "compute_progress",
    "is_step_accessible",
    "find_expansion_target",
    "INITIAL_VISIBLE_STEPS",
    "STEPS_PER_LOAD",
    # Stores
    "StepStore",
    "STEPS_SCHEMA",
    "ProgressStore",
    "NotificationStore",
    "IdentityStore",
    # Session
    "RoadmapSession",
    "LoadState",
]
