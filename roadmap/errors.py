"""
Error types raised and reported by the roadmap tracker.

- LoadError: step or status fetch failed (blocking, retry is a full reload)
- MutationError: status write or reminder cleanup failed (non-blocking)
"""

from typing import Optional


class RoadmapError(Exception):
    """Base class for roadmap tracker errors."""


class LoadError(RoadmapError):
    """Steps or statuses could not be loaded for the active track."""


class MutationError(RoadmapError):
    """A status write or reminder cleanup failed.

    The in-memory state is not rolled back when this is reported.
    """

    def __init__(self, message: str, operation: str, step_id: Optional[str] = None):
        super().__init__(message)
        self.operation = operation
        self.step_id = step_id
