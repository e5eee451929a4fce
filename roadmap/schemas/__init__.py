"""
Roadmap Schemas - Pydantic models for the roadmap tracker.

This module exports all schema classes for:
- Roadmap: steps and reminders
- Progress: step status tracking
"""

# Roadmap schemas
from .roadmap import (
    Step,
    Reminder,
)

# Progress schemas
from .progress import (
    StepStatus,
    StepProgress,
    RESOLVED_STATUSES,
)

__all__ = [
    # Roadmap
    'Step',
    'Reminder',
    # Progress
    'StepStatus',
    'StepProgress',
    'RESOLVED_STATUSES',
]
