"""
Progress tracking schemas for the roadmap tracker.

Defines Pydantic models for per-user step progress including:
- Step status values
- Stored status records
"""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from enum import Enum


class StepStatus(str, Enum):
    NOT_STARTED = "not_started"
    COMPLETED = "completed"
    SKIPPED = "skipped"


# Statuses that unlock the following step
RESOLVED_STATUSES = (StepStatus.COMPLETED, StepStatus.SKIPPED)


class StepProgress(BaseModel):
    step_id: str
    status: StepStatus = StepStatus.NOT_STARTED
    updated_at: Optional[datetime] = None
