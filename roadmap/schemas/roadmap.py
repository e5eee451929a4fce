"""
Roadmap content schemas.

Defines Pydantic models for:
- Steps (ordered checklist items of a track)
- Reminders attached to a user's track
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional
from datetime import datetime


class Step(BaseModel):
    """One ordered checklist item. Immutable for the lifetime of a session."""
    model_config = {"frozen": True}

    id: str = Field(..., min_length=1)
    position: int = Field(..., ge=0)   # 0-based ordinal, defines sequence
    title: str
    description: str = ""
    video_links: list[str] = []        # optional media references
    track_id: Optional[str] = None

    @field_validator('video_links', mode='before')
    @classmethod
    def drop_empty_links(cls, v):
        if v is None:
            return []
        return [link for link in v if link]


class Reminder(BaseModel):
    """Calendar reminder for a step, matched to steps by title."""
    id: int
    title: str
    scheduled_for: Optional[datetime] = None
