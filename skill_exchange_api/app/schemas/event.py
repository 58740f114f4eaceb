"""
Pydantic models for scheduled sessions (calendar events).

An event is a session between its organiser (``user_id``) and a
``partner_id``, optionally tied to the skill being taught.  Times
without an offset are taken as UTC so stored values always compare.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class EventBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Guitar lesson #1"])
    description: Optional[str] = Field(None, examples=["Chords and strumming"])
    start_time: datetime = Field(..., examples=["2025-09-01T10:00:00Z"])
    end_time: datetime = Field(..., examples=["2025-09-01T11:00:00Z"])
    skill_id: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, v):
        return _as_utc(v)

    @model_validator(mode="after")
    def check_time_range(self):
        if self.end_time <= self.start_time:
            raise ValueError("end_time must be after start_time")
        return self


class EventCreate(EventBase):
    """Schema for scheduling a session."""

    user_id: str
    partner_id: str


class EventRead(EventCreate):
    id: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class EventUpdate(BaseModel):
    """Partial update; any unspecified fields remain unchanged.

    ``description`` and ``skill_id`` can be cleared with an explicit null.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    skill_id: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("start_time", "end_time")
    @classmethod
    def times_in_utc(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return _as_utc(v)

    model_config = {
        "extra": "forbid",
    }
