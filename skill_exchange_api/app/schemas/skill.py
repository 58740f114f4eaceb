"""
Pydantic models for skills.

A skill is either offered (``type="offer"``) or wanted
(``type="want"``) by its owner.  Skills are what matches pair up.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

SkillType = Literal["offer", "want"]


class SkillBase(BaseModel):
    title: str = Field(..., min_length=1, examples=["Guitar"])
    description: Optional[str] = Field(None, examples=["Acoustic basics and chords"])
    category: str = Field(..., examples=["Music"])
    level: str = Field("beginner", examples=["intermediate"])
    type: SkillType = Field("offer")
    availability: Optional[str] = Field(None, examples=["Weekends"])


class SkillCreate(SkillBase):
    """Schema for creating a skill."""

    user_id: str


class SkillUpdate(BaseModel):
    """Partial update; only provided fields change.

    ``description`` and ``availability`` can be cleared with an explicit
    null, the other fields cannot.
    """

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    category: Optional[str] = None
    level: Optional[str] = None
    type: Optional[SkillType] = None
    availability: Optional[str] = None

    @field_validator("title", "category", "level", "type")
    @classmethod
    def not_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    model_config = {
        "extra": "forbid",
    }


class SkillRead(SkillBase):
    id: str
    user_id: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }
