"""
Pydantic models for skill matches.

A match is a proposal from ``user_id`` to ``matched_user_id`` to trade
``user_skill_id`` for ``matched_skill_id``.  It starts out ``pending``.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

from .skill import SkillRead
from .user import UserSummary

MatchStatus = Literal["pending", "accepted", "declined", "completed"]


class MatchCreate(BaseModel):
    user_id: str
    matched_user_id: str
    user_skill_id: str
    matched_skill_id: str


class MatchStatusUpdate(BaseModel):
    status: MatchStatus


class MatchRead(MatchCreate):
    id: str
    status: MatchStatus
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class MatchDetail(MatchRead):
    """A match with the other user and both skills resolved."""

    matched_user: Optional[UserSummary] = None
    user_skill: Optional[SkillRead] = None
    matched_skill: Optional[SkillRead] = None
