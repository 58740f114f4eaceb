"""
Pydantic schemas for user reviews.

``user_id`` is the user being reviewed, ``reviewer_id`` the author.
A review may point at the session (event) it is about.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserSummary


class ReviewBase(BaseModel):
    user_id: str = Field(..., description="Identifier of the user being reviewed")
    reviewer_id: str = Field(..., description="Identifier of the review author")
    event_id: Optional[str] = Field(None, description="Session the review is about")
    rating: int = Field(..., ge=1, le=5, description="Rating from 1 to 5")
    comment: Optional[str] = Field(None, description="Optional textual comment")


class ReviewCreate(ReviewBase):
    """Schema for creating a new review."""

    @field_validator("comment")
    @classmethod
    def sanitize_comment(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace from the comment and enforce a maximum length."""
        if v is None:
            return None
        v = v.strip()
        if len(v) > 1000:
            raise ValueError("Comment must be 1000 characters or fewer")
        return v


class ReviewRead(ReviewBase):
    id: str
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class ReviewDetail(ReviewRead):
    reviewer: Optional[UserSummary] = None
