"""
Pydantic models for direct messages and conversations.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .user import UserRead


class MessageCreate(BaseModel):
    sender_id: str
    receiver_id: str
    content: str = Field(..., examples=["Hi! Still up for Saturday?"])

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message content must not be empty")
        return v


class MessageRead(MessageCreate):
    id: str
    read: bool
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class ConversationRead(BaseModel):
    """One entry of a user's inbox: the latest message with a partner."""

    partner_id: str
    partner: Optional[UserRead] = None
    last_message: MessageRead
    unread_count: int
