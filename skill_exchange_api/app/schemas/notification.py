"""
Pydantic models for notifications.

Notifications are never created by clients directly; services fan them
out when matches, messages, sessions, reviews and purchases are
written.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel

NotificationType = Literal["match", "message", "reminder", "review", "course"]


class NotificationRead(BaseModel):
    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    related_id: Optional[str] = None
    read: bool
    created_at: datetime

    model_config = {
        "from_attributes": True,
    }


class MarkAllRead(BaseModel):
    user_id: str
