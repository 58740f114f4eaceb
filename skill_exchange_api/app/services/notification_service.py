"""
Business logic for notifications.

Other services call :meth:`NotificationService.notify` when a write
concerns another user (a match request, a message, a scheduled
session, a review or a course sale).  Each such write produces exactly
one notification for the affected user.
"""

import logging
from typing import List, Optional

from ..core.storage import get_storage
from ..schemas.notification import NotificationRead

logger = logging.getLogger(__name__)


class NotificationService:
    """Service for creating and reading user notifications."""

    @classmethod
    async def notify(
        cls,
        user_id: str,
        type: str,
        title: str,
        message: str,
        related_id: Optional[str] = None,
    ) -> NotificationRead:
        row = get_storage().create_notification(
            {
                "user_id": user_id,
                "type": type,
                "title": title,
                "message": message,
                "related_id": related_id,
            }
        )
        logger.debug("Notified user %s (%s) about %s", user_id, type, related_id)
        return NotificationRead(**row)

    @classmethod
    async def list_notifications(cls, user_id: str) -> List[NotificationRead]:
        """Return the user's notifications, newest first."""
        return [NotificationRead(**row) for row in get_storage().get_notifications_by_user(user_id)]

    @classmethod
    async def mark_as_read(cls, notification_id: str) -> NotificationRead:
        row = get_storage().mark_notification_as_read(notification_id)
        if not row:
            raise ValueError(f"Notification {notification_id} not found")
        return NotificationRead(**row)

    @classmethod
    async def mark_all_as_read(cls, user_id: str) -> int:
        changed = get_storage().mark_all_notifications_as_read(user_id)
        logger.info("Marked %s notifications as read for user %s", changed, user_id)
        return changed
