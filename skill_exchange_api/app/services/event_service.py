"""
Business logic for scheduled sessions.

Scheduling a session notifies the partner.  Updates are partial and
the resulting time range is re‑validated against the stored values.
"""

import logging
from typing import List

from ..core.storage import get_storage
from ..schemas.event import EventCreate, EventRead, EventUpdate
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class EventService:
    """Service for calendar sessions between two users."""

    @classmethod
    async def list_events(cls, user_id: str) -> List[EventRead]:
        """Sessions the user organises or attends, by start time."""
        return [EventRead(**row) for row in get_storage().get_events_by_user(user_id)]

    @classmethod
    async def get_event(cls, event_id: str) -> EventRead:
        row = get_storage().get_event(event_id)
        if not row:
            raise ValueError(f"Event {event_id} not found")
        return EventRead(**row)

    @classmethod
    async def create_event(cls, data: EventCreate) -> EventRead:
        row = get_storage().create_event(data.model_dump())
        logger.info("User %s scheduled '%s' with %s", data.user_id, data.title, data.partner_id)
        await NotificationService.notify(
            user_id=data.partner_id,
            type="reminder",
            title="New Session Scheduled",
            message=f"You have a new session: {data.title}",
            related_id=row["id"],
        )
        return EventRead(**row)

    @classmethod
    async def update_event(cls, event_id: str, data: EventUpdate) -> EventRead:
        """Update a session.

        Raises ``ValueError`` if the session does not exist or the
        update would leave it ending before it starts.
        """
        storage = get_storage()
        current = storage.get_event(event_id)
        if not current:
            raise ValueError(f"Event {event_id} not found")
        updates = data.model_dump(exclude_unset=True)
        start = updates.get("start_time", current["start_time"])
        end = updates.get("end_time", current["end_time"])
        if end <= start:
            raise ValueError("end_time must be after start_time")
        row = storage.update_event(event_id, updates)
        return EventRead(**row)

    @classmethod
    async def delete_event(cls, event_id: str) -> None:
        if not get_storage().delete_event(event_id):
            raise ValueError(f"Event {event_id} not found")
        logger.info("Event %s deleted", event_id)
