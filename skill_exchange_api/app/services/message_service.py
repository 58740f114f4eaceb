"""
Business logic for direct messages.

Besides plain message CRUD this exposes the inbox view: the flat
message collection grouped into one conversation per partner (see
``core.aggregation.aggregate_conversations``).
"""

import logging
from typing import List

from ..core.storage import get_storage
from ..schemas.message import ConversationRead, MessageCreate, MessageRead
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class MessageService:
    """Service for messages exchanged between two users."""

    @classmethod
    async def get_thread(cls, user_id: str, partner_id: str) -> List[MessageRead]:
        """Messages between the two users, oldest first."""
        rows = get_storage().get_messages_between_users(user_id, partner_id)
        return [MessageRead(**row) for row in rows]

    @classmethod
    async def list_conversations(cls, user_id: str) -> List[ConversationRead]:
        return [ConversationRead(**conv) for conv in get_storage().get_conversations_by_user(user_id)]

    @classmethod
    async def send_message(cls, data: MessageCreate) -> MessageRead:
        """Store a message and notify the receiver."""
        row = get_storage().create_message(data.model_dump())
        logger.info("Message %s from %s to %s", row["id"], data.sender_id, data.receiver_id)
        await NotificationService.notify(
            user_id=data.receiver_id,
            type="message",
            title="New Message",
            message="You have a new message",
            related_id=row["id"],
        )
        return MessageRead(**row)

    @classmethod
    async def mark_as_read(cls, message_id: str) -> MessageRead:
        row = get_storage().mark_message_as_read(message_id)
        if not row:
            raise ValueError(f"Message {message_id} not found")
        return MessageRead(**row)
