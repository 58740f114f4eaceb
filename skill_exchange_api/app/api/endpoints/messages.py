"""
Message and conversation endpoints.

``/messages/...`` deals with individual messages, ``/conversations``
returns the per‑partner inbox view.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.message import ConversationRead, MessageCreate, MessageRead
from skill_exchange_api.app.services.message_service import MessageService

router = APIRouter()


@router.get("/conversations", response_model=List[ConversationRead])
async def list_conversations(user_id: str = Query(...)) -> List[ConversationRead]:
    """One entry per partner with the latest message and unread count,
    most recent first."""
    return await MessageService.list_conversations(user_id)


@router.get("/messages/{partner_id}", response_model=List[MessageRead])
async def get_thread(partner_id: str, user_id: str = Query(...)) -> List[MessageRead]:
    return await MessageService.get_thread(user_id, partner_id)


@router.post("/messages", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def send_message(message: MessageCreate) -> MessageRead:
    return await MessageService.send_message(message)


@router.put("/messages/{message_id}/read", response_model=MessageRead)
async def mark_message_read(message_id: str) -> MessageRead:
    try:
        return await MessageService.mark_as_read(message_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
