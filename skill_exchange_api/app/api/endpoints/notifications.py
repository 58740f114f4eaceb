"""
Notification endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.notification import MarkAllRead, NotificationRead
from skill_exchange_api.app.services.notification_service import NotificationService

router = APIRouter()


@router.get("", response_model=List[NotificationRead])
async def list_notifications(user_id: str = Query(...)) -> List[NotificationRead]:
    return await NotificationService.list_notifications(user_id)


# Declared before "/{notification_id}/read" so "read-all" is never taken for an id.
@router.put("/read-all")
async def mark_all_read(body: MarkAllRead) -> dict:
    updated = await NotificationService.mark_all_as_read(body.user_id)
    return {"detail": "All notifications marked as read", "updated": updated}


@router.put("/{notification_id}/read", response_model=NotificationRead)
async def mark_read(notification_id: str) -> NotificationRead:
    try:
        return await NotificationService.mark_as_read(notification_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
