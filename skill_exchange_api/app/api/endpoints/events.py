"""
Session (calendar event) endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.event import EventCreate, EventRead, EventUpdate
from skill_exchange_api.app.services.event_service import EventService

router = APIRouter()


@router.get("", response_model=List[EventRead])
async def list_events(user_id: str = Query(...)) -> List[EventRead]:
    """Sessions the user organises or takes part in, by start time."""
    return await EventService.list_events(user_id)


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str) -> EventRead:
    try:
        return await EventService.get_event(event_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(event: EventCreate) -> EventRead:
    """Schedule a session; the partner gets a reminder notification."""
    return await EventService.create_event(event)


@router.put("/{event_id}", response_model=EventRead)
async def update_event(event_id: str, updates: EventUpdate) -> EventRead:
    """Partial update.  Returns 400 if the session would end before it starts."""
    try:
        return await EventService.update_event(event_id, updates)
    except ValueError as e:
        detail = str(e)
        status_code = status.HTTP_404_NOT_FOUND if "not found" in detail else status.HTTP_400_BAD_REQUEST
        raise HTTPException(status_code=status_code, detail=detail) from e


@router.delete("/{event_id}")
async def delete_event(event_id: str) -> dict:
    try:
        await EventService.delete_event(event_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return {"detail": "Event deleted successfully"}
