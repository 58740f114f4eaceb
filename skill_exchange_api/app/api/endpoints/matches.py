"""
Skill match endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.match import MatchCreate, MatchDetail, MatchRead, MatchStatusUpdate
from skill_exchange_api.app.services.match_service import MatchService

router = APIRouter()


@router.get("", response_model=List[MatchDetail])
async def list_matches(user_id: str = Query(...)) -> List[MatchDetail]:
    """Matches the user proposed or received, with users and skills resolved."""
    return await MatchService.list_matches(user_id)


@router.post("/request", response_model=MatchRead, status_code=status.HTTP_201_CREATED)
async def request_match(match: MatchCreate) -> MatchRead:
    """Propose a skill trade; the matched user is notified."""
    try:
        return await MatchService.request_match(match)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.put("/{match_id}/status", response_model=MatchRead)
async def update_match_status(match_id: str, body: MatchStatusUpdate) -> MatchRead:
    try:
        return await MatchService.update_status(match_id, body.status)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
