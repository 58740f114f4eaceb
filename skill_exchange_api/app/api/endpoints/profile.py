"""
Profile endpoints.

Anyone may view a profile; only the owner, identified by the bearer
token, may edit it.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from skill_exchange_api.app.core.security import get_current_user
from skill_exchange_api.app.schemas.user import ProfileUpdate, UserRead
from skill_exchange_api.app.services.user_service import UserService

router = APIRouter()


@router.get("/{user_id}", response_model=UserRead)
async def get_profile(user_id: str) -> UserRead:
    try:
        return await UserService.get_user(user_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{user_id}", response_model=UserRead)
async def update_profile(
    user_id: str,
    updates: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
) -> UserRead:
    """Update ``full_name``, ``bio`` or ``avatar_url``.

    Any other field in the body is rejected with 400.  Users can only
    edit their own profile.
    """
    if current_user.get("user_id") != user_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
    try:
        return await UserService.update_profile(user_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
