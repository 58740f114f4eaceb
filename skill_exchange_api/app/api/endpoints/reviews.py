"""
Review endpoints.

Submitting a review recomputes the reviewed user's rating.  Comments
are escaped when returned to protect clients from XSS.
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from skill_exchange_api.app.schemas.review import ReviewCreate, ReviewDetail, ReviewRead
from skill_exchange_api.app.services.review_service import ReviewService

router = APIRouter()


@router.get("/{user_id}", response_model=List[ReviewDetail])
async def list_reviews(user_id: str) -> List[ReviewDetail]:
    """Reviews the user received, newest first."""
    return await ReviewService.list_reviews(user_id)


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
async def create_review(review: ReviewCreate) -> ReviewRead:
    try:
        return await ReviewService.create_review(review)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
