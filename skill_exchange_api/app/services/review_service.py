"""
Business logic for reviews.

Creating a review recomputes the reviewed user's average rating and
review count from all of their reviews (the store does this inside
``create_review``) and notifies them.  Comments are HTML‑escaped on the
way out to protect clients from XSS.
"""

import html
import logging
from typing import List

from ..core.storage import get_storage
from ..schemas.review import ReviewCreate, ReviewDetail, ReviewRead
from ..schemas.user import UserSummary
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


def _escape(row: dict) -> dict:
    if row.get("comment") is not None:
        row = {**row, "comment": html.escape(row["comment"])}
    return row


class ReviewService:
    """Service for reviews users leave about each other."""

    @classmethod
    async def create_review(cls, data: ReviewCreate) -> ReviewRead:
        """Store a review, refresh the subject's rating and notify them."""
        if data.user_id == data.reviewer_id:
            raise ValueError("Users cannot review themselves")
        storage = get_storage()
        row = storage.create_review(data.model_dump())
        subject = storage.get_user(data.user_id)
        if subject:
            logger.info(
                "Review %s for user %s; rating now %s over %s reviews",
                row["id"], data.user_id, subject["rating"], subject["total_reviews"],
            )
        else:
            logger.warning("Review %s stored for unknown user %s", row["id"], data.user_id)
        await NotificationService.notify(
            user_id=data.user_id,
            type="review",
            title="New Review",
            message=f"You received a {data.rating}-star review",
            related_id=row["id"],
        )
        return ReviewRead(**_escape(row))

    @classmethod
    async def list_reviews(cls, user_id: str) -> List[ReviewDetail]:
        """Reviews received by the user, newest first, with reviewer cards."""
        storage = get_storage()
        results: List[ReviewDetail] = []
        for row in storage.get_reviews_by_user(user_id):
            reviewer = storage.get_user(row["reviewer_id"])
            results.append(
                ReviewDetail(
                    **_escape(row),
                    reviewer=UserSummary(**reviewer) if reviewer else None,
                )
            )
        return results
