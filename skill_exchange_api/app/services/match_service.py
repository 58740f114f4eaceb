"""
Business logic for skill matches.

Requesting a match notifies the matched user; accepting one notifies
the requester.  Listing enriches every match with the counterpart's
public summary and both skills.
"""

import logging
from typing import List

from ..core.storage import get_storage
from ..schemas.match import MatchCreate, MatchDetail, MatchRead
from ..schemas.skill import SkillRead
from ..schemas.user import UserSummary
from .notification_service import NotificationService

logger = logging.getLogger(__name__)


class MatchService:
    """Service for skill trade proposals between two users."""

    @classmethod
    async def list_matches(cls, user_id: str) -> List[MatchDetail]:
        """Return every match the user is part of, on either side.

        ``matched_user`` is always the other party from ``user_id``'s
        point of view.
        """
        storage = get_storage()
        results: List[MatchDetail] = []
        for match in storage.get_matches_by_user(user_id):
            other_id = match["matched_user_id"] if match["user_id"] == user_id else match["user_id"]
            other = storage.get_user(other_id)
            user_skill = storage.get_skill(match["user_skill_id"])
            matched_skill = storage.get_skill(match["matched_skill_id"])
            results.append(
                MatchDetail(
                    **match,
                    matched_user=UserSummary(**other) if other else None,
                    user_skill=SkillRead(**user_skill) if user_skill else None,
                    matched_skill=SkillRead(**matched_skill) if matched_skill else None,
                )
            )
        return results

    @classmethod
    async def request_match(cls, data: MatchCreate) -> MatchRead:
        """Create a pending match and notify the matched user once."""
        if data.user_id == data.matched_user_id:
            raise ValueError("Cannot request a match with yourself")
        row = get_storage().create_match(data.model_dump())
        logger.info("User %s requested match %s with %s", data.user_id, row["id"], data.matched_user_id)
        await NotificationService.notify(
            user_id=data.matched_user_id,
            type="match",
            title="New Skill Trade Request",
            message="Someone wants to exchange skills with you",
            related_id=row["id"],
        )
        return MatchRead(**row)

    @classmethod
    async def update_status(cls, match_id: str, status: str) -> MatchRead:
        storage = get_storage()
        current = storage.get_match(match_id)
        if not current:
            raise ValueError(f"Match {match_id} not found")
        row = storage.update_match(match_id, status)
        logger.info("Match %s status %s -> %s", match_id, current["status"], status)
        if status == "accepted" and current["status"] != "accepted":
            await NotificationService.notify(
                user_id=row["user_id"],
                type="match",
                title="Skill Trade Accepted",
                message="Your skill exchange request was accepted",
                related_id=match_id,
            )
        return MatchRead(**row)
