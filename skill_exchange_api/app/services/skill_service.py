"""
Business logic for skills.
"""

import logging
from typing import List

from ..core.storage import get_storage
from ..schemas.skill import SkillCreate, SkillRead, SkillUpdate

logger = logging.getLogger(__name__)


class SkillService:
    """Service for the skills users offer or want to learn."""

    @classmethod
    async def list_skills(cls, user_id: str) -> List[SkillRead]:
        return [SkillRead(**row) for row in get_storage().get_skills_by_user(user_id)]

    @classmethod
    async def create_skill(cls, data: SkillCreate) -> SkillRead:
        row = get_storage().create_skill(data.model_dump())
        logger.info("User %s added skill '%s'", data.user_id, data.title)
        return SkillRead(**row)

    @classmethod
    async def update_skill(cls, skill_id: str, data: SkillUpdate) -> SkillRead:
        row = get_storage().update_skill(skill_id, data.model_dump(exclude_unset=True))
        if not row:
            raise ValueError(f"Skill {skill_id} not found")
        return SkillRead(**row)

    @classmethod
    async def delete_skill(cls, skill_id: str) -> None:
        """Delete a skill; raises ``ValueError`` if it does not exist."""
        if not get_storage().delete_skill(skill_id):
            raise ValueError(f"Skill {skill_id} not found")
        logger.info("Skill %s deleted", skill_id)
