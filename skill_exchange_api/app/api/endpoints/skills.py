"""
Skill endpoints.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, status

from skill_exchange_api.app.schemas.skill import SkillCreate, SkillRead, SkillUpdate
from skill_exchange_api.app.services.skill_service import SkillService

router = APIRouter()


@router.get("", response_model=List[SkillRead])
async def list_skills(user_id: str = Query(..., description="Owner of the skills")) -> List[SkillRead]:
    return await SkillService.list_skills(user_id)


@router.post("", response_model=SkillRead, status_code=status.HTTP_201_CREATED)
async def create_skill(skill: SkillCreate) -> SkillRead:
    return await SkillService.create_skill(skill)


@router.put("/{skill_id}", response_model=SkillRead)
async def update_skill(skill_id: str, updates: SkillUpdate) -> SkillRead:
    """Partially update a skill.  Unknown fields are rejected."""
    try:
        return await SkillService.update_skill(skill_id, updates)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/{skill_id}")
async def delete_skill(skill_id: str) -> dict:
    try:
        await SkillService.delete_skill(skill_id)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    return {"detail": "Skill deleted successfully"}
