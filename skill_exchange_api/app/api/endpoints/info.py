"""
Service information endpoint.

Used by load balancers and uptime checks; requires no authentication.
"""

from typing import Any, Dict

from fastapi import APIRouter

from skill_exchange_api.app.core.config import settings

router = APIRouter()


@router.get("/health", response_model=Dict[str, Any])
async def health() -> Dict[str, Any]:
    return {"status": "ok", "name": settings.project_name, "version": settings.api_version}
