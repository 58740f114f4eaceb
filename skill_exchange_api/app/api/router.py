"""
Top‑level API router.

Aggregates the domain routers.  The application mounts this router
under ``/api``.  Routers that mix several top‑level paths (messages
with conversations, the course marketplace) are included without a
prefix and spell out their paths themselves.
"""

from fastapi import APIRouter

from .endpoints import (
    auth,
    courses,
    events,
    info,
    matches,
    media,
    messages,
    notifications,
    profile,
    reviews,
    skills,
)

router = APIRouter()

router.include_router(info.router, tags=["info"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(profile.router, prefix="/profile", tags=["profile"])
router.include_router(skills.router, prefix="/skills", tags=["skills"])
router.include_router(matches.router, prefix="/matches", tags=["matches"])
router.include_router(messages.router, tags=["messages"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(reviews.router, prefix="/reviews", tags=["reviews"])
router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
router.include_router(media.router, prefix="/media", tags=["media"])
router.include_router(courses.router, tags=["courses"])
