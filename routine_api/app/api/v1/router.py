"""
Top‑level router for version 1 of the API.

``/auth`` is public.  Every other router is mounted behind the
``get_current_user`` dependency, so requests without a valid bearer
token are rejected with 401 before any handler runs.
"""

from fastapi import APIRouter, Depends

from ...core.security import get_current_user
from .endpoints import activities, auth, events, invites, tags, tasks, users

router = APIRouter()
protected = [Depends(get_current_user)]

router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(users.router, prefix="/users", tags=["users"], dependencies=protected)
router.include_router(tasks.router, prefix="/task", tags=["tasks"], dependencies=protected)
router.include_router(tags.router, prefix="/tags", tags=["tags"], dependencies=protected)
router.include_router(events.router, prefix="/event", tags=["events"], dependencies=protected)
# The feed keeps the path the web client has always used.
router.include_router(activities.router, prefix="/activates", tags=["activities"], dependencies=protected)
router.include_router(invites.router, prefix="/send", tags=["invites"], dependencies=protected)
