"""Activity feed endpoint."""

from typing import List

from fastapi import APIRouter, Depends, Query

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.activity import ActivityRead

router = APIRouter()


@router.get("/", response_model=List[ActivityRead])
async def list_activities(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, alias="perPage"),
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[ActivityRead]:
    """The caller's feed, newest first."""
    return await services.activities.list_activities(current_user["id"], page, per_page)
