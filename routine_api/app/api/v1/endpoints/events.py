"""
Calendar event endpoints.

``GET /event/`` returns the caller's events grouped by date.  Updates
append attendees instead of replacing them, and deleting an event
twice is not an error.
"""

from typing import Dict, List

from fastapi import APIRouter, Depends, status

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.event import EventCreate, EventDeleteResult, EventRead, EventUpdate

router = APIRouter()


@router.post("/", response_model=EventRead, status_code=status.HTTP_201_CREATED)
async def create_event(
    data: EventCreate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> EventRead:
    return await services.events.create_event(current_user["id"], data)


@router.get("/", response_model=Dict[str, List[EventRead]])
async def list_events(
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> Dict[str, List[EventRead]]:
    return await services.events.list_grouped_by_date(current_user["id"])


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str, services: Services = Depends(get_services)) -> EventRead:
    return await services.events.get_event(event_id)


@router.patch("/{event_id}", response_model=EventRead)
async def update_event(
    event_id: str,
    data: EventUpdate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> EventRead:
    return await services.events.update_event(event_id, data, current_user["id"])


@router.delete("/{event_id}", response_model=EventDeleteResult)
async def delete_event(event_id: str, services: Services = Depends(get_services)) -> EventDeleteResult:
    return await services.events.delete_event(event_id)
