"""Endpoints for the caller's tags."""

from typing import List

from fastapi import APIRouter, Depends, status

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.tag import TagCreate, TagDeleteResult, TagRead

router = APIRouter()


@router.post("/", response_model=TagRead, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> TagRead:
    return await services.tags.create_tag(current_user["id"], data)


# The web client creates tags with PATCH.
router.add_api_route(
    "/",
    create_tag,
    methods=["PATCH"],
    response_model=TagRead,
    include_in_schema=False,
)


@router.get("/", response_model=List[TagRead])
async def list_tags(
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[TagRead]:
    return await services.tags.list_tags(current_user["id"])


@router.delete("/{tag_id}", response_model=TagDeleteResult)
async def delete_tag(
    tag_id: str,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> TagDeleteResult:
    return await services.tags.delete_tag(current_user["id"], tag_id)
