"""
User endpoints: the caller's profile, password and picture, the
"sleipner" contact list and user search.
"""

from typing import List

from fastapi import APIRouter, Depends, File, Query, UploadFile

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.user import (
    ContactAdd,
    MessageResponse,
    PasswordUpdate,
    ProfileUpdate,
    UserProfile,
    UserPublic,
    UserSnapshot,
)

router = APIRouter()


@router.get("/profile", response_model=UserProfile)
async def user_profile(
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> UserProfile:
    return await services.users.get_profile(current_user["id"])


@router.patch("/update-profile", response_model=UserProfile)
async def update_profile(
    data: ProfileUpdate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> UserProfile:
    """Change name and/or e‑mail; omitted fields keep their value."""
    return await services.users.update_profile(current_user["id"], data)


@router.patch("/update-password", response_model=MessageResponse)
async def update_password(
    data: PasswordUpdate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> MessageResponse:
    return await services.users.update_password(current_user["id"], data)


@router.patch("/update-avatar", response_model=UserProfile)
async def update_avatar(
    profile_picture: UploadFile = File(..., alias="profilePicture"),
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> UserProfile:
    """Upload a new profile picture (.jpg, .jpeg or .png)."""
    content = await profile_picture.read()
    return await services.users.update_avatar(current_user["id"], content, profile_picture.filename or "")


@router.get("/search", response_model=List[UserPublic])
async def search_users(
    query: str = Query("", alias="nameOremail"),
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, alias="perPage"),
    services: Services = Depends(get_services),
) -> List[UserPublic]:
    """Case‑insensitive search on name or e‑mail."""
    return await services.users.search(query, page, per_page)


@router.post("/sleipner", response_model=UserProfile)
async def add_sleipner(
    data: ContactAdd,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> UserProfile:
    return await services.users.add_contact(current_user["id"], data.id)


@router.delete("/sleipner/{sleipner_id}", response_model=MessageResponse)
async def remove_sleipner(
    sleipner_id: str,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> MessageResponse:
    return await services.users.remove_contact(current_user["id"], sleipner_id)


@router.get("/sleipner", response_model=List[UserSnapshot])
async def list_sleipners(
    page: int = Query(1, ge=1),
    per_page: int = Query(10, ge=1, alias="perPage"),
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[UserSnapshot]:
    return await services.users.list_contacts(current_user["id"], page, per_page)
