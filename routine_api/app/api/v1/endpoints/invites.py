"""
Invitation endpoints.

``POST /send/invite`` e‑mails an invitation on behalf of the caller;
the recipient later accepts or rejects it.
"""

from typing import List

from fastapi import APIRouter, Depends, status

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.invite import InviteCreate, InviteRead, InviteRespond

router = APIRouter()


@router.post("/invite", response_model=InviteRead, status_code=status.HTTP_201_CREATED)
async def send_invite(
    data: InviteCreate,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> InviteRead:
    return await services.invites.send_invite(current_user, data)


@router.get("/invites", response_model=List[InviteRead])
async def list_invites(
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[InviteRead]:
    return await services.invites.list_invites(current_user["email"])


@router.patch("/invites/{invite_id}", response_model=InviteRead)
async def respond_to_invite(
    invite_id: str,
    data: InviteRespond,
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> InviteRead:
    return await services.invites.respond(invite_id, current_user["email"], data.status)
