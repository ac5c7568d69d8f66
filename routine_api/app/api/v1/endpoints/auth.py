"""
Authentication endpoints.

Registration, login and account verification are the only routes that
do not require a bearer token.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, status

from ....core.deps import Services, get_services
from ....schemas.user import LoginResponse, MessageResponse, UserLogin, UserProfile, UserRegister

router = APIRouter()


@router.post("/register", response_model=UserProfile, status_code=status.HTTP_201_CREATED)
async def register_user(data: UserRegister, services: Services = Depends(get_services)) -> UserProfile:
    """Create an account and e‑mail a verification link when mail is configured."""
    return await services.users.register(data)


@router.post("/login", response_model=LoginResponse)
async def login_user(
    data: UserLogin,
    user_agent: Optional[str] = Header(None),
    services: Services = Depends(get_services),
) -> LoginResponse:
    """Exchange e‑mail and password for a bearer token.

    The client's ``User-Agent`` is recorded in the login activity entry.
    """
    return await services.users.login(data.email, data.password, user_agent)


@router.get("/verify/{token}", response_model=MessageResponse)
async def verify_account(token: str, services: Services = Depends(get_services)) -> MessageResponse:
    return await services.users.verify_account(token)
