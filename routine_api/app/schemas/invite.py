"""Pydantic models for e‑mail invitations."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class InviteStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class InviteCreate(BaseModel):
    recipient_email: str = Field(..., examples=["friend@example.com"])
    message: Optional[str] = Field(None, examples=["Join my board!"])
    navigate_link: Optional[str] = Field(None, description="Link the invitation button points to")


class InviteRespond(BaseModel):
    status: InviteStatus


class InviteRead(BaseModel):
    id: str
    sender_email: str
    recipient_email: str
    message: Optional[str] = None
    status: InviteStatus = InviteStatus.PENDING
    created_at: Optional[str] = None
