"""Pydantic models for user tags."""

from typing import Optional

from pydantic import BaseModel, Field


class TagCreate(BaseModel):
    id: Optional[str] = Field(None, description="Client supplied id; generated when omitted")
    name: str = Field(..., examples=["urgent"])
    color: str = Field(..., examples=["#f00"])


class TagRead(BaseModel):
    id: str
    name: str
    color: str


class TagDeleteResult(BaseModel):
    deleted: bool
    message: str
