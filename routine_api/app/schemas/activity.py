"""Pydantic models for activity feed entries."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ActivitySegment(BaseModel):
    """One run of the entry's description, rendered bold or plain."""

    bold: bool = False
    text: str


class ActivityRead(BaseModel):
    id: str
    user_id: str
    type: str
    title: str
    dis: List[ActivitySegment] = Field(default_factory=list)
    activate_id: Optional[str] = None
    created_at: str
