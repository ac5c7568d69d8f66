"""
Pydantic models for calendar events.

Request models are deliberately loose: presence and format checks on
``title``, ``date`` and the times are done by ``EventService`` so that
the same rules apply whether the service is reached over HTTP or
called directly.  ``sleipner`` holds attendee user ids on input and
attendee snapshots on output.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .user import UserSnapshot


class EventCreate(BaseModel):
    title: Optional[str] = Field(None, examples=["Team sync"])
    description: Optional[str] = Field(None, examples=["Weekly planning"])
    date: Optional[str] = Field(None, examples=["2024-3-15"])
    starttime: Optional[str] = Field(None, examples=["09:30"])
    endtime: Optional[str] = Field(None, examples=["10:00"])
    sleipner: List[str] = Field(default_factory=list)


class EventUpdate(BaseModel):
    """Partial update.  ``sleipner`` ids are appended to the existing
    attendee list rather than replacing it."""

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    starttime: Optional[str] = None
    endtime: Optional[str] = None
    sleipner: Optional[List[str]] = None


class EventRead(BaseModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    date: str
    starttime: str
    endtime: Optional[str] = None
    sleipner: List[UserSnapshot] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class EventDeleteResult(BaseModel):
    deleted: bool
    message: str
