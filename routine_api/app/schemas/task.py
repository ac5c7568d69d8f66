"""
Pydantic models for tasks.

A task stores its owner, assignees and tags by value (see
``UserSnapshot``).  The description is a list of rich‑text blocks in
the block‑editor format used by the web client: every block has an
id, a type (``paragraph``, ``header``, ``list`` ...) and a free‑form
``data`` payload.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from .tag import TagRead
from .user import UserSnapshot


class TaskStatus(str, Enum):
    START = "Start"
    IN_PROCESS = "In Process"
    ON_HOLD = "On Hold"
    DONE = "Done"


DEFAULT_STATUS = TaskStatus.START


class DescriptionBlock(BaseModel):
    id: str
    type: str = "paragraph"
    data: Dict[str, Any] = Field(default_factory=dict)


class TaskCreate(BaseModel):
    """Optional initial values for a new task.

    ``tags`` holds ids of the owner's tags and ``assigned_users`` holds
    user ids; both are resolved to snapshots on write.
    """

    name: Optional[str] = None
    description: Optional[List[DescriptionBlock]] = None
    tags: List[str] = Field(default_factory=list)
    assigned_users: List[str] = Field(default_factory=list)
    status: Optional[TaskStatus] = None


class TaskUpdate(BaseModel):
    """Partial update.  Fields left out (or empty) keep their value,
    except ``status``, which falls back to ``Start`` when sent empty."""

    name: Optional[str] = None
    description: Optional[List[DescriptionBlock]] = None
    tags: Optional[List[str]] = None
    assigned_users: Optional[List[str]] = None
    status: Optional[TaskStatus] = None

    @field_validator("status", mode="before")
    @classmethod
    def blank_status_is_cleared(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class TaskRead(BaseModel):
    id: str
    owner: UserSnapshot
    name: str
    description: List[DescriptionBlock] = Field(default_factory=list)
    tags: List[TagRead] = Field(default_factory=list)
    assigned_users: List[UserSnapshot] = Field(default_factory=list)
    status: TaskStatus = DEFAULT_STATUS
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
