"""
Activity feed: an append‑only log of user‑visible notifications.

Entries are written as a side effect of other operations (login, event
creation and update).  ``append`` is fire‑and‑forget: the primary
operation has already succeeded when it runs, so a failed write is
logged and swallowed rather than reported to the caller.  There is no
atomicity between the primary write and the activity entry.
"""

import logging
from typing import Any, Dict, Iterable, List, Optional, Union

from ..core.db import DocumentStore
from ..core.errors import ValidationError, service_errors
from ..schemas.activity import ActivityRead, ActivitySegment

logger = logging.getLogger(__name__)

Segment = Union[ActivitySegment, Dict[str, Any]]


def bold(text: str) -> ActivitySegment:
    return ActivitySegment(bold=True, text=text)


def plain(text: str) -> ActivitySegment:
    return ActivitySegment(bold=False, text=text)


def page_bounds(page: int, per_page: int) -> tuple[int, int]:
    """Translate 1‑based page numbers into ``(limit, offset)``."""
    if page < 1 or per_page < 1:
        raise ValidationError("page and perPage must be positive integers")
    return per_page, (page - 1) * per_page


class ActivityService:
    """Writes and reads a user's activity feed."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    async def append(
        self,
        user_id: str,
        activity_type: str,
        title: str,
        segments: Iterable[Segment],
        related_id: Optional[str] = None,
    ) -> Optional[ActivityRead]:
        """Record an entry; return ``None`` instead of raising on failure."""
        try:
            dis = [ActivitySegment.model_validate(seg).model_dump() for seg in segments]
            doc = self.store.insert(
                "activities",
                {
                    "user_id": user_id,
                    "type": activity_type,
                    "title": title,
                    "dis": dis,
                    "activate_id": related_id,
                },
            )
        except Exception:
            logger.exception("Failed to record %s activity for user %s", activity_type, user_id)
            return None
        return ActivityRead(**doc)

    @service_errors
    async def list_activities(self, user_id: str, page: int = 1, per_page: int = 10) -> List[ActivityRead]:
        """Return the user's entries, newest first."""
        limit, offset = page_bounds(page, per_page)
        docs = self.store.find(
            "activities",
            "json_extract(body, '$.user_id') = ?",
            (user_id,),
            order_by="created_at DESC, rowid DESC",
            limit=limit,
            offset=offset,
        )
        return [ActivityRead(**doc) for doc in docs]
