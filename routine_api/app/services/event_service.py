"""
Business logic for calendar events.

Attendees ("sleipner") are stored as user ids and resolved to
snapshots when an event is read; ids that no longer resolve are
dropped from the response.  Updates append the incoming attendee ids
to the stored list without de‑duplicating them.  Start and end times
are validated individually but their order is not checked.
"""

import logging
from typing import Any, Dict, List

from ..core.db import DocumentStore
from ..core.errors import NotFoundError, ValidationError, service_errors
from ..schemas.event import EventCreate, EventDeleteResult, EventRead, EventUpdate
from ..schemas.user import UserSnapshot
from ..utils.validators import is_valid_date, is_valid_time
from .activity_service import ActivityService, bold, plain
from .user_service import UserService

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "date", "starttime")


def _check_formats(date_value, starttime, endtime) -> None:
    if date_value and not is_valid_date(date_value):
        raise ValidationError("Please input valid date!")
    for label, value in (("starttime", starttime), ("endtime", endtime)):
        if value and not is_valid_time(value):
            raise ValidationError(f"Please input valid {label}! Expected HH:MM between 00:00 and 23:59.")


class EventService:
    """Create, read, update, delete and group events."""

    def __init__(self, store: DocumentStore, users: UserService, activities: ActivityService) -> None:
        self.store = store
        self.users = users
        self.activities = activities

    def _present_many(self, events: List[Dict[str, Any]]) -> List[EventRead]:
        ids = [uid for event in events for uid in event.get("sleipner", [])]
        found = self.users.snapshots_by_id(ids)
        presented = []
        for event in events:
            attendees = [UserSnapshot(**found[uid]) for uid in event.get("sleipner", []) if uid in found]
            presented.append(EventRead(**{**event, "sleipner": attendees}))
        return presented

    def _present(self, event: Dict[str, Any]) -> EventRead:
        return self._present_many([event])[0]

    @service_errors
    async def create_event(self, owner_id: str, data: EventCreate) -> EventRead:
        missing = [field for field in REQUIRED_FIELDS if not getattr(data, field)]
        if missing:
            raise ValidationError(f"{', '.join(missing)} are required fields.")
        _check_formats(data.date, data.starttime, data.endtime)

        event = self.store.insert(
            "events",
            {
                "user_id": owner_id,
                "title": data.title,
                "description": data.description,
                "date": data.date,
                "starttime": data.starttime,
                "endtime": data.endtime,
                "sleipner": list(data.sleipner),
            },
        )
        logger.info("User %s created event %s", owner_id, event["id"])
        await self.activities.append(
            owner_id,
            "event",
            "New Event",
            [bold(event["title"]), plain("create a new event")],
            related_id=event["id"],
        )
        return self._present(event)

    @service_errors
    async def get_event(self, event_id: str) -> EventRead:
        event = self.store.get("events", event_id)
        if not event:
            raise NotFoundError(f"Event {event_id} not found")
        return self._present(event)

    @service_errors
    async def update_event(self, event_id: str, updates: EventUpdate, actor_id: str) -> EventRead:
        """Merge the provided fields; attendees are appended, not replaced."""
        event = self.store.get("events", event_id)
        if not event:
            raise NotFoundError(f"Event {event_id} not found")
        _check_formats(updates.date, updates.starttime, updates.endtime)

        for field in ("title", "description", "date", "starttime", "endtime"):
            value = getattr(updates, field)
            if value:
                event[field] = value
        if updates.sleipner:
            event["sleipner"] = list(event.get("sleipner", [])) + list(updates.sleipner)

        saved = self.store.replace("events", event)
        if saved is None:
            raise NotFoundError(f"Event {event_id} not found")
        await self.activities.append(
            actor_id,
            "event",
            "Update Event",
            [bold(saved["title"]), plain("this event is update")],
            related_id=saved["id"],
        )
        return self._present(saved)

    @service_errors
    async def delete_event(self, event_id: str) -> EventDeleteResult:
        """Delete an event; deleting it again reports that it is already gone."""
        if self.store.delete("events", event_id):
            logger.info("Deleted event %s", event_id)
            return EventDeleteResult(deleted=True, message="Event deleted successfully")
        return EventDeleteResult(deleted=False, message="Event already deleted")

    @service_errors
    async def list_grouped_by_date(self, user_id: str) -> Dict[str, List[EventRead]]:
        """The user's events keyed by their stored date string."""
        docs = self.store.find("events", "json_extract(body, '$.user_id') = ?", (user_id,))
        grouped: Dict[str, List[EventRead]] = {}
        for event in self._present_many(docs):
            grouped.setdefault(event.date, []).append(event)
        return grouped
