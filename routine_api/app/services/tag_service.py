"""
Business logic for user tags.

Two storage strategies satisfy the same contract and are selected by
``Settings.tag_storage``:

* ``EmbeddedTagStore`` keeps the tags as an array on the user
  document.  This is the current layout.
* ``CollectionTagStore`` keeps one document per tag in the ``tags``
  collection, keyed by the owner's id.

Tag ids are unique within a user in both layouts.  Deleting a tag
that does not exist is not an error; the result simply says so.
"""

import logging
from typing import Any, Dict, List, Sequence

from ..core.config import TAG_STORAGE_COLLECTION, Settings
from ..core.db import DocumentStore, new_id
from ..core.errors import ConflictError, NotFoundError, ValidationError, service_errors
from ..schemas.tag import TagCreate, TagDeleteResult, TagRead

logger = logging.getLogger(__name__)

Tag = Dict[str, Any]


class EmbeddedTagStore:
    """Tags stored in ``user["tags"]``."""

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    def _user(self, user_id: str) -> Dict[str, Any]:
        user = self.store.get("users", user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def list(self, user_id: str) -> List[Tag]:
        return list(self._user(user_id).get("tags") or [])

    def add(self, user_id: str, tag: Tag) -> Tag:
        user = self._user(user_id)
        tags = list(user.get("tags") or [])
        if any(existing["id"] == tag["id"] for existing in tags):
            raise ConflictError(f"Tag {tag['id']} already exists")
        tags.append(tag)
        user["tags"] = tags
        self.store.replace("users", user)
        return tag

    def remove(self, user_id: str, tag_id: str) -> bool:
        user = self._user(user_id)
        tags = list(user.get("tags") or [])
        remaining = [tag for tag in tags if tag["id"] != tag_id]
        if len(remaining) == len(tags):
            return False
        user["tags"] = remaining
        self.store.replace("users", user)
        return True


class CollectionTagStore:
    """Tags stored as documents of the ``tags`` collection.

    The document id is internal; the tag's own id lives in ``tag_id``
    so that the same id may be used by different users.
    """

    _WHERE_USER = "json_extract(body, '$.user_id') = ?"
    _WHERE_TAG = _WHERE_USER + " AND json_extract(body, '$.tag_id') = ?"

    def __init__(self, store: DocumentStore) -> None:
        self.store = store

    @staticmethod
    def _to_tag(doc: Dict[str, Any]) -> Tag:
        return {"id": doc["tag_id"], "name": doc["name"], "color": doc["color"]}

    def list(self, user_id: str) -> List[Tag]:
        return [self._to_tag(doc) for doc in self.store.find("tags", self._WHERE_USER, (user_id,))]

    def add(self, user_id: str, tag: Tag) -> Tag:
        if not self.store.get("users", user_id):
            raise NotFoundError("User not found")
        if self.store.find_one("tags", self._WHERE_TAG, (user_id, tag["id"])):
            raise ConflictError(f"Tag {tag['id']} already exists")
        self.store.insert(
            "tags",
            {"user_id": user_id, "tag_id": tag["id"], "name": tag["name"], "color": tag["color"]},
        )
        return tag

    def remove(self, user_id: str, tag_id: str) -> bool:
        doc = self.store.find_one("tags", self._WHERE_TAG, (user_id, tag_id))
        if not doc:
            return False
        return self.store.delete("tags", doc["id"])


class TagService:
    """Per‑user tag operations on top of the configured storage strategy."""

    def __init__(self, store: DocumentStore, settings: Settings) -> None:
        if settings.tag_storage == TAG_STORAGE_COLLECTION:
            self.backend = CollectionTagStore(store)
        else:
            self.backend = EmbeddedTagStore(store)

    @service_errors
    async def create_tag(self, user_id: str, data: TagCreate) -> TagRead:
        name = (data.name or "").strip()
        if not name:
            raise ValidationError("Tag name is required")
        tag = {"id": data.id or new_id(), "name": name, "color": data.color}
        saved = self.backend.add(user_id, tag)
        logger.info("User %s created tag %s", user_id, saved["id"])
        return TagRead(**saved)

    @service_errors
    async def list_tags(self, user_id: str) -> List[TagRead]:
        return [TagRead(**tag) for tag in self.backend.list(user_id)]

    @service_errors
    async def delete_tag(self, user_id: str, tag_id: str) -> TagDeleteResult:
        if self.backend.remove(user_id, tag_id):
            return TagDeleteResult(deleted=True, message="Tag deleted")
        return TagDeleteResult(deleted=False, message="Tag not found")

    def resolve(self, user_id: str, tag_ids: Sequence[str]) -> List[Tag]:
        """Copy the owner's tags with the given ids, in request order."""
        by_id: Dict[str, Tag] = {tag["id"]: tag for tag in self.backend.list(user_id)}
        missing: List[str] = [tag_id for tag_id in tag_ids if tag_id not in by_id]
        if missing:
            raise ValidationError(f"Unknown tag id(s): {', '.join(missing)}")
        return [dict(by_id[tag_id]) for tag_id in tag_ids]
