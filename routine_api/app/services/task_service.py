"""
Business logic for tasks.

Tasks carry copies of their owner, assignees and tags instead of
references, so listing tasks never has to look users or tags up.  The
copies are taken when the task is written and are not refreshed when
the user later edits their profile (see ``UserSnapshot``).  With
``Settings.identity_mode == "reference"`` the owner and assignee
copies are instead re‑resolved from the live user documents on every
read; users that no longer resolve keep their stored copy.

A task is visible to its owner and to every assigned user.
"""

import logging
import uuid
from typing import Any, Dict, List, Optional

from ..core.config import IDENTITY_REFERENCE, Settings
from ..core.db import DocumentStore
from ..core.errors import NotFoundError, service_errors
from ..schemas.task import DEFAULT_STATUS, DescriptionBlock, TaskCreate, TaskRead, TaskUpdate
from ..schemas.user import MessageResponse
from .tag_service import TagService
from .user_service import UserService

logger = logging.getLogger(__name__)

DEFAULT_TASK_NAME = "Untitled"

_VISIBLE_TO = (
    "json_extract(body, '$.owner.id') = ? "
    "OR EXISTS (SELECT 1 FROM json_each(body, '$.assigned_users') "
    "WHERE json_extract(json_each.value, '$.id') = ?)"
)


def empty_description() -> List[Dict[str, Any]]:
    """A description holding a single empty paragraph block."""
    block = DescriptionBlock(id=uuid.uuid4().hex[:10], type="paragraph", data={"text": ""})
    return [block.model_dump()]


class TaskService:
    """Create, read, update and delete tasks."""

    def __init__(self, store: DocumentStore, settings: Settings, users: UserService, tags: TagService) -> None:
        self.store = store
        self.settings = settings
        self.users = users
        self.tags = tags

    def _require_task(self, task_id: str) -> Dict[str, Any]:
        task = self.store.get("tasks", task_id)
        if not task:
            raise NotFoundError(f"Task {task_id} not found")
        return task

    def _present(self, task: Dict[str, Any]) -> TaskRead:
        if self.settings.identity_mode == IDENTITY_REFERENCE:
            task = dict(task)
            stored = [task["owner"], *task.get("assigned_users", [])]
            live = self.users.snapshots_by_id([snap["id"] for snap in stored])
            task["owner"] = live.get(task["owner"]["id"], task["owner"])
            task["assigned_users"] = [live.get(snap["id"], snap) for snap in task.get("assigned_users", [])]
        return TaskRead(**task)

    @service_errors
    async def create_task(self, owner_id: str, data: Optional[TaskCreate] = None) -> TaskRead:
        """Create a task owned by ``owner_id``.

        The owner's identity is copied onto the task.  Without an explicit
        description the task starts with one empty paragraph block.
        """
        data = data or TaskCreate()
        owner = self.users.snapshots([owner_id])[0]
        description = (
            [block.model_dump() for block in data.description] if data.description else empty_description()
        )
        task = self.store.insert(
            "tasks",
            {
                "owner": owner,
                "name": (data.name or "").strip() or DEFAULT_TASK_NAME,
                "description": description,
                "tags": self.tags.resolve(owner_id, data.tags),
                "assigned_users": self.users.snapshots(data.assigned_users),
                "status": (data.status or DEFAULT_STATUS).value,
            },
        )
        logger.info("User %s created task %s", owner_id, task["id"])
        return self._present(task)

    @service_errors
    async def list_tasks(self, user_id: str) -> List[TaskRead]:
        """Tasks the user owns or is assigned to, newest first."""
        docs = self.store.find("tasks", _VISIBLE_TO, (user_id, user_id), order_by="created_at DESC, rowid DESC")
        return [self._present(doc) for doc in docs]

    @service_errors
    async def get_task(self, task_id: str) -> TaskRead:
        return self._present(self._require_task(task_id))

    @service_errors
    async def update_task(self, task_id: str, updates: TaskUpdate) -> TaskRead:
        """Merge the provided fields into the task.

        An empty name keeps the stored one; lists replace the stored list
        whenever they are sent, even empty.  A ``status`` that is sent but
        empty resets the task to ``Start``.
        """
        task = self._require_task(task_id)
        if updates.name and updates.name.strip():
            task["name"] = updates.name.strip()
        if updates.description is not None:
            task["description"] = [block.model_dump() for block in updates.description]
        if updates.tags is not None:
            task["tags"] = self.tags.resolve(task["owner"]["id"], updates.tags)
        if updates.assigned_users is not None:
            task["assigned_users"] = self.users.snapshots(updates.assigned_users)
        if updates.status:
            task["status"] = updates.status.value
        elif "status" in updates.model_fields_set:
            task["status"] = DEFAULT_STATUS.value
        saved = self.store.replace("tasks", task)
        if saved is None:
            raise NotFoundError(f"Task {task_id} not found")
        return self._present(saved)

    @service_errors
    async def delete_task(self, task_id: str) -> MessageResponse:
        if not self.store.delete("tasks", task_id):
            raise NotFoundError(f"Task {task_id} not found")
        logger.info("Deleted task %s", task_id)
        return MessageResponse(message="Task deleted successfully")
