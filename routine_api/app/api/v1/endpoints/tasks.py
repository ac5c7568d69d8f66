"""
Task endpoints.

Listing returns the tasks the caller owns or is assigned to.  Any
authenticated user may read, update or delete a task by id.
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from ....core.deps import Services, get_services
from ....core.security import get_current_user
from ....schemas.task import TaskCreate, TaskRead, TaskUpdate
from ....schemas.user import MessageResponse

router = APIRouter()


@router.post("/", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
async def create_task(
    data: Optional[TaskCreate] = Body(None),
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> TaskRead:
    """Create a task owned by the caller; the body may be omitted."""
    return await services.tasks.create_task(current_user["id"], data)


@router.get("/", response_model=List[TaskRead])
async def list_tasks(
    current_user: dict = Depends(get_current_user),
    services: Services = Depends(get_services),
) -> List[TaskRead]:
    return await services.tasks.list_tasks(current_user["id"])


@router.get("/{task_id}", response_model=TaskRead)
async def get_task(task_id: str, services: Services = Depends(get_services)) -> TaskRead:
    return await services.tasks.get_task(task_id)


@router.patch("/{task_id}", response_model=TaskRead)
async def update_task(task_id: str, data: TaskUpdate, services: Services = Depends(get_services)) -> TaskRead:
    return await services.tasks.update_task(task_id, data)


# Older clients update through the status sub-path.
router.add_api_route(
    "/{task_id}/status",
    update_task,
    methods=["PATCH"],
    response_model=TaskRead,
    include_in_schema=False,
)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(task_id: str, services: Services = Depends(get_services)) -> MessageResponse:
    return await services.tasks.delete_task(task_id)
