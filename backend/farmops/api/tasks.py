from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from farmops.api.deps import get_task_repository
from farmops.core.auth import CurrentUser, get_current_user, require_roles
from farmops.core.exceptions import NotFoundError
from farmops.core.logger import get_logger
from farmops.core.responses import success_response
from farmops.crud.tasks import TaskRepository
from farmops.models.enums import Role, TaskStatus
from farmops.schemas.task import TaskOut, TaskStatusUpdate

logger = get_logger("tasks")

router = APIRouter(tags=["Tasks"])


@router.get("")
async def list_tasks(
    status: Optional[TaskStatus] = Query(None),
    field_id: Optional[UUID] = Query(None, alias="fieldId"),
    _: CurrentUser = Depends(get_current_user),
    tasks: TaskRepository = Depends(get_task_repository),
):
    rows = await tasks.list(status=status, field_id=str(field_id) if field_id else None)
    return success_response([TaskOut.model_validate(t).model_dump(mode="json", by_alias=True) for t in rows])


@router.patch("/{task_id}/status")
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    _: CurrentUser = Depends(require_roles(Role.SUPERVISOR, Role.ADMIN)),
    tasks: TaskRepository = Depends(get_task_repository),
):
    task = await tasks.complete(task_id)
    if not task:
        raise NotFoundError("Task not found")

    logger.info("Task status updated", extra={"task_id": task_id, "status": payload.status})
    return success_response(TaskOut.model_validate(task).model_dump(mode="json", by_alias=True))
