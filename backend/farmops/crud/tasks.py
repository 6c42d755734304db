from typing import List, Optional

from sqlalchemy import case, select
from sqlalchemy.ext.asyncio import AsyncSession

from farmops.models import RemediationTask
from farmops.models.enums import TaskPriority, TaskStatus

# CRITICAL first
_PRIORITY_ORDER = case(
    (RemediationTask.priority == TaskPriority.CRITICAL, 0),
    (RemediationTask.priority == TaskPriority.WARNING, 1),
    else_=2,
)


class TaskRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        field_id: str,
        title: str,
        description: str,
        priority: TaskPriority,
        incident_id: Optional[str] = None,
    ) -> RemediationTask:
        task = RemediationTask(
            field_id=field_id,
            incident_id=incident_id,
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.OPEN,
        )
        self.db.add(task)
        await self.db.commit()
        await self.db.refresh(task)
        return task

    async def list(self, status: Optional[TaskStatus] = None, field_id: Optional[str] = None) -> List[RemediationTask]:
        q = select(RemediationTask)
        if status:
            q = q.where(RemediationTask.status == status)
        if field_id:
            q = q.where(RemediationTask.field_id == field_id)
        q = q.order_by(_PRIORITY_ORDER, RemediationTask.created_at.desc())
        rows = await self.db.scalars(q)
        return list(rows.all())

    async def complete(self, task_id: str) -> Optional[RemediationTask]:
        task = await self.db.get(RemediationTask, task_id)
        if not task:
            return None

        # OPEN -> COMPLETED only; completing twice is a no-op
        if task.status != TaskStatus.COMPLETED:
            task.status = TaskStatus.COMPLETED
            await self.db.commit()
            await self.db.refresh(task)
        return task
