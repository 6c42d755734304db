"""
Collaborator contracts used by the irrigation services.

Typed with ``typing.Protocol`` so the services run against the SQL
repositories in production and against in-memory fakes in tests.
"""

from typing import List, Optional, Protocol

from farmops.models import Field, IrrigationReading, RemediationTask
from farmops.models.enums import DeliveryStatus, TaskPriority, TaskStatus


class FieldStore(Protocol):
    async def get(self, field_id: str) -> Optional[Field]: ...


class ReadingStore(Protocol):
    async def create(self, field_id: str, moisture_deficit: float, recorded_by_id: Optional[str]) -> IrrigationReading: ...

    # newest first
    async def recent_for_field(self, field_id: str, limit: int) -> List[IrrigationReading]: ...


class TaskStore(Protocol):
    async def create(
        self,
        field_id: str,
        title: str,
        description: str,
        priority: TaskPriority,
        incident_id: Optional[str] = None,
    ) -> RemediationTask: ...


class TaskQueries(Protocol):
    async def list(self, status: Optional[TaskStatus] = None, field_id: Optional[str] = None) -> List[RemediationTask]: ...

    async def complete(self, task_id: str) -> Optional[RemediationTask]: ...


class NotificationLedger(Protocol):
    async def record(self, event_type: str, related_entity_id: str, delivery_status: DeliveryStatus) -> None: ...
