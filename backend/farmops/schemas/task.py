from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from farmops.models.enums import TaskPriority, TaskStatus


class TaskStatusUpdate(BaseModel):
    # tasks only move forward: OPEN -> COMPLETED
    status: Literal["COMPLETED"]


class TaskOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    field_id: str
    incident_id: Optional[str] = None
    title: str
    description: str
    status: TaskStatus
    priority: TaskPriority
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
