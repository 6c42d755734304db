from datetime import datetime

from sqlalchemy import Column, DateTime, Enum as SAEnum, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from farmops.core.database import Base
from farmops.models.base import gen_uuid
from farmops.models.enums import TaskPriority, TaskStatus


class RemediationTask(Base):
    __tablename__ = "tasks"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    field_id = Column(String(36), ForeignKey("fields.id"), nullable=False, index=True)
    incident_id = Column(String(36), nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    status = Column(SAEnum(TaskStatus, name="task_status", native_enum=False), nullable=False, default=TaskStatus.OPEN)
    priority = Column(SAEnum(TaskPriority, name="task_priority", native_enum=False), nullable=False, default=TaskPriority.NORMAL)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    field = relationship("Field", back_populates="tasks")
