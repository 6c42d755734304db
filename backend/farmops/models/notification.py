from datetime import datetime

from sqlalchemy import Column, DateTime, Enum as SAEnum, String

from farmops.core.database import Base
from farmops.models.base import gen_uuid
from farmops.models.enums import DeliveryStatus


class NotificationRecord(Base):
    __tablename__ = "notification_logs"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    event_type = Column(String, nullable=False)           # IRRIGATION_WEBHOOK
    related_entity_id = Column(String(36), nullable=False)
    delivery_status = Column(SAEnum(DeliveryStatus, name="delivery_status", native_enum=False), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
