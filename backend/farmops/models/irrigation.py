from datetime import datetime

from sqlalchemy import Column, DateTime, Float, ForeignKey, Index, String
from sqlalchemy.orm import relationship

from farmops.core.database import Base
from farmops.models.base import gen_uuid


class IrrigationReading(Base):
    __tablename__ = "irrigation_logs"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    field_id = Column(String(36), ForeignKey("fields.id"), nullable=False)
    moisture_deficit = Column(Float, nullable=False)
    recorded_by_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    field = relationship("Field", back_populates="readings")

    __table_args__ = (
        Index("ix_irrigation_logs_field_created", "field_id", "created_at"),
    )
