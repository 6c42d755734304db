from datetime import datetime

from sqlalchemy import Column, DateTime, Float, String
from sqlalchemy.orm import relationship

from farmops.core.database import Base
from farmops.models.base import gen_uuid

DEFAULT_WARNING_THRESHOLD = 10.0
DEFAULT_CRITICAL_THRESHOLD = 15.0


class Field(Base):
    __tablename__ = "fields"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    name = Column(String, nullable=False)
    crop_type = Column(String, nullable=False)

    # critical_threshold >= warning_threshold is assumed, not enforced
    warning_threshold = Column(Float, nullable=False, default=DEFAULT_WARNING_THRESHOLD)
    critical_threshold = Column(Float, nullable=False, default=DEFAULT_CRITICAL_THRESHOLD)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    readings = relationship("IrrigationReading", back_populates="field")
    tasks = relationship("RemediationTask", back_populates="field")
