from datetime import datetime

from sqlalchemy import Boolean, Column, DateTime, Enum as SAEnum, String

from farmops.core.database import Base
from farmops.models.base import gen_uuid
from farmops.models.enums import Role


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    email = Column(String, unique=True, nullable=False)
    full_name = Column(String, nullable=False)
    role = Column(SAEnum(Role, name="user_role", native_enum=False), nullable=False, default=Role.WORKER)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
