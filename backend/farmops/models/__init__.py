from .user import User
from .field import Field
from .irrigation import IrrigationReading
from .task import RemediationTask
from .notification import NotificationRecord
from ..core.database import Base

__all__ = [
    "User",
    "Field",
    "IrrigationReading",
    "RemediationTask",
    "NotificationRecord",
    "Base",
]
