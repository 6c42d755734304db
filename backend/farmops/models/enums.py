import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    SUPERVISOR = "SUPERVISOR"
    WORKER = "WORKER"


class IrrigationStatus(str, enum.Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _STATUS_RANK[self]


_STATUS_RANK = {
    IrrigationStatus.NORMAL: 0,
    IrrigationStatus.WARNING: 1,
    IrrigationStatus.CRITICAL: 2,
}


class TaskStatus(str, enum.Enum):
    OPEN = "OPEN"
    COMPLETED = "COMPLETED"


class TaskPriority(str, enum.Enum):
    NORMAL = "NORMAL"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class DeliveryStatus(str, enum.Enum):
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
