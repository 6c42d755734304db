from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from farmops.models import Field, IrrigationReading, RemediationTask
from farmops.models.enums import IrrigationStatus, TaskStatus
from farmops.services.irrigation_status import classify

SUMMARY_WINDOW = timedelta(hours=24)


def count_critical_fields(rows: Iterable[Tuple[str, float, float, float]]) -> int:
    """
    rows: (field_id, moisture_deficit, warning_threshold, critical_threshold)
    Returns the number of distinct fields with at least one CRITICAL reading.
    """
    critical = {
        field_id
        for field_id, deficit, warning, critical_threshold in rows
        if classify(deficit, warning, critical_threshold) == IrrigationStatus.CRITICAL
    }
    return len(critical)


async def daily_summary(db: AsyncSession, now: Optional[datetime] = None) -> dict:
    since = (now or datetime.utcnow()) - SUMMARY_WINDOW

    res = await db.execute(
        select(
            IrrigationReading.field_id,
            IrrigationReading.moisture_deficit,
            Field.warning_threshold,
            Field.critical_threshold,
        )
        .join(Field, IrrigationReading.field_id == Field.id)
        .where(IrrigationReading.created_at >= since)
    )
    rows = res.all()

    pending_tasks = await db.scalar(
        select(func.count()).select_from(RemediationTask).where(RemediationTask.status == TaskStatus.OPEN)
    )

    return {
        "criticalFields": count_critical_fields(rows),
        "pendingTasks": pending_tasks or 0,
        "readingsLast24h": len(rows),
    }
