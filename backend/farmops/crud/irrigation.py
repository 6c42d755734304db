# backend/farmops/crud/irrigation.py

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from farmops.models import IrrigationReading


class ReadingRepository:
    """Append-only store for irrigation readings."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, field_id: str, moisture_deficit: float, recorded_by_id: Optional[str]) -> IrrigationReading:
        reading = IrrigationReading(
            field_id=field_id,
            moisture_deficit=moisture_deficit,
            recorded_by_id=recorded_by_id,
        )
        self.db.add(reading)
        await self.db.commit()
        await self.db.refresh(reading)
        return reading

    async def recent_for_field(self, field_id: str, limit: int) -> List[IrrigationReading]:
        rows = await self.db.scalars(
            select(IrrigationReading)
            .where(IrrigationReading.field_id == field_id)
            .order_by(IrrigationReading.created_at.desc())
            .limit(limit)
        )
        return list(rows.all())

    async def list(self, field_id: Optional[str] = None, limit: int = 100) -> List[IrrigationReading]:
        q = select(IrrigationReading).options(selectinload(IrrigationReading.field))
        if field_id:
            q = q.where(IrrigationReading.field_id == field_id)
        q = q.order_by(IrrigationReading.created_at.desc()).limit(limit)
        rows = await self.db.scalars(q)
        return list(rows.all())
