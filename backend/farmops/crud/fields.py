from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from farmops.models import Field


class FieldRepository:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, field_id: str) -> Optional[Field]:
        return await self.db.get(Field, field_id)
