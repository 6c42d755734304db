from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from farmops.core.auth import require_internal_token
from farmops.core.database import get_db
from farmops.core.logger import get_logger
from farmops.core.responses import success_response
from farmops.services.summary_service import daily_summary

logger = get_logger("internal")

router = APIRouter(prefix="/internal", tags=["Internal"], dependencies=[Depends(require_internal_token)])


@router.get("/daily-summary")
async def get_daily_summary(db: AsyncSession = Depends(get_db)):
    summary = await daily_summary(db)
    logger.info("Daily summary fetched", extra=summary)
    return success_response(summary)
