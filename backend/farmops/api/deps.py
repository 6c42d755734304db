# backend/farmops/api/deps.py

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from farmops.core.config import settings
from farmops.core.database import AsyncSessionLocal, get_db
from farmops.crud.fields import FieldRepository
from farmops.crud.irrigation import ReadingRepository
from farmops.crud.notifications import SqlNotificationLedger
from farmops.crud.tasks import TaskRepository
from farmops.services.dispatch import BackgroundDispatcher
from farmops.services.escalation_service import IrrigationEscalationService
from farmops.services.notification_service import WebhookNotifier


def get_dispatcher(request: Request) -> BackgroundDispatcher:
    return request.app.state.dispatcher


def get_notifier() -> WebhookNotifier:
    return WebhookNotifier(
        webhook_url=settings.N8N_WEBHOOK_IRRIGATION,
        ledger=SqlNotificationLedger(AsyncSessionLocal),
        timeout=settings.WEBHOOK_TIMEOUT_SECONDS,
    )


def get_reading_repository(db: AsyncSession = Depends(get_db)) -> ReadingRepository:
    return ReadingRepository(db)


def get_task_repository(db: AsyncSession = Depends(get_db)) -> TaskRepository:
    return TaskRepository(db)


def get_escalation_service(
    db: AsyncSession = Depends(get_db),
    notifier: WebhookNotifier = Depends(get_notifier),
    dispatcher: BackgroundDispatcher = Depends(get_dispatcher),
) -> IrrigationEscalationService:
    return IrrigationEscalationService(
        fields=FieldRepository(db),
        readings=ReadingRepository(db),
        tasks=TaskRepository(db),
        notifier=notifier,
        dispatcher=dispatcher,
    )
