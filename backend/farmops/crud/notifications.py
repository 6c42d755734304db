from typing import Callable

from sqlalchemy.ext.asyncio import AsyncSession

from farmops.models import NotificationRecord
from farmops.models.enums import DeliveryStatus


class SqlNotificationLedger:
    """
    Append-only ledger of webhook delivery attempts.

    Opens a session per write: records are written from detached tasks that
    outlive the request session.
    """

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        self.session_factory = session_factory

    async def record(self, event_type: str, related_entity_id: str, delivery_status: DeliveryStatus) -> None:
        async with self.session_factory() as db:
            db.add(
                NotificationRecord(
                    event_type=event_type,
                    related_entity_id=related_entity_id,
                    delivery_status=delivery_status,
                )
            )
            await db.commit()
