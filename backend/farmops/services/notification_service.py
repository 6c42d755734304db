# backend/farmops/services/notification_service.py

"""
Outbound webhook notifications (n8n) and their delivery ledger.

- build_irrigation_payload: JSON body for IRRIGATION_CRITICAL events
- WebhookNotifier: one POST per event, one ledger entry per POST
- a missing or placeholder destination URL disables delivery (logged, no-op)

Delivery problems never raise out of the notifier; they come back as a
DeliveryOutcome so the caller (a detached background task) has nothing to catch.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional

import httpx

from farmops.core.logger import get_logger
from farmops.models import IrrigationReading
from farmops.models.enums import DeliveryStatus, IrrigationStatus
from farmops.services.ports import NotificationLedger

logger = get_logger("notifications")

IRRIGATION_CRITICAL_EVENT = "IRRIGATION_CRITICAL"
IRRIGATION_WEBHOOK_LEDGER_EVENT = "IRRIGATION_WEBHOOK"

# sample .env files ship this host; treat it as "not configured"
PLACEHOLDER_MARKER = "your-n8n-instance"


@dataclass
class DeliveryOutcome:
    delivery_status: DeliveryStatus
    status_code: Optional[int] = None
    error: Optional[str] = None
    ledger_error: Optional[str] = None

    @property
    def delivered(self) -> bool:
        return self.delivery_status == DeliveryStatus.DELIVERED


def is_webhook_configured(url: Optional[str]) -> bool:
    return bool(url) and PLACEHOLDER_MARKER not in url


def _iso(dt: Optional[datetime]) -> Optional[str]:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_irrigation_payload(
    reading: IrrigationReading,
    status: IrrigationStatus,
    field_name: Optional[str],
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    return {
        "eventType": IRRIGATION_CRITICAL_EVENT,
        "data": {
            "id": reading.id,
            "fieldId": reading.field_id,
            "moistureDeficit": reading.moisture_deficit,
            "recordedById": reading.recorded_by_id,
            "createdAt": _iso(reading.created_at),
            "status": IrrigationStatus(status).value,
            "fieldName": field_name,
        },
        "timestamp": _iso(now or datetime.now(timezone.utc)),
    }


class WebhookNotifier:
    def __init__(
        self,
        webhook_url: Optional[str],
        ledger: NotificationLedger,
        timeout: float = 10.0,
        client_factory: Optional[Callable[[], httpx.AsyncClient]] = None,
    ):
        self.webhook_url = webhook_url
        self.ledger = ledger
        self.timeout = timeout
        self._client_factory = client_factory or (lambda: httpx.AsyncClient(timeout=self.timeout))

    @property
    def is_enabled(self) -> bool:
        return is_webhook_configured(self.webhook_url)

    async def notify_irrigation_critical(
        self,
        reading: IrrigationReading,
        status: IrrigationStatus,
        field_name: Optional[str],
    ) -> Optional[DeliveryOutcome]:
        if not self.is_enabled:
            logger.info(
                "n8n webhook skipped - no valid URL configured",
                extra={"reading_id": reading.id},
            )
            return None

        payload = build_irrigation_payload(reading, status, field_name)
        outcome = await self._post(payload, reading.id)
        outcome.ledger_error = await self._record(reading.id, outcome.delivery_status)
        return outcome

    async def _post(self, payload: Dict[str, Any], reading_id: str) -> DeliveryOutcome:
        try:
            async with self._client_factory() as client:
                response = await client.post(self.webhook_url, json=payload)
        except Exception as e:
            logger.error(
                "Failed to trigger irrigation webhook",
                extra={"reading_id": reading_id, "error": repr(e)},
            )
            return DeliveryOutcome(DeliveryStatus.FAILED, error=repr(e))

        delivered = response.is_success
        logger.info(
            "Irrigation webhook triggered",
            extra={"reading_id": reading_id, "status_code": response.status_code, "delivered": delivered},
        )
        return DeliveryOutcome(
            DeliveryStatus.DELIVERED if delivered else DeliveryStatus.FAILED,
            status_code=response.status_code,
            error=None if delivered else f"HTTP {response.status_code}",
        )

    async def _record(self, reading_id: str, delivery_status: DeliveryStatus) -> Optional[str]:
        try:
            await self.ledger.record(IRRIGATION_WEBHOOK_LEDGER_EVENT, reading_id, delivery_status)
        except Exception as e:
            logger.exception(
                "Failed to record notification delivery",
                extra={"reading_id": reading_id, "delivery_status": delivery_status.value},
            )
            return repr(e)
        return None
