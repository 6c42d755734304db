# backend/farmops/services/escalation_service.py

"""
Irrigation reading intake and critical-reading escalation.

Flow for one reading:
  field lookup -> classify -> persist reading -> (CRITICAL only) escalation
  check, remediation task, detached webhook notification.
"""

from dataclasses import dataclass
from typing import Optional

from farmops.core.exceptions import NotFoundError
from farmops.core.logger import get_logger
from farmops.models import Field, IrrigationReading, RemediationTask
from farmops.models.enums import IrrigationStatus, TaskPriority
from farmops.services.dispatch import BackgroundDispatcher
from farmops.services.irrigation_status import classify
from farmops.services.notification_service import WebhookNotifier
from farmops.services.ports import FieldStore, ReadingStore, TaskStore

logger = get_logger("irrigation")

# Escalation looks at a fixed WARNING band, not the field's own thresholds.
ESCALATION_WINDOW = 3
ESCALATION_BAND_LOW = 10
ESCALATION_BAND_HIGH = 15


@dataclass
class EscalationResult:
    escalated: bool
    task: RemediationTask


def in_escalation_band(moisture_deficit: float) -> bool:
    return ESCALATION_BAND_LOW <= moisture_deficit < ESCALATION_BAND_HIGH


def format_deficit(value: float) -> str:
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


class IrrigationEscalationService:
    def __init__(
        self,
        fields: FieldStore,
        readings: ReadingStore,
        tasks: TaskStore,
        notifier: WebhookNotifier,
        dispatcher: BackgroundDispatcher,
    ):
        self.fields = fields
        self.readings = readings
        self.tasks = tasks
        self.notifier = notifier
        self.dispatcher = dispatcher

    async def record_reading(
        self,
        field_id: str,
        moisture_deficit: float,
        recorded_by_id: Optional[str] = None,
    ) -> IrrigationStatus:
        field = await self.fields.get(field_id)
        if field is None:
            raise NotFoundError("Field not found")

        status = classify(moisture_deficit, field.warning_threshold, field.critical_threshold)

        reading = await self.readings.create(field_id, moisture_deficit, recorded_by_id)
        logger.info(
            "Irrigation log created",
            extra={
                "reading_id": reading.id,
                "field_id": field_id,
                "moisture_deficit": moisture_deficit,
                "status": status.value,
            },
        )

        if status == IrrigationStatus.CRITICAL:
            await self.evaluate(field, reading)

        return status

    async def check_escalation(self, field_id: str) -> bool:
        recent = await self.readings.recent_for_field(field_id, ESCALATION_WINDOW)
        if len(recent) < ESCALATION_WINDOW:
            return False
        return all(in_escalation_band(r.moisture_deficit) for r in recent[:ESCALATION_WINDOW])

    async def evaluate(self, field: Field, reading: IrrigationReading) -> EscalationResult:
        """
        Side effects for a CRITICAL reading: one remediation task and one
        detached notification, whatever the escalation outcome.
        """
        escalated = await self.check_escalation(field.id)
        final_status = IrrigationStatus.CRITICAL

        # both branches share a priority until escalated tasks get their own
        priority = TaskPriority.CRITICAL if escalated else TaskPriority.CRITICAL

        task = await self.tasks.create(
            field_id=field.id,
            title=f"Critical irrigation required - Field {field.name}",
            description=f"Moisture deficit: {format_deficit(reading.moisture_deficit)}. Immediate irrigation needed.",
            priority=priority,
        )

        self.dispatcher.spawn(
            self.notifier.notify_irrigation_critical(reading, final_status, field.name),
            name=f"irrigation-webhook-{reading.id}",
        )

        logger.info(
            "Critical irrigation - task created",
            extra={"field_id": field.id, "task_id": task.id, "escalated": escalated},
        )
        return EscalationResult(escalated=escalated, task=task)
