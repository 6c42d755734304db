import os

# settings are read at import time; keep tests off disk and off the database
os.environ.setdefault("LOG_DIR", "")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("N8N_WEBHOOK_IRRIGATION", "")
os.environ.setdefault("INTERNAL_API_TOKEN", "internal-test-token")

import uuid
from datetime import datetime, timedelta
from typing import List, Optional

import httpx
import pytest

from farmops.models import Field, IrrigationReading, RemediationTask
from farmops.models.enums import DeliveryStatus, TaskPriority, TaskStatus
from farmops.services.dispatch import BackgroundDispatcher
from farmops.services.escalation_service import IrrigationEscalationService
from farmops.services.notification_service import WebhookNotifier

WEBHOOK_URL = "https://hooks.example.com/webhook/irrigation"
BASE_TIME = datetime(2026, 10, 1, 6, 0, 0)


def make_field(name="Field A", warning=10.0, critical=15.0, field_id=None) -> Field:
    return Field(
        id=field_id or str(uuid.uuid4()),
        name=name,
        crop_type="Sugarcane",
        warning_threshold=warning,
        critical_threshold=critical,
    )


class FakeFieldStore:
    def __init__(self, *fields: Field):
        self.fields = {f.id: f for f in fields}
        self.lookups = 0

    async def get(self, field_id: str) -> Optional[Field]:
        self.lookups += 1
        return self.fields.get(field_id)


class FakeReadingStore:
    def __init__(self, fields: Optional[FakeFieldStore] = None):
        self.readings: List[IrrigationReading] = []
        self.created = 0
        self._fields = fields

    def add_existing(self, field_id: str, moisture_deficit: float) -> IrrigationReading:
        reading = IrrigationReading(
            id=str(uuid.uuid4()),
            field_id=field_id,
            moisture_deficit=moisture_deficit,
            recorded_by_id=None,
            created_at=BASE_TIME + timedelta(minutes=len(self.readings)),
        )
        if self._fields is not None:
            reading.field = self._fields.fields.get(field_id)
        self.readings.append(reading)
        return reading

    async def create(self, field_id, moisture_deficit, recorded_by_id):
        reading = self.add_existing(field_id, moisture_deficit)
        reading.recorded_by_id = recorded_by_id
        self.created += 1
        return reading

    async def recent_for_field(self, field_id, limit):
        rows = [r for r in self.readings if r.field_id == field_id]
        rows.sort(key=lambda r: r.created_at, reverse=True)
        return rows[:limit]

    async def list(self, field_id=None, limit=100):
        rows = [r for r in self.readings if field_id is None or r.field_id == field_id]
        rows.sort(key=lambda r: r.created_at, reverse=True)
        return rows[:limit]


class FakeTaskStore:
    def __init__(self, fail_with: Optional[Exception] = None):
        self.tasks: List[RemediationTask] = []
        self.fail_with = fail_with

    async def create(self, field_id, title, description, priority, incident_id=None):
        if self.fail_with is not None:
            raise self.fail_with
        task = RemediationTask(
            id=str(uuid.uuid4()),
            field_id=field_id,
            incident_id=incident_id,
            title=title,
            description=description,
            priority=priority,
            status=TaskStatus.OPEN,
            created_at=BASE_TIME + timedelta(minutes=len(self.tasks)),
        )
        self.tasks.append(task)
        return task

    async def list(self, status=None, field_id=None):
        rows = [
            t for t in self.tasks
            if (status is None or t.status == status) and (field_id is None or t.field_id == field_id)
        ]
        order = {TaskPriority.CRITICAL: 0, TaskPriority.WARNING: 1, TaskPriority.NORMAL: 2}
        return sorted(rows, key=lambda t: (order[t.priority], -t.created_at.timestamp()))

    async def complete(self, task_id):
        for t in self.tasks:
            if t.id == task_id:
                t.status = TaskStatus.COMPLETED
                return t
        return None


class FakeLedger:
    def __init__(self, fail_with: Optional[Exception] = None):
        self.records = []
        self.fail_with = fail_with

    async def record(self, event_type, related_entity_id, delivery_status: DeliveryStatus):
        if self.fail_with is not None:
            raise self.fail_with
        self.records.append((event_type, related_entity_id, delivery_status))


class WebhookStub:
    """httpx.MockTransport handler that answers with a fixed status or raises."""

    def __init__(self, status_code: int = 200, error: Optional[Exception] = None):
        self.status_code = status_code
        self.error = error
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status_code, json={"ok": self.status_code < 400})

    def client_factory(self):
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


class Harness:
    def __init__(
        self,
        *fields: Field,
        webhook_url: Optional[str] = WEBHOOK_URL,
        webhook: Optional[WebhookStub] = None,
        task_error: Optional[Exception] = None,
        ledger_error: Optional[Exception] = None,
        dispatcher: Optional[BackgroundDispatcher] = None,
    ):
        self.fields = FakeFieldStore(*fields)
        self.readings = FakeReadingStore(self.fields)
        self.tasks = FakeTaskStore(fail_with=task_error)
        self.ledger = FakeLedger(fail_with=ledger_error)
        self.webhook = webhook or WebhookStub()
        self.dispatcher = dispatcher or BackgroundDispatcher()
        self.notifier = WebhookNotifier(
            webhook_url=webhook_url,
            ledger=self.ledger,
            timeout=1.0,
            client_factory=self.webhook.client_factory,
        )
        self.service = IrrigationEscalationService(
            fields=self.fields,
            readings=self.readings,
            tasks=self.tasks,
            notifier=self.notifier,
            dispatcher=self.dispatcher,
        )


@pytest.fixture
def field():
    return make_field()


@pytest.fixture
def harness(field):
    return Harness(field)
