# backend/farmops/api/irrigation.py

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from farmops.api.deps import get_escalation_service, get_reading_repository
from farmops.core.auth import CurrentUser, get_current_user, require_roles
from farmops.core.responses import success_response
from farmops.crud.irrigation import ReadingRepository
from farmops.models.enums import Role
from farmops.schemas.irrigation import (
    FieldSummary,
    IrrigationLogCreate,
    IrrigationLogOut,
    IrrigationStatusOut,
)
from farmops.services.escalation_service import IrrigationEscalationService
from farmops.services.irrigation_status import classify

router = APIRouter(tags=["Irrigation"])


# -------------------------
# RECORD READING
# -------------------------
@router.post("")
async def create_irrigation_log(
    payload: IrrigationLogCreate,
    user: CurrentUser = Depends(require_roles(Role.WORKER, Role.SUPERVISOR)),
    service: IrrigationEscalationService = Depends(get_escalation_service),
):
    """
    Record a moisture reading. The response carries only the derived status;
    critical readings also open a remediation task and fire the n8n webhook.
    """
    status = await service.record_reading(
        field_id=str(payload.field_id),
        moisture_deficit=payload.moisture_deficit,
        recorded_by_id=user.id,
    )
    return success_response(IrrigationStatusOut(status=status).model_dump(mode="json"), "Irrigation log recorded")


# -------------------------
# LIST READINGS
# -------------------------
@router.get("")
async def list_irrigation_logs(
    field_id: Optional[UUID] = Query(None, alias="fieldId"),
    _: CurrentUser = Depends(get_current_user),
    readings: ReadingRepository = Depends(get_reading_repository),
):
    rows = await readings.list(field_id=str(field_id) if field_id else None, limit=100)

    items = []
    for r in rows:
        field = r.field
        items.append(
            IrrigationLogOut(
                id=r.id,
                field_id=r.field_id,
                moisture_deficit=r.moisture_deficit,
                recorded_by_id=r.recorded_by_id,
                created_at=r.created_at,
                status=classify(r.moisture_deficit, field.warning_threshold, field.critical_threshold),
                field=FieldSummary.model_validate(field),
            ).model_dump(mode="json", by_alias=True)
        )
    return success_response(items)
