# backend/farmops/schemas/irrigation.py

from datetime import datetime
from typing import Annotated, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from farmops.models.enums import IrrigationStatus

# no strings, no booleans: "12" is rejected rather than coerced
Deficit = Annotated[float, Field(strict=True, allow_inf_nan=False)]


class IrrigationLogCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    field_id: UUID
    moisture_deficit: Deficit


class IrrigationStatusOut(BaseModel):
    status: IrrigationStatus


class FieldSummary(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    name: str
    crop_type: str


class IrrigationLogOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    field_id: str
    moisture_deficit: float
    recorded_by_id: Optional[str] = None
    created_at: datetime
    status: IrrigationStatus
    field: Optional[FieldSummary] = None
