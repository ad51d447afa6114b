from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.health_record import HealthCategory
from src.domain.services.dose_status import DoseStatus
from src.interfaces.http.schemas.common import OptionalWireDate, WireDate


class HealthRecordBase(BaseModel):
    date: WireDate
    category: HealthCategory
    description: str = Field(min_length=1)
    medicine: str | None = None
    dosage: str | None = None
    veterinarian: str | None = None
    cost: float | None = Field(default=None, ge=0)
    notes: str | None = None
    next_dose_date: OptionalWireDate = None
    repeat_every_days: int | None = Field(default=None, ge=0)
    reminder_advance_days: int | None = Field(default=None, ge=0)
    reminder_enabled: bool = True


class HealthRecordCreate(HealthRecordBase):
    animal_id: UUID


class HealthRecordUpdate(BaseModel):
    animal_id: UUID | None = None
    date: OptionalWireDate = None
    category: HealthCategory | None = None
    description: str | None = Field(default=None, min_length=1)
    medicine: str | None = None
    dosage: str | None = None
    veterinarian: str | None = None
    cost: float | None = Field(default=None, ge=0)
    notes: str | None = None
    next_dose_date: OptionalWireDate = None
    repeat_every_days: int | None = Field(default=None, ge=0)
    reminder_advance_days: int | None = Field(default=None, ge=0)
    reminder_enabled: bool | None = None


class HealthRecordResponse(HealthRecordBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    created_at: datetime
    updated_at: datetime


class HealthRecordListResponse(BaseModel):
    items: list[HealthRecordResponse]
    total: int


class DoseClassificationResponse(BaseModel):
    status: DoseStatus
    days_remaining: int | None
    progress_percent: int


class UpcomingDoseResponse(BaseModel):
    record: HealthRecordResponse
    animal_tag: str
    classification: DoseClassificationResponse


class AlertResponse(BaseModel):
    type: str
    title: str
    message: str
    data: dict
