from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.models.production_record import MilkingShift, ProductionCategory


class ProductionRecordCreate(BaseModel):
    animal_id: UUID
    recorded_at: datetime
    category: ProductionCategory
    quantity: float = Field(ge=0)
    quality: str | None = None
    notes: str | None = None
    shift: MilkingShift | None = None
    milking_location: str | None = None


class ProductionRecordUpdate(BaseModel):
    animal_id: UUID | None = None
    recorded_at: datetime | None = None
    category: ProductionCategory | None = None
    quantity: float | None = Field(default=None, ge=0)
    quality: str | None = None
    notes: str | None = None
    shift: MilkingShift | None = None
    milking_location: str | None = None


class ProductionRecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    animal_id: UUID
    recorded_at: datetime
    date: date
    category: ProductionCategory
    quantity: float
    unit: str
    quality: str | None = None
    notes: str | None = None
    shift: MilkingShift | None = None
    milking_location: str | None = None
    created_at: datetime
    updated_at: datetime


class ProductionRecordListResponse(BaseModel):
    items: list[ProductionRecordResponse]
    total: int


class AnimalTotalResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    animal_id: UUID
    tag: str
    name: str
    total: float
    count: int


class ProductionTotalsResponse(BaseModel):
    category: ProductionCategory | None = None
    unit: str | None = None
    items: list[AnimalTotalResponse]
    subtotal: float
