from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType, Gender
from src.interfaces.http.schemas.common import OptionalWireDate, WireDate


class AnimalBase(BaseModel):
    tag: str = Field(min_length=1)
    type: AnimalType
    breed: str
    birth_date: WireDate
    gender: Gender
    status: AnimalStatus = AnimalStatus.HEALTHY
    weight: float = Field(default=0.0, ge=0)
    name: str | None = None
    purchase_date: OptionalWireDate = None
    purchase_price: float | None = Field(default=None, ge=0)
    notes: str | None = None
    image_url: str | None = None


class AnimalCreate(AnimalBase):
    # Older clients send pedigree inline; migrated into genealogy on create
    parent_male_id: UUID | None = None
    parent_female_id: UUID | None = None
    parent_info: dict[str, Any] = Field(default_factory=dict)


class AnimalUpdate(BaseModel):
    tag: str | None = Field(default=None, min_length=1)
    type: AnimalType | None = None
    breed: str | None = None
    birth_date: OptionalWireDate = None
    gender: Gender | None = None
    status: AnimalStatus | None = None
    weight: float | None = Field(default=None, ge=0)
    name: str | None = None
    purchase_date: OptionalWireDate = None
    purchase_price: float | None = Field(default=None, ge=0)
    notes: str | None = None
    image_url: str | None = None


class AnimalResponse(AnimalBase):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    farm_id: UUID
    created_at: datetime
    updated_at: datetime


class AnimalListResponse(BaseModel):
    items: list[AnimalResponse]
    total: int
