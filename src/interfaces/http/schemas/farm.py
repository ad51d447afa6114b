from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.models.farm import AreaUnit


class AnimalCountResponse(BaseModel):
    dairy: int
    beef: int
    total: int


class FarmResponse(BaseModel):
    id: UUID
    name: str
    location: str
    size: float
    units: AreaUnit
    animal_count: AnimalCountResponse
    created_at: datetime
    updated_at: datetime


class FarmUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    location: str | None = None
    size: float | None = Field(default=None, ge=0)
    units: AreaUnit | None = None
