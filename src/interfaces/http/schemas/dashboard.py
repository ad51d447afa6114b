from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict

from src.interfaces.http.schemas.health_records import HealthRecordResponse


class MilkRollupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    today: float
    this_week: float
    this_month: float
    this_year: float


class MeatRollupResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    this_month: float
    this_year: float


class DashboardResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    as_of: date
    total_animals: int
    by_type: dict[str, int]
    by_status: dict[str, int]
    milk: MilkRollupResponse
    meat: MeatRollupResponse
    health_by_category: dict[str, int]
    recent_health: list[HealthRecordResponse]
