from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from uuid import UUID

from src.domain.models.health_record import HealthRecord


@dataclass(slots=True, frozen=True)
class MilkRollup:
    today: float = 0.0
    this_week: float = 0.0
    this_month: float = 0.0
    this_year: float = 0.0


@dataclass(slots=True, frozen=True)
class MeatRollup:
    this_month: float = 0.0
    this_year: float = 0.0


@dataclass(slots=True, frozen=True)
class DashboardSnapshot:
    as_of: date
    total_animals: int
    by_type: dict[str, int]
    by_status: dict[str, int]
    milk: MilkRollup
    meat: MeatRollup
    health_by_category: dict[str, int]
    recent_health: list[HealthRecord] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class AnimalProductionTotal:
    animal_id: UUID
    tag: str
    name: str
    total: float
    count: int
