"""Pure aggregation of farm collections into the dashboard snapshot.

Every call rescans the collections it is given; nothing is cached between
calls, so the snapshot always equals a recomputation from current data.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date, timedelta
from enum import IntEnum
from uuid import UUID

from src.domain.models.animal import Animal
from src.domain.models.dashboard import (
    AnimalProductionTotal,
    DashboardSnapshot,
    MeatRollup,
    MilkRollup,
)
from src.domain.models.farm import AnimalCount
from src.domain.models.health_record import HealthCategory, HealthRecord
from src.domain.models.production_record import ProductionCategory, ProductionRecord
from src.domain.services.date_normalizer import normalize
from src.domain.services.dose_status import UNKNOWN_ANIMAL
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType


class WeekStart(IntEnum):
    # Values follow date.weekday()
    MONDAY = 0
    SUNDAY = 6

    @classmethod
    def parse(cls, value: str | int | WeekStart) -> WeekStart:
        if isinstance(value, str):
            return cls[value.strip().upper()]
        return cls(value)


@dataclass(slots=True, frozen=True)
class ReportingWindows:
    today: date
    week_start: date
    month_start: date
    year_start: date


def week_start_for(as_of: date, week_start: WeekStart = WeekStart.SUNDAY) -> date:
    """Most recent `week_start` day at or before `as_of`."""
    offset = (as_of.weekday() - int(week_start)) % 7
    return as_of - timedelta(days=offset)


def reporting_windows(as_of: date, week_start: WeekStart = WeekStart.SUNDAY) -> ReportingWindows:
    return ReportingWindows(
        today=as_of,
        week_start=week_start_for(as_of, week_start),
        month_start=as_of.replace(day=1),
        year_start=as_of.replace(month=1, day=1),
    )


def count_animals_by_type(animals: Iterable[Animal]) -> AnimalCount:
    dairy = beef = 0
    for animal in animals:
        if animal.type == AnimalType.DAIRY.value:
            dairy += 1
        elif animal.type == AnimalType.BEEF.value:
            beef += 1
    return AnimalCount(dairy=dairy, beef=beef)


def _sum_windows(
    records: Iterable[ProductionRecord], category: str, windows: ReportingWindows
) -> tuple[float, float, float, float]:
    today = week = month = year = 0.0
    for record in records:
        if record.category != category:
            continue
        day = normalize(record.date, today=windows.today)
        if day > windows.today or day < windows.year_start:
            continue
        year += record.quantity
        if day >= windows.month_start:
            month += record.quantity
        if day >= windows.week_start:
            week += record.quantity
        if day == windows.today:
            today += record.quantity
    return today, week, month, year


def recent_health_records(records: Sequence[HealthRecord], limit: int = 5) -> list[HealthRecord]:
    """Most recently dated records first; equal dates keep collection order."""
    ordered = sorted(records, key=lambda r: normalize(r.date), reverse=True)
    return ordered[: max(0, limit)]


def compute_dashboard(
    animals: Sequence[Animal],
    health_records: Sequence[HealthRecord],
    production_records: Sequence[ProductionRecord],
    as_of: date,
    *,
    week_start: WeekStart = WeekStart.SUNDAY,
    recent_limit: int = 5,
) -> DashboardSnapshot:
    as_of = normalize(as_of)
    windows = reporting_windows(as_of, week_start)

    by_type = {t.value: 0 for t in AnimalType}
    by_status = {s.value: 0 for s in AnimalStatus}
    for animal in animals:
        by_type[animal.type] = by_type.get(animal.type, 0) + 1
        by_status[animal.status] = by_status.get(animal.status, 0) + 1

    milk_today, milk_week, milk_month, milk_year = _sum_windows(
        production_records, ProductionCategory.MILK.value, windows
    )
    _, _, meat_month, meat_year = _sum_windows(
        production_records, ProductionCategory.MEAT.value, windows
    )

    health_by_category = {c.value: 0 for c in HealthCategory}
    for record in health_records:
        health_by_category[record.category] = health_by_category.get(record.category, 0) + 1

    return DashboardSnapshot(
        as_of=as_of,
        total_animals=len(animals),
        by_type=by_type,
        by_status=by_status,
        milk=MilkRollup(
            today=milk_today, this_week=milk_week, this_month=milk_month, this_year=milk_year
        ),
        meat=MeatRollup(this_month=meat_month, this_year=meat_year),
        health_by_category=health_by_category,
        recent_health=recent_health_records(health_records, recent_limit),
    )


def production_totals_by_animal(
    records: Iterable[ProductionRecord],
    animals: Mapping[UUID, Animal],
    category: str | None = None,
) -> list[AnimalProductionTotal]:
    """Per-animal quantity totals, largest first."""
    totals: dict[UUID, list[float]] = {}
    for record in records:
        if category and record.category != category:
            continue
        bucket = totals.setdefault(record.animal_id, [0.0, 0])
        bucket[0] += record.quantity
        bucket[1] += 1
    rows = []
    for animal_id, (total, count) in totals.items():
        animal = animals.get(animal_id)
        rows.append(
            AnimalProductionTotal(
                animal_id=animal_id,
                tag=animal.tag if animal else UNKNOWN_ANIMAL,
                name=(animal.name or "") if animal else "",
                total=total,
                count=int(count),
            )
        )
    return sorted(rows, key=lambda row: row.total, reverse=True)


def production_subtotal(records: Iterable[ProductionRecord]) -> float:
    return sum(record.quantity for record in records)
