"""Classify recurring health doses by how close their next application is."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, timedelta
from enum import Enum
from typing import Any
from uuid import UUID

from src.domain.services.date_normalizer import normalize

logger = logging.getLogger(__name__)

UNKNOWN_ANIMAL = "Unknown"
DEFAULT_MEDICINE = "treatment"


class DoseStatus(str, Enum):
    OVERDUE = "overdue"
    DUE_TODAY = "due_today"
    DUE_SOON = "due_soon"
    OK = "ok"


# Lower sorts first
SEVERITY: dict[DoseStatus, int] = {
    DoseStatus.OVERDUE: 0,
    DoseStatus.DUE_TODAY: 1,
    DoseStatus.DUE_SOON: 2,
    DoseStatus.OK: 3,
}


@dataclass(slots=True, frozen=True)
class DoseClassification:
    status: DoseStatus
    days_remaining: int | None
    progress_percent: int


@dataclass(slots=True, frozen=True)
class UpcomingDose:
    record: Any
    classification: DoseClassification


@dataclass(slots=True, frozen=True)
class DoseAlert:
    record_id: UUID
    animal_id: UUID
    animal_tag: str
    status: DoseStatus
    days_remaining: int
    message: str


def _coerce_days(value: Any) -> int:
    if value is None or isinstance(value, bool):
        return 0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if math.isnan(number) or math.isinf(number) or number < 0:
        return 0
    return int(number)


def progress_percent(days_remaining: int, advance_days: int) -> int:
    """Share of the reminder window already elapsed, rounded half up and clamped."""
    if advance_days <= 0:
        return 100
    used = max(0, advance_days - max(0, days_remaining))
    return max(0, min(100, math.floor(used / advance_days * 100 + 0.5)))


def classify_dose(
    next_dose_date: Any, advance_days: Any = None, *, today: date
) -> DoseClassification:
    if next_dose_date is None or next_dose_date == "":
        return DoseClassification(DoseStatus.OK, None, 100)
    advance = _coerce_days(advance_days)
    days_left = (normalize(next_dose_date, today=today) - today).days
    if days_left < 0:
        status = DoseStatus.OVERDUE
    elif days_left == 0:
        status = DoseStatus.DUE_TODAY
    elif days_left <= advance:
        status = DoseStatus.DUE_SOON
    else:
        status = DoseStatus.OK
    return DoseClassification(status, days_left, progress_percent(days_left, advance))


def classify(record: Any, *, today: date) -> DoseClassification:
    """Classify a health record (or any object/mapping with the dose fields)."""
    return classify_dose(
        _field(record, "next_dose_date"),
        _field(record, "reminder_advance_days"),
        today=today,
    )


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _sort_key(item: UpcomingDose) -> tuple[int, int]:
    days = item.classification.days_remaining
    return SEVERITY[item.classification.status], 999 if days is None else days


def sort_upcoming(records: Iterable[Any], *, today: date) -> list[UpcomingDose]:
    items = [UpcomingDose(record, classify(record, today=today)) for record in records]
    return sorted(items, key=_sort_key)


def upcoming_doses(records: Iterable[Any], *, today: date, limit: int = 8) -> list[UpcomingDose]:
    candidates = [
        r
        for r in records
        if _field(r, "next_dose_date") and _field(r, "reminder_enabled") is not False
    ]
    return sort_upcoming(candidates, today=today)[: max(0, limit)]


def collect_dose_alerts(
    records: Iterable[Any], animals: Mapping[UUID, Any], *, today: date
) -> list[DoseAlert]:
    """Reminder messages for doses due today or already overdue."""
    records = list(records)
    alerts: list[DoseAlert] = []
    for item in upcoming_doses(records, today=today, limit=len(records)):
        status = item.classification.status
        if status not in (DoseStatus.OVERDUE, DoseStatus.DUE_TODAY):
            continue
        record = item.record
        animal = animals.get(_field(record, "animal_id"))
        tag = getattr(animal, "tag", None) or UNKNOWN_ANIMAL
        medicine = _field(record, "medicine") or DEFAULT_MEDICINE
        days = item.classification.days_remaining or 0
        if status is DoseStatus.DUE_TODAY:
            message = f"Apply {medicine} to {tag} today"
        else:
            message = f"Apply {medicine} to {tag} (overdue by {-days} days)"
        alerts.append(
            DoseAlert(
                record_id=_field(record, "id"),
                animal_id=_field(record, "animal_id"),
                animal_tag=tag,
                status=status,
                days_remaining=days,
                message=message,
            )
        )
    return alerts


def rollover_dose(
    next_dose_date: date | None, repeat_every_days: int | None
) -> date | None:
    """Next due date after a dose is applied; None ends the schedule."""
    repeat = _coerce_days(repeat_every_days)
    if next_dose_date is None or repeat <= 0:
        return None
    return next_dose_date + timedelta(days=repeat)
