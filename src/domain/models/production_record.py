from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from enum import Enum
from uuid import UUID, uuid4

from src.domain.services.date_normalizer import normalize


class ProductionCategory(str, Enum):
    MILK = "milk"  # liters
    MEAT = "meat"  # kilograms


class MilkingShift(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


UNITS = {ProductionCategory.MILK.value: "L", ProductionCategory.MEAT.value: "kg"}


def local_date(recorded_at: datetime, tz: tzinfo | None = None) -> date:
    """Calendar day of `recorded_at` in `tz`, or in its own offset when `tz` is None."""
    if tz is not None:
        recorded_at = recorded_at.astimezone(tz)
    return normalize(recorded_at)


@dataclass(slots=True)
class ProductionRecord:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    recorded_at: datetime
    date: date
    category: str  # ProductionCategory
    quantity: float
    quality: str | None = None
    notes: str | None = None

    # Milk-only fields
    shift: str | None = None  # MilkingShift
    milking_location: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        *,
        farm_id: UUID,
        animal_id: UUID,
        recorded_at: datetime,
        category: str,
        quantity: float,
        quality: str | None = None,
        notes: str | None = None,
        shift: str | None = None,
        milking_location: str | None = None,
        tz: tzinfo | None = None,
    ) -> ProductionRecord:
        if quantity < 0:
            raise ValueError("quantity must be non-negative")
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        category = ProductionCategory(category).value
        if category == ProductionCategory.MILK.value:
            shift = MilkingShift(shift or MilkingShift.MORNING.value).value
        else:
            shift = None
            milking_location = None
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            recorded_at=recorded_at,
            date=local_date(recorded_at, tz),
            category=category,
            quantity=float(quantity),
            quality=quality,
            notes=notes,
            shift=shift,
            milking_location=milking_location,
            created_at=now,
            updated_at=now,
        )

    @property
    def unit(self) -> str:
        return UNITS.get(self.category, "")
