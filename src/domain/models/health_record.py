from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class HealthCategory(str, Enum):
    VACCINATION = "vaccination"
    TREATMENT = "treatment"
    CHECKUP = "checkup"


@dataclass(slots=True)
class HealthRecord:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    date: date
    category: str  # HealthCategory
    description: str

    medicine: str | None = None
    dosage: str | None = None
    veterinarian: str | None = None
    cost: float | None = None
    notes: str | None = None

    # Recurring dose reminder fields
    next_dose_date: date | None = None
    repeat_every_days: int | None = None
    reminder_advance_days: int | None = None
    reminder_enabled: bool = True

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        date: date,
        category: str,
        description: str,
        medicine: str | None = None,
        dosage: str | None = None,
        veterinarian: str | None = None,
        cost: float | None = None,
        notes: str | None = None,
        next_dose_date: date | None = None,
        repeat_every_days: int | None = None,
        reminder_advance_days: int | None = None,
        reminder_enabled: bool = True,
    ) -> HealthRecord:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            date=date,
            category=HealthCategory(category).value,
            description=description,
            medicine=medicine,
            dosage=dosage,
            veterinarian=veterinarian,
            cost=cost,
            notes=notes,
            next_dose_date=next_dose_date,
            repeat_every_days=repeat_every_days,
            reminder_advance_days=reminder_advance_days,
            reminder_enabled=reminder_enabled,
            created_at=now,
            updated_at=now,
        )
