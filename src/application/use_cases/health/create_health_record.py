from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.health_record import HealthRecord
from src.domain.value_objects.role import Role


@dataclass
class CreateHealthRecordInput:
    animal_id: UUID
    date: date
    category: str
    description: str
    medicine: str | None = None
    dosage: str | None = None
    veterinarian: str | None = None
    cost: float | None = None
    notes: str | None = None
    next_dose_date: date | None = None
    repeat_every_days: int | None = None
    reminder_advance_days: int | None = None
    reminder_enabled: bool = True


def ensure_can_record(role: Role) -> None:
    if not role.can_record():
        raise PermissionDenied("Role not allowed to record health events")


def validate_amounts(
    cost: float | None, repeat_every_days: int | None, reminder_advance_days: int | None
) -> None:
    for name, value in (
        ("cost", cost),
        ("repeat_every_days", repeat_every_days),
        ("reminder_advance_days", reminder_advance_days),
    ):
        if value is not None and value < 0:
            raise ValidationError(f"{name} must be non-negative")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    payload: CreateHealthRecordInput,
) -> HealthRecord:
    """Create a health record for an existing animal."""
    ensure_can_record(role)
    if not payload.description or not payload.description.strip():
        raise ValidationError("description is required")
    validate_amounts(payload.cost, payload.repeat_every_days, payload.reminder_advance_days)
    if not await uow.animals.get(farm_id, payload.animal_id):
        raise NotFound("Animal not found")
    try:
        record = HealthRecord.create(
            farm_id=farm_id,
            animal_id=payload.animal_id,
            date=payload.date,
            category=payload.category,
            description=payload.description.strip(),
            medicine=payload.medicine,
            dosage=payload.dosage,
            veterinarian=payload.veterinarian,
            cost=payload.cost,
            notes=payload.notes,
            next_dose_date=payload.next_dose_date,
            repeat_every_days=payload.repeat_every_days,
            reminder_advance_days=payload.reminder_advance_days,
            reminder_enabled=payload.reminder_enabled,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    created = await uow.health_records.add(record)
    await uow.commit()
    return created
