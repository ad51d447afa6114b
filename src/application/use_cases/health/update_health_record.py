from __future__ import annotations

from typing import Any
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.health.create_health_record import validate_amounts
from src.domain.models.health_record import HealthCategory, HealthRecord
from src.domain.value_objects.role import Role

UPDATABLE_FIELDS = (
    "animal_id",
    "date",
    "category",
    "description",
    "medicine",
    "dosage",
    "veterinarian",
    "cost",
    "notes",
    "next_dose_date",
    "repeat_every_days",
    "reminder_advance_days",
    "reminder_enabled",
)
_REQUIRED = {"animal_id", "date", "category", "description", "reminder_enabled"}


def ensure_can_update(role: Role) -> None:
    if not role.can_update():
        raise PermissionDenied("Role not allowed to update health records")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    record_id: UUID,
    changes: dict[str, Any],
) -> HealthRecord:
    """Apply a partial update to a health record."""
    ensure_can_update(role)
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown health record fields", details={"fields": sorted(unknown)})
    data = dict(changes)
    for name in _REQUIRED & data.keys():
        if data[name] is None:
            raise ValidationError(f"{name} cannot be empty")
    if "category" in data:
        try:
            data["category"] = HealthCategory(data["category"]).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    if "description" in data:
        data["description"] = data["description"].strip()
        if not data["description"]:
            raise ValidationError("description cannot be empty")
    validate_amounts(
        data.get("cost"), data.get("repeat_every_days"), data.get("reminder_advance_days")
    )

    existing = await uow.health_records.get(farm_id, record_id)
    if not existing:
        raise NotFound("Health record not found")
    if "animal_id" in data and data["animal_id"] != existing.animal_id:
        if not await uow.animals.get(farm_id, data["animal_id"]):
            raise NotFound("Animal not found")
    if not data:
        return existing
    updated = await uow.health_records.update(farm_id, record_id, data)
    if not updated:
        raise NotFound("Health record not found")
    await uow.commit()
    return updated
