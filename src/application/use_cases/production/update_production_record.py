from __future__ import annotations

from datetime import timezone, tzinfo
from typing import Any
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_record import (
    MilkingShift,
    ProductionCategory,
    ProductionRecord,
    local_date,
)
from src.domain.value_objects.role import Role

UPDATABLE_FIELDS = (
    "animal_id",
    "recorded_at",
    "category",
    "quantity",
    "quality",
    "notes",
    "shift",
    "milking_location",
)
_REQUIRED = {"animal_id", "recorded_at", "category", "quantity"}


def ensure_can_update(role: Role) -> None:
    if not role.can_update():
        raise PermissionDenied("Role not allowed to update production records")


def _clean(
    changes: dict[str, Any], existing: ProductionRecord, tz: tzinfo | None
) -> dict[str, Any]:
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown production fields", details={"fields": sorted(unknown)})
    data = dict(changes)
    for name in _REQUIRED & data.keys():
        if data[name] is None:
            raise ValidationError(f"{name} cannot be empty")
    if "quantity" in data:
        if data["quantity"] < 0:
            raise ValidationError("quantity must be non-negative")
        data["quantity"] = float(data["quantity"])
    if "recorded_at" in data:
        recorded_at = data["recorded_at"]
        if recorded_at.tzinfo is None:
            recorded_at = recorded_at.replace(tzinfo=timezone.utc)
        data["recorded_at"] = recorded_at
        data["date"] = local_date(recorded_at, tz)
    try:
        category = ProductionCategory(data.get("category", existing.category)).value
        if "category" in data:
            data["category"] = category
        if category == ProductionCategory.MILK.value:
            if "shift" in data or existing.shift is None:
                data["shift"] = MilkingShift(data.get("shift") or MilkingShift.MORNING.value).value
        else:
            # shift and location only apply to milk
            data["shift"] = None
            data["milking_location"] = None
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    return data


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    record_id: UUID,
    changes: dict[str, Any],
    *,
    tz: tzinfo | None = None,
) -> ProductionRecord:
    ensure_can_update(role)
    existing = await uow.production_records.get(farm_id, record_id)
    if not existing:
        raise NotFound("Production record not found")
    if not changes:
        return existing
    data = _clean(changes, existing, tz)
    if "animal_id" in data and data["animal_id"] != existing.animal_id:
        if not await uow.animals.get(farm_id, data["animal_id"]):
            raise NotFound("Animal not found")
    updated = await uow.production_records.update(farm_id, record_id, data)
    if not updated:
        raise NotFound("Production record not found")
    await uow.commit()
    return updated
