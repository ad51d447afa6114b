from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.production_record import ProductionRecord
from src.domain.value_objects.role import Role


@dataclass
class CreateProductionRecordInput:
    animal_id: UUID
    recorded_at: datetime
    category: str
    quantity: float
    quality: str | None = None
    notes: str | None = None
    shift: str | None = None
    milking_location: str | None = None


def ensure_can_record(role: Role) -> None:
    if not role.can_record():
        raise PermissionDenied("Role not allowed to record production")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    payload: CreateProductionRecordInput,
    *,
    tz: tzinfo | None = None,
) -> ProductionRecord:
    ensure_can_record(role)
    if payload.quantity is None or payload.quantity < 0:
        raise ValidationError("quantity must be non-negative")
    if not await uow.animals.get(farm_id, payload.animal_id):
        raise NotFound("Animal not found")
    try:
        record = ProductionRecord.create(
            farm_id=farm_id,
            animal_id=payload.animal_id,
            recorded_at=payload.recorded_at,
            category=payload.category,
            quantity=payload.quantity,
            quality=payload.quality,
            notes=payload.notes,
            shift=payload.shift,
            milking_location=payload.milking_location,
            tz=tz,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    created = await uow.production_records.add(record)
    await uow.commit()
    return created
