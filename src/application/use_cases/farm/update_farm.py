from __future__ import annotations

from typing import Any
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.farm import AreaUnit, Farm
from src.domain.value_objects.role import Role

UPDATABLE_FIELDS = ("name", "location", "size", "units")


def ensure_can_manage(role: Role) -> None:
    if not role.can_manage_farm():
        raise PermissionDenied("Role not allowed to edit farm details")


async def execute(
    uow: UnitOfWork, farm_id: UUID, role: Role, changes: dict[str, Any]
) -> Farm:
    ensure_can_manage(role)
    data = {k: v for k, v in changes.items() if k in UPDATABLE_FIELDS}
    if "name" in data and not (data["name"] or "").strip():
        raise ValidationError("name cannot be empty")
    if "size" in data and (data["size"] is None or data["size"] < 0):
        raise ValidationError("size must be non-negative")
    if "units" in data:
        try:
            data["units"] = AreaUnit(data["units"]).value
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc
    if not data:
        return await _get(uow, farm_id)
    updated = await uow.farms.update(farm_id, data)
    if not updated:
        raise NotFound("Farm not found")
    await uow.commit()
    return updated


async def _get(uow: UnitOfWork, farm_id: UUID) -> Farm:
    farm = await uow.farms.get(farm_id)
    if not farm:
        raise NotFound("Farm not found")
    return farm
