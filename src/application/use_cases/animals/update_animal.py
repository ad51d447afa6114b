from __future__ import annotations

from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.animals.create_animal import validate_measures
from src.domain.models.animal import Animal
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType, Gender
from src.domain.value_objects.role import Role

UPDATABLE_FIELDS = (
    "tag",
    "name",
    "type",
    "breed",
    "birth_date",
    "gender",
    "status",
    "weight",
    "purchase_date",
    "purchase_price",
    "notes",
    "image_url",
)
_REQUIRED = {"tag", "type", "breed", "birth_date", "gender", "status", "weight"}
_ENUMS = {"type": AnimalType, "gender": Gender, "status": AnimalStatus}


def ensure_can_update(role: Role) -> None:
    if not role.can_update():
        raise PermissionDenied("Role not allowed to update animals")


def _clean(changes: dict[str, Any]) -> dict[str, Any]:
    unknown = set(changes) - set(UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError("Unknown animal fields", details={"fields": sorted(unknown)})
    data = dict(changes)
    for name in _REQUIRED & data.keys():
        if data[name] is None:
            raise ValidationError(f"{name} cannot be empty")
    for name, enum in _ENUMS.items():
        if name in data:
            try:
                data[name] = enum(data[name]).value
            except ValueError as exc:
                raise ValidationError(str(exc)) from exc
    if "tag" in data:
        data["tag"] = str(data["tag"]).strip()
        if not data["tag"]:
            raise ValidationError("tag cannot be empty")
    validate_measures(data.get("weight"), data.get("purchase_price"))
    return data


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    animal_id: UUID,
    changes: dict[str, Any],
) -> Animal:
    ensure_can_update(role)
    data = _clean(changes)
    existing = await uow.animals.get(farm_id, animal_id)
    if not existing:
        raise NotFound("Animal not found")
    if not data:
        return existing
    if "tag" in data and data["tag"] != existing.tag:
        clash = await uow.animals.get_by_tag(farm_id, data["tag"])
        if clash and clash.id != animal_id:
            raise ConflictError("Animal tag already exists for farm", details={"tag": data["tag"]})
    updated = await uow.animals.update(farm_id, animal_id, data)
    if not updated:
        raise NotFound("Animal not found")
    await uow.commit()
    return updated
