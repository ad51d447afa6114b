from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any
from uuid import UUID

from src.application.errors import ConflictError, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.models.genealogy import Genealogy
from src.domain.services.pedigree import migrate_legacy_parents
from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class CreateAnimalInput:
    tag: str
    type: str
    breed: str
    birth_date: date
    gender: str
    status: str = AnimalStatus.HEALTHY.value
    weight: float = 0.0
    name: str | None = None
    purchase_date: date | None = None
    purchase_price: float | None = None
    notes: str | None = None
    image_url: str | None = None
    # Legacy pedigree formats, migrated into Genealogy
    parent_male_id: UUID | None = None
    parent_female_id: UUID | None = None
    parent_info: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class CreateAnimalResult:
    animal: Animal
    genealogy: Genealogy | None = None


def ensure_can_create(role: Role) -> None:
    if not role.can_create():
        raise PermissionDenied("Role not allowed to create animals")


def validate_measures(weight: float | None, purchase_price: float | None) -> None:
    if weight is not None and weight < 0:
        raise ValidationError("weight must be non-negative")
    if purchase_price is not None and purchase_price < 0:
        raise ValidationError("purchase_price must be non-negative")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    payload: CreateAnimalInput,
    *,
    actor: str | None = None,
) -> CreateAnimalResult:
    ensure_can_create(role)
    if not payload.tag or not payload.tag.strip():
        raise ValidationError("tag is required")
    validate_measures(payload.weight, payload.purchase_price)
    try:
        animal = Animal.create(
            farm_id=farm_id,
            tag=payload.tag,
            type=payload.type,
            breed=payload.breed,
            birth_date=payload.birth_date,
            gender=payload.gender,
            status=payload.status,
            weight=payload.weight,
            name=payload.name,
            purchase_date=payload.purchase_date,
            purchase_price=payload.purchase_price,
            notes=payload.notes,
            image_url=payload.image_url,
        )
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc
    if await uow.animals.get_by_tag(farm_id, animal.tag):
        raise ConflictError("Animal tag already exists for farm", details={"tag": animal.tag})

    parents: dict = {}
    if payload.parent_male_id or payload.parent_female_id or payload.parent_info:
        herd = await uow.animals.list(farm_id)
        parents = migrate_legacy_parents(
            herd,
            parent_male_id=payload.parent_male_id,
            parent_female_id=payload.parent_female_id,
            parent_info=payload.parent_info,
        )

    created = await uow.animals.add(animal)
    genealogy = None
    if any(parents.values()):
        genealogy = await uow.genealogy.upsert(
            Genealogy.create(farm_id, created.id, updated_by=actor, **parents)
        )
    await uow.commit()
    return CreateAnimalResult(animal=created, genealogy=genealogy)
