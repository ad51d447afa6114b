from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.genealogy import KINSHIP_FIELDS, Genealogy
from src.domain.services.pedigree import fill_grandparents
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class SaveGenealogyInput:
    father_id: UUID | None = None
    mother_id: UUID | None = None
    paternal_grandfather_id: UUID | None = None
    paternal_grandmother_id: UUID | None = None
    maternal_grandfather_id: UUID | None = None
    maternal_grandmother_id: UUID | None = None
    fill_grandparents: bool = False


def ensure_can_edit(role: Role) -> None:
    if not role.can_update():
        raise PermissionDenied("Role not allowed to edit genealogy")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    animal_id: UUID,
    payload: SaveGenealogyInput,
    *,
    actor: str | None = None,
) -> Genealogy:
    """Create or replace the pedigree of an animal."""
    ensure_can_edit(role)
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    parents = {attr: getattr(payload, attr) for attr in KINSHIP_FIELDS.values()}
    if animal_id in parents.values():
        raise ValidationError("An animal cannot be its own ancestor")

    if payload.fill_grandparents:
        pedigrees = {}
        for parent_id in (parents["father_id"], parents["mother_id"]):
            if parent_id:
                found = await uow.genealogy.get_for_animal(farm_id, parent_id)
                if found:
                    pedigrees[parent_id] = found
        parents = fill_grandparents(parents, pedigrees)

    missing = []
    for attr, parent_id in parents.items():
        if parent_id and not await uow.animals.get(farm_id, parent_id):
            missing.append(attr)
    if missing:
        raise ValidationError("Unknown parent animals", details={"fields": missing})

    existing = await uow.genealogy.get_for_animal(farm_id, animal_id)
    if existing:
        for attr, parent_id in parents.items():
            setattr(existing, attr, parent_id)
        existing.updated_by = actor
        existing.updated_at = datetime.now(timezone.utc)
        genealogy = existing
    else:
        genealogy = Genealogy.create(farm_id, animal_id, updated_by=actor, **parents)
    saved = await uow.genealogy.upsert(genealogy)
    await uow.commit()
    return saved
