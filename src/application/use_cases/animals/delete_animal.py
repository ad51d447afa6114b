from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.errors import NotFound, PermissionDenied
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class DeleteAnimalResult:
    health_records_deleted: int
    production_records_deleted: int
    genealogy_deleted: bool


def ensure_can_delete(role: Role) -> None:
    if not role.can_delete():
        raise PermissionDenied("Role not allowed to delete animals")


async def execute(
    uow: UnitOfWork, farm_id: UUID, role: Role, animal_id: UUID
) -> DeleteAnimalResult:
    """Delete an animal together with its health, production and genealogy entries."""
    ensure_can_delete(role)
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    health = await uow.health_records.delete_by_animal(farm_id, animal_id)
    production = await uow.production_records.delete_by_animal(farm_id, animal_id)
    genealogy = await uow.genealogy.delete_for_animal(farm_id, animal_id)
    await uow.animals.delete(farm_id, animal_id)
    await uow.commit()
    return DeleteAnimalResult(
        health_records_deleted=health,
        production_records_deleted=production,
        genealogy_deleted=genealogy,
    )
