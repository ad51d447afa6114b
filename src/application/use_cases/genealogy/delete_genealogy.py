from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.genealogy.save_genealogy import ensure_can_edit
from src.domain.value_objects.role import Role


async def execute(uow: UnitOfWork, farm_id: UUID, role: Role, animal_id: UUID) -> None:
    ensure_can_edit(role)
    deleted = await uow.genealogy.delete_for_animal(farm_id, animal_id)
    if not deleted:
        raise NotFound("Genealogy not found")
    await uow.commit()
