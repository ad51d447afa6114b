from __future__ import annotations

from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.farm import Farm


async def execute(uow: UnitOfWork, farm_id: UUID) -> Farm:
    farm = await uow.farms.get(farm_id)
    if not farm:
        raise NotFound("Farm not found")
    return farm
