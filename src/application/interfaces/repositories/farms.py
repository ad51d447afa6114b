from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.farm import Farm


class FarmRepository(Protocol):
    async def add(self, farm: Farm) -> Farm: ...

    async def get(self, farm_id: UUID) -> Farm | None: ...

    async def update(self, farm_id: UUID, data: dict) -> Farm | None: ...
