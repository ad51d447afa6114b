from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None: ...

    async def get_by_tag(self, farm_id: UUID, tag: str) -> Animal | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> list[Animal]: ...

    async def update(self, farm_id: UUID, animal_id: UUID, data: dict) -> Animal | None: ...

    async def delete(self, farm_id: UUID, animal_id: UUID) -> bool: ...
