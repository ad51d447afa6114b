from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.genealogy import Genealogy


class GenealogyRepository(Protocol):
    async def get_for_animal(self, farm_id: UUID, animal_id: UUID) -> Genealogy | None: ...

    async def list(self, farm_id: UUID) -> list[Genealogy]: ...

    async def upsert(self, genealogy: Genealogy) -> Genealogy: ...

    async def delete_for_animal(self, farm_id: UUID, animal_id: UUID) -> bool: ...
