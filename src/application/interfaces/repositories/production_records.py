from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from src.domain.models.production_record import ProductionRecord


class ProductionRecordsRepository(Protocol):
    async def add(self, record: ProductionRecord) -> ProductionRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> ProductionRecord | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        category: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ProductionRecord]: ...

    async def update(
        self, farm_id: UUID, record_id: UUID, data: dict
    ) -> ProductionRecord | None: ...

    async def delete(self, farm_id: UUID, record_id: UUID) -> bool: ...

    async def delete_by_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...
