from __future__ import annotations

from typing import Protocol
from uuid import UUID

from src.domain.models.health_record import HealthRecord


class HealthRecordsRepository(Protocol):
    async def add(self, record: HealthRecord) -> HealthRecord: ...

    async def get(self, farm_id: UUID, record_id: UUID) -> HealthRecord | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        category: str | None = None,
    ) -> list[HealthRecord]: ...

    async def update(self, farm_id: UUID, record_id: UUID, data: dict) -> HealthRecord | None: ...

    async def delete(self, farm_id: UUID, record_id: UUID) -> bool: ...

    async def delete_by_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...
