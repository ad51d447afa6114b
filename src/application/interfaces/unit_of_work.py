from __future__ import annotations

from typing import Protocol

from src.application.interfaces.repositories.animals import AnimalRepository
from src.application.interfaces.repositories.farms import FarmRepository
from src.application.interfaces.repositories.genealogy import GenealogyRepository
from src.application.interfaces.repositories.health_records import HealthRecordsRepository
from src.application.interfaces.repositories.production_records import (
    ProductionRecordsRepository,
)
from src.application.interfaces.repositories.users import UserRepository


class UnitOfWork(Protocol):
    animals: AnimalRepository
    health_records: HealthRecordsRepository
    production_records: ProductionRecordsRepository
    genealogy: GenealogyRepository
    farms: FarmRepository
    users: UserRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
