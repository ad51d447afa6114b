from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.animal import Animal
from src.domain.models.genealogy import Genealogy
from src.domain.models.health_record import HealthRecord
from src.domain.models.production_record import ProductionRecord


@dataclass(slots=True)
class FarmData:
    animals: list[Animal]
    health_records: list[HealthRecord]
    production_records: list[ProductionRecord]
    genealogy: list[Genealogy]


async def execute(uow: UnitOfWork, farm_id: UUID) -> FarmData:
    """Read every collection of a farm in one unit of work."""
    return FarmData(
        animals=await uow.animals.list(farm_id),
        health_records=await uow.health_records.list(farm_id),
        production_records=await uow.production_records.list(farm_id),
        genealogy=await uow.genealogy.list(farm_id),
    )
