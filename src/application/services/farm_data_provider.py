"""In-memory farm collections kept in step with the database.

A provider owns one farm's animals, health records, production records and
pedigrees. Every mutation goes through a use case in its own unit of work;
only after the write commits are the local collections updated from the
returned entity and the dashboard recomputed. A failed write leaves local
state untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Any, TypeVar
from uuid import UUID

from src.application.errors import AppError, InfrastructureError, NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.notifications.factory import BuiltNotification, notification_for_alert
from src.application.use_cases.animals import create_animal, delete_animal, update_animal
from src.application.use_cases.farm import get_farm, load_farm_data, update_farm
from src.application.use_cases.genealogy import delete_genealogy, save_genealogy
from src.application.use_cases.health import (
    create_health_record,
    delete_health_record,
    mark_dose_applied,
    update_health_record,
)
from src.application.use_cases.production import (
    create_production_record,
    delete_production_record,
    update_production_record,
)
from src.domain.models.animal import Animal
from src.domain.models.dashboard import AnimalProductionTotal, DashboardSnapshot
from src.domain.models.farm import AnimalCount, Farm
from src.domain.models.genealogy import Genealogy, Kinship
from src.domain.models.health_record import HealthRecord
from src.domain.models.production_record import ProductionRecord
from src.domain.services.dashboard import (
    WeekStart,
    compute_dashboard,
    count_animals_by_type,
    production_subtotal,
    production_totals_by_animal,
)
from src.domain.services.dose_status import UpcomingDose, collect_dose_alerts, upcoming_doses
from src.domain.services.pedigree import PedigreeMember, resolve_pedigree
from src.domain.value_objects.role import Role

logger = logging.getLogger(__name__)

T = TypeVar("T")
UnitOfWorkFactory = Callable[[], UnitOfWork]


@dataclass(slots=True, frozen=True)
class FarmDetails:
    farm: Farm
    animal_count: AnimalCount


@dataclass(slots=True, frozen=True)
class ProductionTotals:
    rows: list[AnimalProductionTotal]
    subtotal: float
    records: list[ProductionRecord]


def _index_add(index: dict[UUID, list[UUID]], key: UUID, record_id: UUID) -> None:
    ids = index.setdefault(key, [])
    if record_id not in ids:
        ids.append(record_id)


def _index_remove(index: dict[UUID, list[UUID]], key: UUID, record_id: UUID) -> None:
    ids = index.get(key)
    if not ids:
        return
    if record_id in ids:
        ids.remove(record_id)
    if not ids:
        del index[key]


class FarmDataProvider:
    def __init__(
        self,
        farm_id: UUID,
        uow_factory: UnitOfWorkFactory,
        *,
        clock: Callable[[], date] = date.today,
        tz: tzinfo | None = None,
        week_start: WeekStart = WeekStart.SUNDAY,
        recent_limit: int = 5,
        upcoming_limit: int = 8,
    ) -> None:
        self.farm_id = farm_id
        self._uow_factory = uow_factory
        self._clock = clock
        self.tz = tz
        self.week_start = week_start
        self.recent_limit = recent_limit
        self.upcoming_limit = upcoming_limit
        self._animals: dict[UUID, Animal] = {}
        self._health: dict[UUID, HealthRecord] = {}
        self._production: dict[UUID, ProductionRecord] = {}
        self._genealogy: dict[UUID, Genealogy] = {}  # keyed by animal_id
        self._health_by_animal: dict[UUID, list[UUID]] = {}
        self._production_by_animal: dict[UUID, list[UUID]] = {}
        self.snapshot: DashboardSnapshot | None = None
        self.alerts: list[BuiltNotification] = []
        self.loaded = False

    # ------------------------------------------------------------------ reads

    @property
    def animals(self) -> list[Animal]:
        return list(self._animals.values())

    @property
    def health_records(self) -> list[HealthRecord]:
        return list(self._health.values())

    @property
    def production_records(self) -> list[ProductionRecord]:
        return list(self._production.values())

    @property
    def genealogies(self) -> list[Genealogy]:
        return list(self._genealogy.values())

    def animals_by_id(self) -> dict[UUID, Animal]:
        return dict(self._animals)

    def get_animal(self, animal_id: UUID) -> Animal:
        animal = self._animals.get(animal_id)
        if animal is None:
            raise NotFound("Animal not found")
        return animal

    def get_health_record(self, record_id: UUID) -> HealthRecord:
        record = self._health.get(record_id)
        if record is None:
            raise NotFound("Health record not found")
        return record

    def get_production_record(self, record_id: UUID) -> ProductionRecord:
        record = self._production.get(record_id)
        if record is None:
            raise NotFound("Production record not found")
        return record

    def health_for_animal(self, animal_id: UUID) -> list[HealthRecord]:
        return [self._health[i] for i in self._health_by_animal.get(animal_id, [])]

    def production_for_animal(self, animal_id: UUID) -> list[ProductionRecord]:
        return [self._production[i] for i in self._production_by_animal.get(animal_id, [])]

    def animal_tag(self, animal_id: UUID) -> str | None:
        animal = self._animals.get(animal_id)
        return animal.tag if animal else None

    def list_animals(
        self, *, type: str | None = None, status: str | None = None, search: str | None = None
    ) -> list[Animal]:
        query = (search or "").strip().lower()
        items = []
        for animal in self._animals.values():
            if type and animal.type != type:
                continue
            if status and animal.status != status:
                continue
            if query and query not in f"{animal.tag} {animal.name or ''}".lower():
                continue
            items.append(animal)
        return items

    def list_health_records(
        self,
        *,
        animal_id: UUID | None = None,
        category: str | None = None,
        search: str | None = None,
    ) -> list[HealthRecord]:
        records = self.health_for_animal(animal_id) if animal_id else self.health_records
        query = (search or "").strip().lower()
        items = []
        for record in records:
            if category and record.category != category:
                continue
            if query:
                haystack = " ".join(
                    filter(
                        None,
                        (
                            record.description,
                            record.medicine,
                            record.veterinarian,
                            self.animal_tag(record.animal_id),
                        ),
                    )
                ).lower()
                if query not in haystack:
                    continue
            items.append(record)
        return items

    def list_production_records(
        self,
        *,
        animal_id: UUID | None = None,
        category: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ProductionRecord]:
        records = self.production_for_animal(animal_id) if animal_id else self.production_records
        return [
            r
            for r in records
            if (not category or r.category == category)
            and (date_from is None or r.date >= date_from)
            and (date_to is None or r.date <= date_to)
        ]

    def dashboard(self, as_of: date | None = None) -> DashboardSnapshot:
        """Current snapshot; recomputed when asked for another day."""
        target = as_of or self._clock()
        if self.snapshot is not None and self.snapshot.as_of == target:
            return self.snapshot
        snapshot = self._compute(target)
        if as_of is None:
            self.snapshot = snapshot
        return snapshot

    def upcoming_doses(
        self, *, today: date | None = None, limit: int | None = None
    ) -> list[UpcomingDose]:
        return upcoming_doses(
            self._health.values(),
            today=today or self._clock(),
            limit=self.upcoming_limit if limit is None else limit,
        )

    def production_totals(
        self,
        *,
        category: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> ProductionTotals:
        records = self.list_production_records(
            animal_id=animal_id, category=category, date_from=date_from, date_to=date_to
        )
        return ProductionTotals(
            rows=production_totals_by_animal(records, self._animals, category),
            subtotal=production_subtotal(records),
            records=records,
        )

    def pedigree(self, animal_id: UUID) -> tuple[Genealogy | None, dict[Kinship, PedigreeMember]]:
        self.get_animal(animal_id)
        genealogy = self._genealogy.get(animal_id)
        return genealogy, resolve_pedigree(genealogy, self._animals)

    async def farm_details(self) -> FarmDetails:
        farm = await self._write("read farm", lambda uow: get_farm.execute(uow, self.farm_id))
        return FarmDetails(farm=farm, animal_count=count_animals_by_type(self._animals.values()))

    # ---------------------------------------------------------------- loading

    async def load_all(self) -> None:
        """Replace local collections with the farm's stored data."""
        data = await self._write(
            "load farm data", lambda uow: load_farm_data.execute(uow, self.farm_id)
        )
        self._animals = {a.id: a for a in data.animals}
        self._health = {r.id: r for r in data.health_records}
        self._production = {r.id: r for r in data.production_records}
        self._genealogy = {g.animal_id: g for g in data.genealogy}
        self._health_by_animal = {}
        for record in self._health.values():
            _index_add(self._health_by_animal, record.animal_id, record.id)
        self._production_by_animal = {}
        for record in self._production.values():
            _index_add(self._production_by_animal, record.animal_id, record.id)
        self.loaded = True
        logger.info(
            "Loaded farm %s: %d animals, %d health records, %d production records",
            self.farm_id,
            len(self._animals),
            len(self._health),
            len(self._production),
        )
        self._recompute()

    # -------------------------------------------------------------- mutations

    async def add_animal(
        self, role: Role, payload: create_animal.CreateAnimalInput, *, actor: str | None = None
    ) -> Animal:
        result = await self._write(
            "add animal",
            lambda uow: create_animal.execute(uow, self.farm_id, role, payload, actor=actor),
        )
        self._animals[result.animal.id] = result.animal
        if result.genealogy is not None:
            self._genealogy[result.genealogy.animal_id] = result.genealogy
        self._recompute()
        return result.animal

    async def update_animal(self, role: Role, animal_id: UUID, changes: dict[str, Any]) -> Animal:
        updated = await self._write(
            "update animal",
            lambda uow: update_animal.execute(uow, self.farm_id, role, animal_id, changes),
        )
        self._animals[updated.id] = updated
        self._recompute()
        return updated

    async def delete_animal(self, role: Role, animal_id: UUID) -> None:
        await self._write(
            "delete animal",
            lambda uow: delete_animal.execute(uow, self.farm_id, role, animal_id),
        )
        self._animals.pop(animal_id, None)
        for record_id in self._health_by_animal.pop(animal_id, []):
            self._health.pop(record_id, None)
        for record_id in self._production_by_animal.pop(animal_id, []):
            self._production.pop(record_id, None)
        self._genealogy.pop(animal_id, None)
        self._recompute()

    async def add_health_record(
        self, role: Role, payload: create_health_record.CreateHealthRecordInput
    ) -> HealthRecord:
        created = await self._write(
            "add health record",
            lambda uow: create_health_record.execute(uow, self.farm_id, role, payload),
        )
        self._store_health(created)
        self._recompute()
        return created

    async def update_health_record(
        self, role: Role, record_id: UUID, changes: dict[str, Any]
    ) -> HealthRecord:
        updated = await self._write(
            "update health record",
            lambda uow: update_health_record.execute(uow, self.farm_id, role, record_id, changes),
        )
        self._store_health(updated)
        self._recompute()
        return updated

    async def delete_health_record(self, role: Role, record_id: UUID) -> None:
        await self._write(
            "delete health record",
            lambda uow: delete_health_record.execute(uow, self.farm_id, role, record_id),
        )
        removed = self._health.pop(record_id, None)
        if removed is not None:
            _index_remove(self._health_by_animal, removed.animal_id, record_id)
        self._recompute()

    async def mark_dose_applied(
        self, role: Role, record_id: UUID, *, today: date | None = None
    ) -> HealthRecord:
        day = today or self._clock()
        updated = await self._write(
            "mark dose applied",
            lambda uow: mark_dose_applied.execute(uow, self.farm_id, role, record_id, today=day),
        )
        self._store_health(updated)
        self._recompute()
        return updated

    async def add_production_record(
        self, role: Role, payload: create_production_record.CreateProductionRecordInput
    ) -> ProductionRecord:
        created = await self._write(
            "add production record",
            lambda uow: create_production_record.execute(
                uow, self.farm_id, role, payload, tz=self.tz
            ),
        )
        self._store_production(created)
        self._recompute()
        return created

    async def update_production_record(
        self, role: Role, record_id: UUID, changes: dict[str, Any]
    ) -> ProductionRecord:
        updated = await self._write(
            "update production record",
            lambda uow: update_production_record.execute(
                uow, self.farm_id, role, record_id, changes, tz=self.tz
            ),
        )
        self._store_production(updated)
        self._recompute()
        return updated

    async def delete_production_record(self, role: Role, record_id: UUID) -> None:
        await self._write(
            "delete production record",
            lambda uow: delete_production_record.execute(uow, self.farm_id, role, record_id),
        )
        removed = self._production.pop(record_id, None)
        if removed is not None:
            _index_remove(self._production_by_animal, removed.animal_id, record_id)
        self._recompute()

    async def save_genealogy(
        self,
        role: Role,
        animal_id: UUID,
        payload: save_genealogy.SaveGenealogyInput,
        *,
        actor: str | None = None,
    ) -> Genealogy:
        saved = await self._write(
            "save genealogy",
            lambda uow: save_genealogy.execute(
                uow, self.farm_id, role, animal_id, payload, actor=actor
            ),
        )
        self._genealogy[saved.animal_id] = saved
        return saved

    async def delete_genealogy(self, role: Role, animal_id: UUID) -> None:
        await self._write(
            "delete genealogy",
            lambda uow: delete_genealogy.execute(uow, self.farm_id, role, animal_id),
        )
        self._genealogy.pop(animal_id, None)

    async def update_farm(self, role: Role, changes: dict[str, Any]) -> FarmDetails:
        farm = await self._write(
            "update farm", lambda uow: update_farm.execute(uow, self.farm_id, role, changes)
        )
        return FarmDetails(farm=farm, animal_count=count_animals_by_type(self._animals.values()))

    # ---------------------------------------------------------------- alerts

    def refresh_alerts(self, today: date | None = None) -> list[BuiltNotification]:
        """Rerun the dose classifier over loaded records; no I/O."""
        day = today or self._clock()
        alerts = collect_dose_alerts(self._health.values(), self._animals, today=day)
        self.alerts = [notification_for_alert(alert, today=day) for alert in alerts]
        return self.alerts

    # --------------------------------------------------------------- helpers

    async def _write(self, operation: str, action: Callable[[UnitOfWork], Awaitable[T]]) -> T:
        try:
            async with self._uow_factory() as uow:
                return await action(uow)
        except AppError:
            raise
        except Exception as exc:
            logger.exception("Farm %s: failed to %s", self.farm_id, operation)
            raise InfrastructureError(f"Failed to {operation}") from exc

    def _store_health(self, record: HealthRecord) -> None:
        previous = self._health.get(record.id)
        if previous is not None and previous.animal_id != record.animal_id:
            _index_remove(self._health_by_animal, previous.animal_id, record.id)
        self._health[record.id] = record
        _index_add(self._health_by_animal, record.animal_id, record.id)

    def _store_production(self, record: ProductionRecord) -> None:
        previous = self._production.get(record.id)
        if previous is not None and previous.animal_id != record.animal_id:
            _index_remove(self._production_by_animal, previous.animal_id, record.id)
        self._production[record.id] = record
        _index_add(self._production_by_animal, record.animal_id, record.id)

    def _compute(self, as_of: date) -> DashboardSnapshot:
        return compute_dashboard(
            self.animals,
            self.health_records,
            self.production_records,
            as_of,
            week_start=self.week_start,
            recent_limit=self.recent_limit,
        )

    def _recompute(self) -> None:
        today = self._clock()
        self.snapshot = self._compute(today)
        self.refresh_alerts(today)


class FarmDataRegistry:
    """Loaded providers, one per farm, created on first use."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        clock: Callable[[], date] = date.today,
        tz: tzinfo | None = None,
        week_start: WeekStart = WeekStart.SUNDAY,
        recent_limit: int = 5,
        upcoming_limit: int = 8,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock
        self._tz = tz
        self._week_start = week_start
        self._recent_limit = recent_limit
        self._upcoming_limit = upcoming_limit
        self._providers: dict[UUID, FarmDataProvider] = {}

    def __contains__(self, farm_id: object) -> bool:
        return farm_id in self._providers

    def loaded(self) -> Iterable[FarmDataProvider]:
        return list(self._providers.values())

    async def get(self, farm_id: UUID) -> FarmDataProvider:
        provider = self._providers.get(farm_id)
        if provider is not None:
            return provider
        provider = FarmDataProvider(
            farm_id,
            self._uow_factory,
            clock=self._clock,
            tz=self._tz,
            week_start=self._week_start,
            recent_limit=self._recent_limit,
            upcoming_limit=self._upcoming_limit,
        )
        await provider.load_all()
        return self._providers.setdefault(farm_id, provider)

    def evict(self, farm_id: UUID) -> None:
        self._providers.pop(farm_id, None)

    def refresh_alerts(self, today: date | None = None) -> int:
        """Refresh every loaded provider; returns the number of active alerts."""
        total = 0
        for provider in self.loaded():
            total += len(provider.refresh_alerts(today))
        return total
