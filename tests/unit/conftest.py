from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

import pytest

from src.domain.models.animal import Animal
from src.domain.models.genealogy import Genealogy
from src.domain.models.health_record import HealthRecord
from src.domain.models.production_record import ProductionRecord


class MemoryRepo:
    """Keyed store shared by the in-memory repositories."""

    def __init__(self) -> None:
        self.items: dict[UUID, object] = {}

    def _farm(self, farm_id: UUID) -> list:
        return [item for item in self.items.values() if item.farm_id == farm_id]


class MemoryAnimals(MemoryRepo):
    async def add(self, animal: Animal) -> Animal:
        self.items[animal.id] = animal
        return animal

    async def get(self, farm_id, animal_id):
        item = self.items.get(animal_id)
        return item if item and item.farm_id == farm_id else None

    async def get_by_tag(self, farm_id, tag):
        return next((a for a in self._farm(farm_id) if a.tag == tag), None)

    async def list(self, farm_id, *, type=None, status=None, search=None):
        return self._farm(farm_id)

    async def update(self, farm_id, animal_id, data):
        current = await self.get(farm_id, animal_id)
        if current is None:
            return None
        updated = replace(current, **data, updated_at=datetime.now(timezone.utc))
        self.items[animal_id] = updated
        return updated

    async def delete(self, farm_id, animal_id):
        return self.items.pop(animal_id, None) is not None


class MemoryRecords(MemoryRepo):
    async def add(self, record):
        self.items[record.id] = record
        return record

    async def get(self, farm_id, record_id):
        item = self.items.get(record_id)
        return item if item and item.farm_id == farm_id else None

    async def list(self, farm_id, *, animal_id=None, category=None, **_filters):
        return [
            r
            for r in self._farm(farm_id)
            if (animal_id is None or r.animal_id == animal_id)
            and (category is None or r.category == category)
        ]

    async def update(self, farm_id, record_id, data):
        current = await self.get(farm_id, record_id)
        if current is None:
            return None
        updated = replace(current, **data, updated_at=datetime.now(timezone.utc))
        self.items[record_id] = updated
        return updated

    async def delete(self, farm_id, record_id):
        return self.items.pop(record_id, None) is not None

    async def delete_by_animal(self, farm_id, animal_id):
        doomed = [r.id for r in self._farm(farm_id) if r.animal_id == animal_id]
        for record_id in doomed:
            del self.items[record_id]
        return len(doomed)


class MemoryGenealogy(MemoryRepo):
    async def get_for_animal(self, farm_id, animal_id):
        return next((g for g in self._farm(farm_id) if g.animal_id == animal_id), None)

    async def list(self, farm_id):
        return self._farm(farm_id)

    async def upsert(self, genealogy: Genealogy) -> Genealogy:
        existing = await self.get_for_animal(genealogy.farm_id, genealogy.animal_id)
        if existing is not None and existing.id != genealogy.id:
            del self.items[existing.id]
        self.items[genealogy.id] = genealogy
        return genealogy

    async def delete_for_animal(self, farm_id, animal_id):
        existing = await self.get_for_animal(farm_id, animal_id)
        if existing is None:
            return False
        del self.items[existing.id]
        return True


class MemoryFarms(MemoryRepo):
    async def add(self, farm):
        self.items[farm.id] = farm
        return farm

    async def get(self, farm_id):
        return self.items.get(farm_id)

    async def update(self, farm_id, data):
        current = self.items.get(farm_id)
        if current is None:
            return None
        updated = replace(current, **data)
        self.items[farm_id] = updated
        return updated


class MemoryUsers(MemoryRepo):
    async def add(self, user):
        self.items[user.id] = user
        return user

    async def get(self, user_id):
        return self.items.get(user_id)

    async def get_by_email(self, email):
        return next((u for u in self.items.values() if u.email == email), None)

    async def update_password(self, user_id, hashed_password):
        self.items[user_id].hashed_password = hashed_password

    async def add_farm(self, user_id, farm_id):
        user = self.items[user_id]
        if farm_id not in user.farm_ids:
            user.farm_ids.append(farm_id)


class MemoryUnitOfWork:
    def __init__(self) -> None:
        self.animals = MemoryAnimals()
        self.health_records = MemoryRecords()
        self.production_records = MemoryRecords()
        self.genealogy = MemoryGenealogy()
        self.farms = MemoryFarms()
        self.users = MemoryUsers()
        self.commits = 0

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def commit(self) -> None:
        self.commits += 1

    async def rollback(self) -> None:
        return None


@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def uow() -> MemoryUnitOfWork:
    return MemoryUnitOfWork()


def _make_animal(farm_id: UUID, tag: str, **overrides) -> Animal:
    fields = {
        "type": "dairy",
        "breed": "Holstein",
        "birth_date": date(2020, 3, 1),
        "gender": "female",
    }
    fields.update(overrides)
    return Animal.create(farm_id=farm_id, tag=tag, **fields)


def _make_health(farm_id: UUID, animal_id: UUID, day: date, **overrides) -> HealthRecord:
    fields = {"category": "vaccination", "description": "Routine"}
    fields.update(overrides)
    return HealthRecord.create(farm_id=farm_id, animal_id=animal_id, date=day, **fields)


def _make_production(
    farm_id: UUID, animal_id: UUID, day: date, quantity: float, category: str = "milk", **overrides
) -> ProductionRecord:
    recorded_at = datetime(day.year, day.month, day.day, 6, 30, tzinfo=timezone.utc)
    return ProductionRecord.create(
        farm_id=farm_id,
        animal_id=animal_id,
        recorded_at=recorded_at,
        category=category,
        quantity=quantity,
        **overrides,
    )


@pytest.fixture()
def make_animal():
    return _make_animal


@pytest.fixture()
def make_health():
    return _make_health


@pytest.fixture()
def make_production():
    return _make_production
