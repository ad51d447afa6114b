from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.use_cases.health import (
    create_health_record,
    delete_health_record,
    mark_dose_applied,
    update_health_record,
)
from src.domain.value_objects.role import Role


@pytest.fixture()
async def cow(uow, farm_id, make_animal):
    return await uow.animals.add(make_animal(farm_id, "COW-1"))


def _input(animal_id, **extra) -> create_health_record.CreateHealthRecordInput:
    fields = {
        "date": date(2024, 1, 1),
        "category": "vaccination",
        "description": "Clostridial booster",
    }
    fields.update(extra)
    return create_health_record.CreateHealthRecordInput(animal_id=animal_id, **fields)


async def test_worker_can_record_health(uow, farm_id, cow):
    record = await create_health_record.execute(uow, farm_id, Role.WORKER, _input(cow.id))
    assert record.animal_id == cow.id
    assert uow.commits == 1


async def test_create_requires_known_animal(uow, farm_id):
    with pytest.raises(NotFound):
        await create_health_record.execute(uow, farm_id, Role.ADMIN, _input(uuid4()))


@pytest.mark.parametrize(
    "extra",
    [{"description": "  "}, {"cost": -1}, {"repeat_every_days": -3}, {"category": "surgery"}],
)
async def test_create_validates_input(uow, farm_id, cow, extra):
    with pytest.raises(ValidationError):
        await create_health_record.execute(uow, farm_id, Role.ADMIN, _input(cow.id, **extra))


@pytest.mark.parametrize("today", [date(2024, 1, 3), date(2024, 1, 10), date(2024, 2, 20)])
async def test_mark_dose_applied_rolls_from_previous_due_date(uow, farm_id, cow, today):
    record = await create_health_record.execute(
        uow,
        farm_id,
        Role.WORKER,
        _input(cow.id, next_dose_date=date(2024, 1, 10), repeat_every_days=14),
    )
    updated = await mark_dose_applied.execute(uow, farm_id, Role.WORKER, record.id, today=today)
    assert updated.date == today
    assert updated.next_dose_date == date(2024, 1, 24)


async def test_mark_dose_applied_without_repeat_ends_schedule(uow, farm_id, cow):
    record = await create_health_record.execute(
        uow, farm_id, Role.WORKER, _input(cow.id, next_dose_date=date(2024, 1, 10))
    )
    updated = await mark_dose_applied.execute(
        uow, farm_id, Role.WORKER, record.id, today=date(2024, 1, 10)
    )
    assert updated.next_dose_date is None


async def test_update_rejects_unknown_fields_and_animals(uow, farm_id, cow):
    record = await create_health_record.execute(uow, farm_id, Role.WORKER, _input(cow.id))
    with pytest.raises(ValidationError):
        await update_health_record.execute(uow, farm_id, Role.ADMIN, record.id, {"foo": 1})
    with pytest.raises(NotFound):
        await update_health_record.execute(
            uow, farm_id, Role.ADMIN, record.id, {"animal_id": uuid4()}
        )
    updated = await update_health_record.execute(
        uow, farm_id, Role.ADMIN, record.id, {"category": "checkup", "notes": "ok"}
    )
    assert updated.category == "checkup"
    assert updated.notes == "ok"


async def test_only_managers_edit_and_only_admins_delete(uow, farm_id, cow):
    record = await create_health_record.execute(uow, farm_id, Role.WORKER, _input(cow.id))
    with pytest.raises(PermissionDenied):
        await update_health_record.execute(uow, farm_id, Role.WORKER, record.id, {"notes": "x"})
    with pytest.raises(PermissionDenied):
        await delete_health_record.execute(uow, farm_id, Role.WORKER, record.id)
    with pytest.raises(PermissionDenied):
        await delete_health_record.execute(uow, farm_id, Role.MANAGER, record.id)

    await update_health_record.execute(uow, farm_id, Role.MANAGER, record.id, {"notes": "x"})
    await delete_health_record.execute(uow, farm_id, Role.ADMIN, record.id)
    assert await uow.health_records.get(farm_id, record.id) is None
