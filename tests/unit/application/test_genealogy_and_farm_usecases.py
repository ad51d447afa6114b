from __future__ import annotations

from uuid import uuid4

import pytest

from src.application.errors import NotFound, PermissionDenied, ValidationError
from src.application.use_cases.farm import get_farm, update_farm
from src.application.use_cases.genealogy import delete_genealogy, save_genealogy
from src.domain.models.farm import Farm
from src.domain.value_objects.role import Role


@pytest.fixture()
async def herd(uow, farm_id, make_animal):
    animals = {}
    pairs = (("SIRE", "male"), ("DAM", "female"), ("GRANDSIRE", "male"), ("CALF", "female"))
    for tag, gender in pairs:
        animals[tag] = await uow.animals.add(make_animal(farm_id, tag, gender=gender))
    return animals


async def test_save_genealogy_creates_then_replaces(uow, farm_id, herd):
    calf = herd["CALF"]
    saved = await save_genealogy.execute(
        uow,
        farm_id,
        Role.MANAGER,
        calf.id,
        save_genealogy.SaveGenealogyInput(father_id=herd["SIRE"].id),
        actor="manager@example.com",
    )
    assert saved.father_id == herd["SIRE"].id
    assert saved.updated_by == "manager@example.com"

    replaced = await save_genealogy.execute(
        uow,
        farm_id,
        Role.ADMIN,
        calf.id,
        save_genealogy.SaveGenealogyInput(mother_id=herd["DAM"].id),
    )
    assert replaced.id == saved.id
    assert replaced.father_id is None
    assert replaced.mother_id == herd["DAM"].id
    assert len(uow.genealogy.items) == 1


async def test_save_genealogy_fills_grandparents(uow, farm_id, herd):
    await save_genealogy.execute(
        uow,
        farm_id,
        Role.ADMIN,
        herd["SIRE"].id,
        save_genealogy.SaveGenealogyInput(father_id=herd["GRANDSIRE"].id),
    )
    saved = await save_genealogy.execute(
        uow,
        farm_id,
        Role.ADMIN,
        herd["CALF"].id,
        save_genealogy.SaveGenealogyInput(father_id=herd["SIRE"].id, fill_grandparents=True),
    )
    assert saved.paternal_grandfather_id == herd["GRANDSIRE"].id


async def test_save_genealogy_validation(uow, farm_id, herd):
    calf = herd["CALF"]
    with pytest.raises(PermissionDenied):
        await save_genealogy.execute(
            uow, farm_id, Role.WORKER, calf.id, save_genealogy.SaveGenealogyInput()
        )
    with pytest.raises(ValidationError):
        await save_genealogy.execute(
            uow, farm_id, Role.ADMIN, calf.id, save_genealogy.SaveGenealogyInput(mother_id=calf.id)
        )
    with pytest.raises(ValidationError) as excinfo:
        await save_genealogy.execute(
            uow, farm_id, Role.ADMIN, calf.id, save_genealogy.SaveGenealogyInput(mother_id=uuid4())
        )
    assert excinfo.value.details == {"fields": ["mother_id"]}
    with pytest.raises(NotFound):
        await save_genealogy.execute(
            uow, farm_id, Role.ADMIN, uuid4(), save_genealogy.SaveGenealogyInput()
        )


async def test_delete_genealogy(uow, farm_id, herd):
    calf = herd["CALF"]
    payload = save_genealogy.SaveGenealogyInput(father_id=herd["SIRE"].id)
    await save_genealogy.execute(uow, farm_id, Role.ADMIN, calf.id, payload)
    await delete_genealogy.execute(uow, farm_id, Role.ADMIN, calf.id)
    assert uow.genealogy.items == {}
    with pytest.raises(NotFound):
        await delete_genealogy.execute(uow, farm_id, Role.ADMIN, calf.id)


async def test_update_farm(uow, farm_id):
    await uow.farms.add(Farm.create(name="Old", farm_id=farm_id))
    with pytest.raises(PermissionDenied):
        await update_farm.execute(uow, farm_id, Role.MANAGER, {"name": "New"})
    with pytest.raises(ValidationError):
        await update_farm.execute(uow, farm_id, Role.ADMIN, {"units": "furlongs"})
    with pytest.raises(ValidationError):
        await update_farm.execute(uow, farm_id, Role.ADMIN, {"size": -2})

    updated = await update_farm.execute(
        uow, farm_id, Role.ADMIN, {"name": "New", "size": 40, "units": "acres"}
    )
    assert (updated.name, updated.size, updated.units) == ("New", 40, "acres")
    assert (await get_farm.execute(uow, farm_id)).name == "New"
    with pytest.raises(NotFound):
        await get_farm.execute(uow, uuid4())
