from __future__ import annotations

from uuid import uuid4

import pytest

from src.domain.models.genealogy import Genealogy, Kinship
from src.domain.services.pedigree import (
    fill_grandparents,
    migrate_legacy_parents,
    resolve_pedigree,
)


def test_resolve_pedigree_marks_missing_ancestors(farm_id, make_animal):
    sire = make_animal(farm_id, "SIRE-1", gender="male", name="Thor")
    calf = make_animal(farm_id, "CALF-1")
    removed_dam = uuid4()
    genealogy = Genealogy.create(farm_id, calf.id, father_id=sire.id, mother_id=removed_dam)

    members = resolve_pedigree(genealogy, {sire.id: sire, calf.id: calf})

    assert members[Kinship.FATHER].tag == "SIRE-1"
    assert members[Kinship.FATHER].name == "Thor"
    assert members[Kinship.MOTHER].label == "Unknown"
    assert members[Kinship.PATERNAL_GRANDFATHER].label is None


def test_resolve_without_genealogy_has_empty_slots():
    members = resolve_pedigree(None, {})
    assert len(members) == 6
    assert all(m.animal_id is None for m in members.values())


def test_fill_grandparents_copies_from_parent_pedigrees(farm_id):
    father, mother = uuid4(), uuid4()
    gf, gm = uuid4(), uuid4()
    kept = uuid4()
    pedigrees = {father: Genealogy.create(farm_id, father, father_id=gf, mother_id=gm)}
    filled = fill_grandparents(
        {"father_id": father, "mother_id": mother, "maternal_grandfather_id": kept},
        pedigrees,
    )
    assert filled["paternal_grandfather_id"] == gf
    assert filled["paternal_grandmother_id"] == gm
    assert filled["maternal_grandfather_id"] == kept


def test_legacy_direct_ids_win(farm_id, make_animal):
    bull = make_animal(farm_id, "BULL", gender="male")
    result = migrate_legacy_parents(
        [bull],
        parent_male_id=bull.id,
        parent_info={"mother": {"tag": "whatever"}},
    )
    assert result == {"father_id": bull.id, "mother_id": None}


def test_legacy_parent_info_matches_by_tag_or_name(farm_id, make_animal):
    bull = make_animal(farm_id, "BULL-9", gender="male")
    cow = make_animal(farm_id, "COW-2", name="Rosie")
    result = migrate_legacy_parents(
        [bull, cow],
        parent_info={
            "father": {"code": "bull-9"},
            "mother": {"name": "ROSIE"},
            "paternalGrandfather": {"tag": "nobody"},
        },
    )
    assert result == {"father_id": bull.id, "mother_id": cow.id}
    assert migrate_legacy_parents([bull]) == {}


def test_genealogy_create_rejects_unknown_fields(farm_id):
    with pytest.raises(ValueError):
        Genealogy.create(farm_id, uuid4(), uncle_id=uuid4())
