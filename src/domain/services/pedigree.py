"""Pedigree resolution over the canonical Genealogy entity."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from src.domain.models.animal import Animal
from src.domain.models.genealogy import KINSHIP_FIELDS, Genealogy, Kinship
from src.domain.services.dose_status import UNKNOWN_ANIMAL

# Legacy free-text pedigree keys (camelCase or snake_case) per kinship
_LEGACY_KEYS: dict[Kinship, tuple[str, ...]] = {
    Kinship.FATHER: ("father",),
    Kinship.MOTHER: ("mother",),
    Kinship.PATERNAL_GRANDFATHER: ("paternal_grandfather", "paternalGrandfather"),
    Kinship.PATERNAL_GRANDMOTHER: ("paternal_grandmother", "paternalGrandmother"),
    Kinship.MATERNAL_GRANDFATHER: ("maternal_grandfather", "maternalGrandfather"),
    Kinship.MATERNAL_GRANDMOTHER: ("maternal_grandmother", "maternalGrandmother"),
}


@dataclass(slots=True, frozen=True)
class PedigreeMember:
    kinship: Kinship
    animal_id: UUID | None
    tag: str | None
    name: str | None

    @property
    def label(self) -> str | None:
        if self.animal_id is None:
            return None
        return self.tag or UNKNOWN_ANIMAL


def resolve_pedigree(
    genealogy: Genealogy | None, animals: Mapping[UUID, Animal]
) -> dict[Kinship, PedigreeMember]:
    """Attach tag and name to every parent id; dangling ids render as Unknown."""
    ids = genealogy.parent_ids() if genealogy else {kin: None for kin in Kinship}
    members = {}
    for kin, animal_id in ids.items():
        animal = animals.get(animal_id) if animal_id else None
        members[kin] = PedigreeMember(
            kinship=kin,
            animal_id=animal_id,
            tag=animal.tag if animal else (UNKNOWN_ANIMAL if animal_id else None),
            name=animal.name if animal else None,
        )
    return members


def fill_grandparents(
    parents: dict[str, UUID | None], genealogies: Mapping[UUID, Genealogy]
) -> dict[str, UUID | None]:
    """Copy grandparents from the chosen father's and mother's own pedigrees.

    Existing grandparent values are kept when the parent has no pedigree or
    the parent's pedigree leaves that slot empty.
    """
    filled = dict(parents)
    sides = (
        ("father_id", "paternal_grandfather_id", "paternal_grandmother_id"),
        ("mother_id", "maternal_grandfather_id", "maternal_grandmother_id"),
    )
    for parent_key, grandfather_key, grandmother_key in sides:
        parent_id = filled.get(parent_key)
        parent_pedigree = genealogies.get(parent_id) if parent_id else None
        if parent_pedigree is None:
            continue
        filled[grandfather_key] = parent_pedigree.father_id or filled.get(grandfather_key)
        filled[grandmother_key] = parent_pedigree.mother_id or filled.get(grandmother_key)
    return filled


def _match_reference(ref: Any, animals: Iterable[Animal]) -> UUID | None:
    if not isinstance(ref, Mapping):
        return None
    ref_id = str(ref.get("id") or "").strip()
    query = str(ref.get("tag") or ref.get("code") or ref.get("name") or "").strip().lower()
    for animal in animals:
        if ref_id and str(animal.id) == ref_id:
            return animal.id
        if query and (
            animal.tag.lower() == query or (animal.name or "").lower() == query
        ):
            return animal.id
    return None


def migrate_legacy_parents(
    animals: Iterable[Animal],
    *,
    parent_male_id: UUID | None = None,
    parent_female_id: UUID | None = None,
    parent_info: Mapping[str, Any] | None = None,
) -> dict[str, UUID | None]:
    """Translate legacy parent fields into Genealogy attributes.

    Direct parent ids win over ``parent_info``; references in ``parent_info``
    are matched by id, then by tag/code or name (case-insensitive). Unmatched
    references are dropped.
    """
    known = list(animals)
    if parent_male_id or parent_female_id:
        return {
            KINSHIP_FIELDS[Kinship.FATHER]: parent_male_id,
            KINSHIP_FIELDS[Kinship.MOTHER]: parent_female_id,
        }
    if not parent_info:
        return {}
    result: dict[str, UUID | None] = {}
    for kin, keys in _LEGACY_KEYS.items():
        ref = next((parent_info[k] for k in keys if parent_info.get(k)), None)
        matched = _match_reference(ref, known)
        if matched is not None:
            result[KINSHIP_FIELDS[kin]] = matched
    return result
