from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class Kinship(str, Enum):
    FATHER = "father"
    MOTHER = "mother"
    PATERNAL_GRANDFATHER = "paternal_grandfather"
    PATERNAL_GRANDMOTHER = "paternal_grandmother"
    MATERNAL_GRANDFATHER = "maternal_grandfather"
    MATERNAL_GRANDMOTHER = "maternal_grandmother"


# Genealogy attribute holding the animal id for each kinship
KINSHIP_FIELDS: dict[Kinship, str] = {kin: f"{kin.value}_id" for kin in Kinship}


@dataclass(slots=True)
class Genealogy:
    """Pedigree of one animal; every parent id is a weak reference to another animal."""

    id: UUID
    farm_id: UUID
    animal_id: UUID
    father_id: UUID | None = None
    mother_id: UUID | None = None
    paternal_grandfather_id: UUID | None = None
    paternal_grandmother_id: UUID | None = None
    maternal_grandfather_id: UUID | None = None
    maternal_grandmother_id: UUID | None = None
    updated_by: str | None = None
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        *,
        updated_by: str | None = None,
        **parents: UUID | None,
    ) -> Genealogy:
        unknown = set(parents) - set(KINSHIP_FIELDS.values())
        if unknown:
            raise ValueError(f"Unknown genealogy fields: {', '.join(sorted(unknown))}")
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            updated_by=updated_by,
            updated_at=datetime.now(timezone.utc),
            **parents,
        )

    def parent_ids(self) -> dict[Kinship, UUID | None]:
        return {kin: getattr(self, attr) for kin, attr in KINSHIP_FIELDS.items()}
