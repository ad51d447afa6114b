from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from src.domain.models.genealogy import Kinship


class GenealogyUpdate(BaseModel):
    father_id: UUID | None = None
    mother_id: UUID | None = None
    paternal_grandfather_id: UUID | None = None
    paternal_grandmother_id: UUID | None = None
    maternal_grandfather_id: UUID | None = None
    maternal_grandmother_id: UUID | None = None
    # Copy grandparents from the parents' own pedigrees when not given
    fill_grandparents: bool = False


class PedigreeMemberResponse(BaseModel):
    kinship: Kinship
    animal_id: UUID | None = None
    tag: str | None = None
    name: str | None = None
    label: str | None = None


class GenealogyResponse(BaseModel):
    animal_id: UUID
    father_id: UUID | None = None
    mother_id: UUID | None = None
    paternal_grandfather_id: UUID | None = None
    paternal_grandmother_id: UUID | None = None
    maternal_grandfather_id: UUID | None = None
    maternal_grandmother_id: UUID | None = None
    members: list[PedigreeMemberResponse]
    updated_by: str | None = None
    updated_at: datetime | None = None
