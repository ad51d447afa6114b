from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.animal_status import AnimalStatus
from src.domain.value_objects.animal_type import AnimalType, Gender


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    tag: str
    type: str  # AnimalType
    breed: str
    birth_date: date
    gender: str  # Gender
    status: str  # AnimalStatus
    weight: float = 0.0
    name: str | None = None
    purchase_date: date | None = None
    purchase_price: float | None = None
    notes: str | None = None
    image_url: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        tag: str,
        type: str,
        breed: str,
        birth_date: date,
        gender: str,
        status: str = AnimalStatus.HEALTHY.value,
        weight: float = 0.0,
        name: str | None = None,
        purchase_date: date | None = None,
        purchase_price: float | None = None,
        notes: str | None = None,
        image_url: str | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            tag=tag.strip(),
            type=AnimalType(type).value,
            breed=breed,
            birth_date=birth_date,
            gender=Gender(gender).value,
            status=AnimalStatus(status).value,
            weight=weight,
            name=name,
            purchase_date=purchase_date,
            purchase_price=purchase_price,
            notes=notes,
            image_url=image_url,
            created_at=now,
            updated_at=now,
        )

    @property
    def label(self) -> str:
        return f"{self.tag} - {self.name}" if self.name else self.tag
