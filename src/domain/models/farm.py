from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class AreaUnit(str, Enum):
    HECTARES = "hectares"
    ACRES = "acres"


@dataclass(slots=True)
class Farm:
    id: UUID
    name: str
    location: str = ""
    size: float = 0.0
    units: str = AreaUnit.HECTARES.value
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        location: str = "",
        size: float = 0.0,
        units: str = AreaUnit.HECTARES.value,
        farm_id: UUID | None = None,
    ) -> Farm:
        now = datetime.now(timezone.utc)
        return cls(
            id=farm_id or uuid4(),
            name=name,
            location=location,
            size=size,
            units=AreaUnit(units).value,
            created_at=now,
            updated_at=now,
        )


@dataclass(slots=True, frozen=True)
class AnimalCount:
    """Derived from the current animal collection; never stored."""

    dairy: int
    beef: int

    @property
    def total(self) -> int:
        return self.dairy + self.beef
