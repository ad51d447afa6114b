from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4

from src.domain.value_objects.role import Role


@dataclass(slots=True)
class User:
    id: UUID
    email: str
    hashed_password: str
    display_name: str | None = None
    role: Role = Role.WORKER
    farm_ids: list[UUID] = field(default_factory=list)
    is_active: bool = True
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        email: str,
        hashed_password: str,
        *,
        display_name: str | None = None,
        role: Role = Role.WORKER,
        farm_ids: list[UUID] | None = None,
        is_active: bool = True,
    ) -> User:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            email=email.lower(),
            hashed_password=hashed_password,
            display_name=display_name,
            role=role,
            farm_ids=list(farm_ids or []),
            is_active=is_active,
            created_at=now,
            updated_at=now,
        )

    @property
    def profile_name(self) -> str:
        """Display name, defaulting to the local part of the email."""
        return self.display_name or self.email.split("@", 1)[0]
