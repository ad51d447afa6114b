from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.models.user import User
from src.domain.value_objects.role import Role


@dataclass(slots=True)
class UserProfile:
    user_id: UUID
    email: str
    display_name: str
    role: Role
    farm_ids: list[UUID] = field(default_factory=list)


def profile_for(user: User) -> UserProfile:
    return UserProfile(
        user_id=user.id,
        email=user.email,
        display_name=user.profile_name,
        role=user.role,
        farm_ids=list(user.farm_ids),
    )


async def execute(*, uow: UnitOfWork, user_id: UUID, email: str) -> UserProfile:
    """Stored profile of the user, or a worker profile with no farms when none exists."""
    user = await uow.users.get(user_id)
    if user is None:
        return UserProfile(
            user_id=user_id,
            email=email,
            display_name=email.split("@", 1)[0],
            role=Role.WORKER,
        )
    return profile_for(user)
