from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import PermissionDenied
from src.domain.value_objects.role import Role
from src.infrastructure.db.orm.membership import FarmMembershipORM
from src.infrastructure.db.orm.user import UserORM


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    email: str
    farm_id: UUID | None
    role: Role
    farm_ids: list[UUID]
    claims: dict[str, Any]
    display_name: str | None = None

    @property
    def actor_label(self) -> str:
        return self.display_name or self.email

    def require_roles(self, allowed: Iterable[Role]) -> None:
        if self.role not in set(allowed):
            raise PermissionDenied("Role not allowed for this action")


async def fetch_user(session: AsyncSession, user_id: UUID) -> UserORM | None:
    result = await session.execute(select(UserORM).where(UserORM.id == user_id))
    return result.scalar_one_or_none()


async def fetch_farm_ids(session: AsyncSession, user_id: UUID) -> list[UUID]:
    stmt = select(FarmMembershipORM.farm_id).where(FarmMembershipORM.user_id == user_id)
    result = await session.execute(stmt)
    return list(result.scalars().all())


def ensure_farm_access(farm_ids: list[UUID], farm_id: UUID) -> None:
    if farm_id not in farm_ids:
        raise PermissionDenied("User does not belong to farm")
