from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError, NotFound
from src.application.interfaces.repositories.users import UserRepository
from src.domain.models.user import User
from src.infrastructure.db.orm.membership import FarmMembershipORM
from src.infrastructure.db.orm.user import UserORM
from src.utils.datetime_tz import ensure_utc


class UsersSQLAlchemyRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: UserORM, farm_ids: list[UUID]) -> User:
        return User(
            id=orm.id,
            email=orm.email,
            hashed_password=orm.hashed_password,
            display_name=orm.display_name,
            role=orm.role,
            farm_ids=farm_ids,
            is_active=orm.is_active,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def _farm_ids(self, user_id: UUID) -> list[UUID]:
        stmt = (
            select(FarmMembershipORM.farm_id)
            .where(FarmMembershipORM.user_id == user_id)
            .order_by(FarmMembershipORM.farm_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def add(self, user: User) -> User:
        orm = UserORM(
            id=user.id,
            email=user.email,
            hashed_password=user.hashed_password,
            display_name=user.display_name,
            role=user.role,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Email already registered") from exc
        return self._to_domain(orm, [])

    async def get(self, user_id: UUID) -> User | None:
        result = await self.session.execute(select(UserORM).where(UserORM.id == user_id))
        orm = result.scalar_one_or_none()
        return self._to_domain(orm, await self._farm_ids(orm.id)) if orm else None

    async def get_by_email(self, email: str) -> User | None:
        stmt = select(UserORM).where(UserORM.email == email.lower())
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm, await self._farm_ids(orm.id)) if orm else None

    async def update_password(self, user_id: UUID, hashed_password: str) -> None:
        stmt = (
            update(UserORM)
            .where(UserORM.id == user_id)
            .values(hashed_password=hashed_password, updated_at=datetime.now(timezone.utc))
            .returning(UserORM.id)
        )
        result = await self.session.execute(stmt)
        if result.scalar_one_or_none() is None:
            raise NotFound("User not found")

    async def add_farm(self, user_id: UUID, farm_id: UUID) -> None:
        existing = await self.session.get(FarmMembershipORM, (user_id, farm_id))
        if existing:
            return
        self.session.add(FarmMembershipORM(user_id=user_id, farm_id=farm_id))
        await self.session.flush()
