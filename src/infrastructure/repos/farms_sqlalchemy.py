from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.farms import FarmRepository
from src.domain.models.farm import Farm
from src.infrastructure.db.orm.farm import FarmORM
from src.utils.datetime_tz import ensure_utc


class FarmsSQLAlchemyRepository(FarmRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: FarmORM) -> Farm:
        return Farm(
            id=orm.id,
            name=orm.name,
            location=orm.location,
            size=orm.size,
            units=orm.units,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    async def add(self, farm: Farm) -> Farm:
        orm = FarmORM(
            id=farm.id,
            name=farm.name,
            location=farm.location,
            size=farm.size,
            units=farm.units,
            created_at=farm.created_at,
            updated_at=farm.updated_at,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID) -> Farm | None:
        result = await self.session.execute(select(FarmORM).where(FarmORM.id == farm_id))
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update(self, farm_id: UUID, data: dict) -> Farm | None:
        values = {**data, "updated_at": datetime.now(timezone.utc)}
        stmt = update(FarmORM).where(FarmORM.id == farm_id).values(**values).returning(FarmORM)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None
