from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.genealogy import GenealogyRepository
from src.domain.models.genealogy import KINSHIP_FIELDS, Genealogy
from src.infrastructure.db.orm.genealogy import GenealogyORM
from src.utils.datetime_tz import ensure_utc


class GenealogySQLAlchemyRepository(GenealogyRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: GenealogyORM) -> Genealogy:
        return Genealogy(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            updated_by=orm.updated_by,
            updated_at=ensure_utc(orm.updated_at),
            **{attr: getattr(orm, attr) for attr in KINSHIP_FIELDS.values()},
        )

    async def get_for_animal(self, farm_id: UUID, animal_id: UUID) -> Genealogy | None:
        orm = await self._get_orm(farm_id, animal_id)
        return self._to_domain(orm) if orm else None

    async def list(self, farm_id: UUID) -> list[Genealogy]:
        stmt = (
            select(GenealogyORM)
            .where(GenealogyORM.farm_id == farm_id)
            .order_by(GenealogyORM.updated_at, GenealogyORM.id)
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def upsert(self, genealogy: Genealogy) -> Genealogy:
        orm = await self._get_orm(genealogy.farm_id, genealogy.animal_id)
        if orm is None:
            orm = GenealogyORM(
                id=genealogy.id, farm_id=genealogy.farm_id, animal_id=genealogy.animal_id
            )
            self.session.add(orm)
        for attr in KINSHIP_FIELDS.values():
            setattr(orm, attr, getattr(genealogy, attr))
        orm.updated_by = genealogy.updated_by
        orm.updated_at = genealogy.updated_at
        await self.session.flush()
        return self._to_domain(orm)

    async def delete_for_animal(self, farm_id: UUID, animal_id: UUID) -> bool:
        stmt = (
            delete(GenealogyORM)
            .where(GenealogyORM.farm_id == farm_id, GenealogyORM.animal_id == animal_id)
            .returning(GenealogyORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def _get_orm(self, farm_id: UUID, animal_id: UUID) -> GenealogyORM | None:
        stmt = select(GenealogyORM).where(
            GenealogyORM.farm_id == farm_id, GenealogyORM.animal_id == animal_id
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
