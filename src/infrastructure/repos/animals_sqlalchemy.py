from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import ConflictError
from src.application.interfaces.repositories.animals import AnimalRepository
from src.domain.models.animal import Animal
from src.infrastructure.db.orm.animal import AnimalORM
from src.utils.datetime_tz import ensure_utc


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            tag=orm.tag,
            type=orm.type,
            breed=orm.breed,
            birth_date=orm.birth_date,
            gender=orm.gender,
            status=orm.status,
            weight=orm.weight,
            name=orm.name,
            purchase_date=orm.purchase_date,
            purchase_price=orm.purchase_price,
            notes=orm.notes,
            image_url=orm.image_url,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _to_orm(self, animal: Animal) -> AnimalORM:
        return AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            tag=animal.tag,
            type=animal.type,
            breed=animal.breed,
            birth_date=animal.birth_date,
            gender=animal.gender,
            status=animal.status,
            weight=animal.weight,
            name=animal.name,
            purchase_date=animal.purchase_date,
            purchase_price=animal.purchase_price,
            notes=animal.notes,
            image_url=animal.image_url,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
        )

    async def add(self, animal: Animal) -> Animal:
        orm = self._to_orm(animal)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Animal tag already exists for farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_by_tag(self, farm_id: UUID, tag: str) -> Animal | None:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id, AnimalORM.tag == tag.strip())
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        status: str | None = None,
        search: str | None = None,
    ) -> list[Animal]:
        stmt = select(AnimalORM).where(AnimalORM.farm_id == farm_id)
        if type:
            stmt = stmt.where(AnimalORM.type == type)
        if status:
            stmt = stmt.where(AnimalORM.status == status)
        if search:
            pattern = f"%{search.strip().lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(AnimalORM.tag).like(pattern),
                    func.lower(func.coalesce(AnimalORM.name, "")).like(pattern),
                )
            )
        stmt = stmt.order_by(AnimalORM.created_at, AnimalORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update(self, farm_id: UUID, animal_id: UUID, data: dict) -> Animal | None:
        values = {**data, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
            .values(**values)
            .returning(AnimalORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, farm_id: UUID, animal_id: UUID) -> bool:
        stmt = (
            delete(AnimalORM)
            .where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
            .returning(AnimalORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
