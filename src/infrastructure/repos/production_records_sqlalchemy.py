from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.production_records import (
    ProductionRecordsRepository,
)
from src.domain.models.production_record import ProductionRecord
from src.infrastructure.db.orm.production_record import ProductionRecordORM
from src.utils.datetime_tz import ensure_utc


class ProductionRecordsSQLAlchemyRepository(ProductionRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: ProductionRecordORM) -> ProductionRecord:
        return ProductionRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            recorded_at=ensure_utc(orm.recorded_at),
            date=orm.date,
            category=orm.category,
            quantity=float(orm.quantity),
            quality=orm.quality,
            notes=orm.notes,
            shift=orm.shift,
            milking_location=orm.milking_location,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _to_orm(self, record: ProductionRecord) -> ProductionRecordORM:
        return ProductionRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            recorded_at=record.recorded_at,
            date=record.date,
            category=record.category,
            quantity=record.quantity,
            quality=record.quality,
            notes=record.notes,
            shift=record.shift,
            milking_location=record.milking_location,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def add(self, record: ProductionRecord) -> ProductionRecord:
        orm = self._to_orm(record)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> ProductionRecord | None:
        stmt = select(ProductionRecordORM).where(
            ProductionRecordORM.farm_id == farm_id, ProductionRecordORM.id == record_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        category: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[ProductionRecord]:
        stmt = select(ProductionRecordORM).where(ProductionRecordORM.farm_id == farm_id)
        if animal_id:
            stmt = stmt.where(ProductionRecordORM.animal_id == animal_id)
        if category:
            stmt = stmt.where(ProductionRecordORM.category == category)
        if date_from:
            stmt = stmt.where(ProductionRecordORM.date >= date_from)
        if date_to:
            stmt = stmt.where(ProductionRecordORM.date <= date_to)
        stmt = stmt.order_by(ProductionRecordORM.created_at, ProductionRecordORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update(
        self, farm_id: UUID, record_id: UUID, data: dict
    ) -> ProductionRecord | None:
        values = {**data, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(ProductionRecordORM)
            .where(ProductionRecordORM.farm_id == farm_id, ProductionRecordORM.id == record_id)
            .values(**values)
            .returning(ProductionRecordORM)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, farm_id: UUID, record_id: UUID) -> bool:
        stmt = (
            delete(ProductionRecordORM)
            .where(ProductionRecordORM.farm_id == farm_id, ProductionRecordORM.id == record_id)
            .returning(ProductionRecordORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def delete_by_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        stmt = (
            delete(ProductionRecordORM)
            .where(
                ProductionRecordORM.farm_id == farm_id,
                ProductionRecordORM.animal_id == animal_id,
            )
            .returning(ProductionRecordORM.id)
        )
        result = await self.session.execute(stmt)
        return len(result.scalars().all())
