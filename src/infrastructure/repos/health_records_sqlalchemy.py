from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories.health_records import HealthRecordsRepository
from src.domain.models.health_record import HealthRecord
from src.infrastructure.db.orm.health_record import HealthRecordORM
from src.utils.datetime_tz import ensure_utc


class HealthRecordsSQLAlchemyRepository(HealthRecordsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: HealthRecordORM) -> HealthRecord:
        return HealthRecord(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            date=orm.date,
            category=orm.category,
            description=orm.description,
            medicine=orm.medicine,
            dosage=orm.dosage,
            veterinarian=orm.veterinarian,
            cost=orm.cost,
            notes=orm.notes,
            next_dose_date=orm.next_dose_date,
            repeat_every_days=orm.repeat_every_days,
            reminder_advance_days=orm.reminder_advance_days,
            reminder_enabled=orm.reminder_enabled,
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
        )

    def _to_orm(self, record: HealthRecord) -> HealthRecordORM:
        return HealthRecordORM(
            id=record.id,
            farm_id=record.farm_id,
            animal_id=record.animal_id,
            date=record.date,
            category=record.category,
            description=record.description,
            medicine=record.medicine,
            dosage=record.dosage,
            veterinarian=record.veterinarian,
            cost=record.cost,
            notes=record.notes,
            next_dose_date=record.next_dose_date,
            repeat_every_days=record.repeat_every_days,
            reminder_advance_days=record.reminder_advance_days,
            reminder_enabled=record.reminder_enabled,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )

    async def add(self, record: HealthRecord) -> HealthRecord:
        orm = self._to_orm(record)
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, record_id: UUID) -> HealthRecord | None:
        stmt = select(HealthRecordORM).where(
            HealthRecordORM.farm_id == farm_id, HealthRecordORM.id == record_id
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
    ) -> list[HealthRecord]:
        stmt = select(HealthRecordORM).where(HealthRecordORM.farm_id == farm_id)
        if animal_id:
            stmt = stmt.where(HealthRecordORM.animal_id == animal_id)
        if category:
            stmt = stmt.where(HealthRecordORM.category == category)
        stmt = stmt.order_by(HealthRecordORM.created_at, HealthRecordORM.id)
        result = await self.session.execute(stmt)
        return [self._to_domain(row) for row in result.scalars().all()]

    async def update(self, farm_id: UUID, record_id: UUID, data: dict) -> HealthRecord | None:
        values = {**data, "updated_at": datetime.now(timezone.utc)}
        stmt = (
            update(HealthRecordORM)
            .where(HealthRecordORM.farm_id == farm_id, HealthRecordORM.id == record_id)
            .values(**values)
            .returning(HealthRecordORM)
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, farm_id: UUID, record_id: UUID) -> bool:
        stmt = (
            delete(HealthRecordORM)
            .where(HealthRecordORM.farm_id == farm_id, HealthRecordORM.id == record_id)
            .returning(HealthRecordORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def delete_by_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        stmt = (
            delete(HealthRecordORM)
            .where(HealthRecordORM.farm_id == farm_id, HealthRecordORM.animal_id == animal_id)
            .returning(HealthRecordORM.id)
        )
        result = await self.session.execute(stmt)
        return len(result.scalars().all())
