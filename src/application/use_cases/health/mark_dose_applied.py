from __future__ import annotations

from datetime import date
from uuid import UUID

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.health.create_health_record import ensure_can_record
from src.domain.models.health_record import HealthRecord
from src.domain.services.date_normalizer import normalize
from src.domain.services.dose_status import rollover_dose
from src.domain.value_objects.role import Role


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    role: Role,
    record_id: UUID,
    *,
    today: date,
) -> HealthRecord:
    """Record that the scheduled dose was given today and schedule the next one.

    The next due date advances from the previous due date, so a late
    application does not shorten the following interval.
    """
    ensure_can_record(role)
    record = await uow.health_records.get(farm_id, record_id)
    if not record:
        raise NotFound("Health record not found")
    previous = normalize(record.next_dose_date, today=today) if record.next_dose_date else None
    data = {"date": today, "next_dose_date": rollover_dose(previous, record.repeat_every_days)}
    updated = await uow.health_records.update(farm_id, record_id, data)
    if not updated:
        raise NotFound("Health record not found")
    await uow.commit()
    return updated
