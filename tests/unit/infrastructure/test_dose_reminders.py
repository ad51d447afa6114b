from __future__ import annotations

import asyncio
import contextlib
import logging
from datetime import date, timedelta

from src.application.services.farm_data_provider import FarmDataRegistry
from src.infrastructure.scheduler.dose_reminders import (
    refresh_dose_alerts,
    run_dose_reminder_loop,
)

DAY = date(2024, 6, 10)


async def _registry_with_dose(uow, farm_id, make_animal, make_health) -> FarmDataRegistry:
    cow = await uow.animals.add(make_animal(farm_id, "COW-5"))
    await uow.health_records.add(
        make_health(
            farm_id,
            cow.id,
            DAY - timedelta(days=20),
            next_dose_date=DAY + timedelta(days=1),
            reminder_advance_days=2,
        )
    )
    registry = FarmDataRegistry(lambda: uow, clock=lambda: DAY)
    await registry.get(farm_id)
    return registry


async def test_refresh_counts_due_doses(uow, farm_id, make_animal, make_health, caplog):
    registry = await _registry_with_dose(uow, farm_id, make_animal, make_health)
    assert refresh_dose_alerts(registry, DAY) == 0

    with caplog.at_level(logging.INFO):
        assert refresh_dose_alerts(registry, DAY + timedelta(days=1)) == 1
    assert "1 due or overdue" in caplog.text
    provider = await registry.get(farm_id)
    assert provider.alerts[0].message == "Apply treatment to COW-5 today"


async def test_loop_refreshes_until_cancelled(uow, farm_id, make_animal, make_health):
    registry = await _registry_with_dose(uow, farm_id, make_animal, make_health)
    ticks = []

    def clock() -> date:
        ticks.append(1)
        return DAY + timedelta(days=3)

    task = asyncio.create_task(run_dose_reminder_loop(registry, interval_seconds=0, clock=clock))
    for _ in range(5):
        await asyncio.sleep(0)
    task.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await task

    assert ticks
    provider = await registry.get(farm_id)
    assert provider.alerts[0].data["days_remaining"] == -2
