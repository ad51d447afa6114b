from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import date

from src.application.services.farm_data_provider import FarmDataRegistry

logger = logging.getLogger(__name__)


def refresh_dose_alerts(registry: FarmDataRegistry, today: date | None = None) -> int:
    """Re-evaluate dose reminders for every loaded farm; reads memory only."""
    total = registry.refresh_alerts(today)
    if total:
        logger.info("Dose reminders: %d due or overdue", total)
    return total


async def run_dose_reminder_loop(
    registry: FarmDataRegistry,
    *,
    interval_seconds: float,
    clock: Callable[[], date] = date.today,
) -> None:
    """Refresh reminders every `interval_seconds` until cancelled."""
    while True:
        await asyncio.sleep(interval_seconds)
        try:
            refresh_dose_alerts(registry, clock())
        except Exception as exc:
            logger.error("Dose reminder refresh failed: %s", exc, exc_info=True)
