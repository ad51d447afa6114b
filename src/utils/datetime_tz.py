from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from src.domain.services.date_normalizer import normalize

DEFAULT_TIMEZONE_NAME = "UTC"

_DOW = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
_MON = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def resolve_tz(name: str | None) -> ZoneInfo:
    try:
        return ZoneInfo(name or DEFAULT_TIMEZONE_NAME)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(DEFAULT_TIMEZONE_NAME)


def today_in(tz_name: str | None = None, *, now: datetime | None = None) -> date:
    """Calendar date of `now` (default: current instant) in the farm's timezone."""
    instant = now or datetime.now(timezone.utc)
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(resolve_tz(tz_name)).date()


def format_day_date(d: Any) -> str:
    """Return 'Fri 05 Oct'; empty string for None."""
    if d is None:
        return ""
    day = normalize(d)
    return f"{_DOW[day.weekday()]} {day.day:02d} {_MON[day.month - 1]}"


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive values read back from stores without tz support."""
    if dt is None or dt.tzinfo is not None:
        return dt
    return dt.replace(tzinfo=timezone.utc)
