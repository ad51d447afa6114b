"""Single entry point for turning any stored or submitted date into a calendar date.

Dates reach the service as native ``date``/``datetime`` objects, wire timestamps
(``{"seconds": ..., "nanoseconds": ...}`` or objects exposing ``seconds`` /
``to_date()``), ISO-8601 strings and date-only strings using ``-`` or ``/``.
Nothing outside this module inspects which of those it received.

Parsing never raises: input that cannot be understood degrades to "today"
and a warning is logged, so legacy rows with malformed dates still render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any

from src.domain.value_objects.date_like import DateLike, EpochDate, IsoDate, NativeDate

logger = logging.getLogger(__name__)

_MIDNIGHT = "T00:00:00"
_STRPTIME_LAYOUTS = ("%Y-%m-%d", "%m-%d-%Y")
_ACCESSORS = ("to_datetime", "to_date", "toDate")


def as_date_like(raw: Any) -> DateLike | None:
    """Tag a raw wire value; returns None when the shape is not recognised."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (EpochDate, IsoDate, NativeDate)):
        return raw
    if isinstance(raw, (datetime, date)):
        return NativeDate(raw)
    if isinstance(raw, str):
        text = raw.strip()
        return IsoDate(text) if text else None
    if isinstance(raw, Mapping):
        seconds = raw.get("seconds", raw.get("_seconds"))
        nanos = raw.get("nanoseconds", raw.get("_nanoseconds", 0))
        return _epoch(seconds, nanos)
    for accessor in _ACCESSORS:
        method = getattr(raw, accessor, None)
        if not callable(method):
            continue
        try:
            value = method()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Date accessor %s() failed on %r: %s", accessor, raw, exc)
            continue
        if isinstance(value, (datetime, date)):
            return NativeDate(value)
    seconds = getattr(raw, "seconds", None)
    if seconds is not None:
        return _epoch(seconds, getattr(raw, "nanoseconds", 0))
    return None


def normalize(value: Any, *, today: date | None = None) -> date:
    """Return the calendar date for `value`, or `today` when it cannot be parsed."""
    try:
        tagged = as_date_like(value)
        parsed = _to_date(tagged) if tagged is not None else None
    except Exception as exc:  # noqa: BLE001
        logger.warning("Unexpected error parsing date %r: %s", value, exc)
        parsed = None
    if parsed is None:
        fallback = today or date.today()
        logger.warning("Could not parse date %r, using %s", value, fallback.isoformat())
        return fallback
    return parsed


def to_iso_date_string(value: Any, *, today: date | None = None) -> str:
    return normalize(value, today=today).isoformat()


def days_between(start: Any, end: Any, *, today: date | None = None) -> int:
    """Signed whole days from `start` to `end`; positive when `end` is later.

    Both operands are truncated to calendar dates first, so time of day never
    shifts the result.
    """
    return (normalize(end, today=today) - normalize(start, today=today)).days


def _epoch(seconds: Any, nanoseconds: Any) -> EpochDate | None:
    if seconds is None or isinstance(seconds, bool):
        return None
    try:
        return EpochDate(seconds=float(seconds), nanoseconds=int(nanoseconds or 0))
    except (TypeError, ValueError):
        return None


def _to_date(value: DateLike) -> date | None:
    if isinstance(value, NativeDate):
        raw = value.value
        return raw.date() if isinstance(raw, datetime) else raw
    if isinstance(value, EpochDate):
        try:
            instant = datetime.fromtimestamp(
                value.seconds + value.nanoseconds / 1_000_000_000, tz=timezone.utc
            )
        except (OverflowError, OSError, ValueError):
            return None
        return instant.date()
    return _parse_string(value.value)


def _parse_string(text: str) -> date | None:
    parsed = _from_iso(text) or _from_iso(text + _MIDNIGHT)
    if parsed is not None:
        return parsed
    normalized = text.replace("/", "-")
    parsed = _from_iso(normalized) or _from_iso(normalized + _MIDNIGHT)
    if parsed is not None:
        return parsed
    for layout in _STRPTIME_LAYOUTS:
        try:
            return datetime.strptime(normalized, layout).date()
        except ValueError:
            continue
    return None


def _from_iso(text: str) -> date | None:
    candidate = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    try:
        return datetime.fromisoformat(candidate).date()
    except ValueError:
        return None
