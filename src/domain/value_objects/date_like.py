from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import ClassVar, Union


@dataclass(slots=True, frozen=True)
class EpochDate:
    """Wire timestamp: seconds (and optional nanoseconds) since the Unix epoch."""

    kind: ClassVar[str] = "epoch"
    seconds: float
    nanoseconds: int = 0


@dataclass(slots=True, frozen=True)
class IsoDate:
    """ISO-8601 datetime or date-only string, possibly with `/` separators."""

    kind: ClassVar[str] = "iso"
    value: str


@dataclass(slots=True, frozen=True)
class NativeDate:
    kind: ClassVar[str] = "native"
    value: date | datetime


DateLike = Union[EpochDate, IsoDate, NativeDate]
