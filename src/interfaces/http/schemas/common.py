from __future__ import annotations

from datetime import date
from typing import Annotated, Any

from pydantic import BeforeValidator

from src.config.settings import get_settings
from src.domain.services.date_normalizer import normalize
from src.utils.datetime_tz import today_in


def _wire_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    # unparseable input falls back to the farm-local day, like the dashboard clock
    return normalize(value, today=today_in(get_settings().timezone))


# Accepts ISO strings, slash dates, epoch objects and native dates
WireDate = Annotated[date, BeforeValidator(_wire_date)]
OptionalWireDate = Annotated[date | None, BeforeValidator(_wire_date)]
