from __future__ import annotations

from datetime import date

from src.config.settings import Settings
from src.interfaces.http.schemas import common
from src.utils.datetime_tz import today_in


def _settings(tz: str) -> Settings:
    return Settings(database_url="sqlite+aiosqlite://", jwt_secret_key="x", timezone=tz)


def test_wire_date_parses_known_shapes():
    assert common._wire_date("2024/03/05") == date(2024, 3, 5)
    assert common._wire_date({"seconds": 1709251200, "nanoseconds": 0}) == date(2024, 3, 1)
    assert common._wire_date("") is None
    assert common._wire_date(None) is None


def test_unparseable_wire_date_uses_farm_local_day(monkeypatch):
    monkeypatch.setattr(common, "get_settings", lambda: _settings("Pacific/Kiritimati"))

    assert common._wire_date("not a date") == today_in("Pacific/Kiritimati")
