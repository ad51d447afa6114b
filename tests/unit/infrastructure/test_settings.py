from __future__ import annotations

import pytest
from pydantic import ValidationError

from src.config.settings import Settings


def _make(**overrides) -> Settings:
    fields = {"database_url": "sqlite+aiosqlite://", "jwt_secret_key": "x"}
    fields.update(overrides)
    return Settings(**fields)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("postgres://u:p@db/herd", "postgresql+asyncpg://u:p@db/herd"),
        ("postgresql://u:p@db/herd", "postgresql+asyncpg://u:p@db/herd"),
        ("postgresql+asyncpg://u:p@db/herd", "postgresql+asyncpg://u:p@db/herd"),
        ("sqlite+aiosqlite:///herd.db", "sqlite+aiosqlite:///herd.db"),
    ],
)
def test_database_url_uses_async_driver(raw, expected):
    assert _make(database_url=raw).database_url == expected


def test_week_start_normalized_and_validated():
    assert _make().week_start == "sunday"
    assert _make(week_start=" Monday ").week_start == "monday"
    with pytest.raises(ValidationError):
        _make(week_start="friday")


def test_cors_origins_list():
    assert _make(cors_allow_origins="https://a.test, https://b.test,").cors_allow_origins_list == [
        "https://a.test",
        "https://b.test",
    ]
