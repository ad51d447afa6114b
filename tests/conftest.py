from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from datetime import date
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.base import Base
from src.infrastructure.db.orm import (  # noqa: F401
    animal,
    farm,
    genealogy,
    health_record,
    membership,
    production_record,
    user,
)
from src.domain.value_objects.role import Role
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.orm.membership import FarmMembershipORM
from src.infrastructure.db.orm.user import UserORM
from src.interfaces.http.main import create_app
from src.utils.datetime_tz import today_in


class FastHasher(PasswordHasher):
    """Plain-text stand-in so auth tests skip bcrypt rounds."""

    def hash(self, password: str) -> str:
        return f"plain${password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"plain${password}"


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "jwt_secret_key": "test-secret",
            "farm_header": "X-Farm-ID",
            "log_level": "INFO",
            "environment": "test",
            "timezone": "UTC",
            "week_start": "sunday",
            "dose_reminder_interval_seconds": 0,
        }
    )


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings, password_hasher=FastHasher())


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        engine = app.state.engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)
            await conn.run_sync(Base.metadata.create_all)
        yield client
    await app.state.engine.dispose()


async def signup(client: AsyncClient, email: str = "owner@example.com", **extra) -> dict:
    payload = {"email": email, "password": "secret123", "farm_name": "Green Valley"}
    payload.update(extra)
    response = await client.post("/api/v1/auth/signup", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(session: dict, farm_id: str | None = None) -> dict[str, str]:
    headers = {"Authorization": f"Bearer {session['access_token']}"}
    farm = farm_id or (session["profile"]["farm_ids"] or [None])[0]
    if farm:
        headers["X-Farm-ID"] = str(farm)
    return headers


@pytest.fixture()
async def owner(client: AsyncClient) -> dict:
    session = await signup(client)
    return {"session": session, "headers": auth_headers(session)}


@pytest.fixture()
def today() -> date:
    return today_in("UTC")


@pytest.fixture()
def signup_as():
    return signup


@pytest.fixture()
def add_member(app, client: AsyncClient, owner: dict):
    """Attach a user with the given role to the owner's farm and sign them in."""

    async def _add(role: Role, email: str) -> dict[str, str]:
        farm_id = UUID(owner["session"]["profile"]["farm_ids"][0])
        user_id = uuid4()
        async with app.state.session_factory() as session:
            session.add(
                UserORM(
                    id=user_id,
                    email=email,
                    hashed_password="plain$secret123",
                    display_name=email.split("@")[0],
                    role=role,
                    is_active=True,
                )
            )
            session.add(FarmMembershipORM(user_id=user_id, farm_id=farm_id))
            await session.commit()
        response = await client.post(
            "/api/v1/auth/signin", json={"email": email, "password": "secret123"}
        )
        assert response.status_code == 200, response.text
        return auth_headers(response.json(), str(farm_id))

    return _add
