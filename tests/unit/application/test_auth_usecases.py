from __future__ import annotations

from uuid import uuid4

import pytest

from src.application.errors import AuthError, ConflictError, ValidationError
from src.application.use_cases.auth import (
    confirm_password_reset,
    get_me,
    request_password_reset,
    sign_in,
    sign_up,
)
from src.config.settings import Settings
from src.domain.value_objects.role import Role
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer


class PlainHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"plain${password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"plain${password}"


@pytest.fixture()
def jwt_service() -> JWTService:
    return JWTService(secret_key="unit-secret", algorithm="HS256", access_token_expires_minutes=5)


@pytest.fixture()
def hasher() -> PasswordHasher:
    return PlainHasher()


async def _sign_up(uow, hasher, jwt_service, email="Ana@Example.com"):
    return await sign_up.execute(
        uow=uow,
        payload=sign_up.SignUpInput(email=email, password="secret1", farm_name="Rio Verde"),
        password_hasher=hasher,
        jwt_service=jwt_service,
    )


async def test_sign_up_creates_farm_and_admin(uow, hasher, jwt_service):
    session = await _sign_up(uow, hasher, jwt_service)

    profile = session.profile
    assert profile.email == "ana@example.com"
    assert profile.role is Role.ADMIN
    assert profile.display_name == "ana"
    assert len(profile.farm_ids) == 1
    assert uow.farms.items[profile.farm_ids[0]].name == "Rio Verde"
    claims = jwt_service.decode(session.access_token)
    assert claims["role"] == "ADMIN"
    assert claims["farm_ids"] == [str(profile.farm_ids[0])]
    assert jwt_service.decode_refresh(session.refresh_token)["sub"] == str(profile.user_id)


async def test_sign_up_rejects_duplicates_and_short_passwords(uow, hasher, jwt_service):
    await _sign_up(uow, hasher, jwt_service)
    with pytest.raises(ConflictError):
        await _sign_up(uow, hasher, jwt_service, email="ana@example.com")
    with pytest.raises(ValidationError):
        await sign_up.execute(
            uow=uow,
            payload=sign_up.SignUpInput(email="b@example.com", password="123", farm_name="X"),
            password_hasher=hasher,
            jwt_service=jwt_service,
        )


async def test_sign_in(uow, hasher, jwt_service):
    await _sign_up(uow, hasher, jwt_service)
    session = await sign_in.execute(
        uow=uow,
        payload=sign_in.SignInInput(email=" ANA@example.com", password="secret1"),
        password_hasher=hasher,
        jwt_service=jwt_service,
    )
    assert session.token_type == "bearer"
    with pytest.raises(AuthError):
        await sign_in.execute(
            uow=uow,
            payload=sign_in.SignInInput(email="ana@example.com", password="wrong"),
            password_hasher=hasher,
            jwt_service=jwt_service,
        )


async def test_get_me_defaults_missing_profile(uow):
    profile = await get_me.execute(uow=uow, user_id=uuid4(), email="ghost@example.com")
    assert profile.role is Role.WORKER
    assert profile.farm_ids == []
    assert profile.display_name == "ghost"


async def test_password_reset_round_trip_is_single_use(uow, hasher, jwt_service):
    await _sign_up(uow, hasher, jwt_service)
    mailer = LoggingEmailService()
    settings = Settings.model_validate(
        {
            "database_url": "sqlite+aiosqlite:///unused.db",
            "jwt_secret_key": "unit-secret",
            "email_reset_url_base": "https://app.test/reset",
        }
    )

    await request_password_reset.execute(
        uow=uow,
        email="ana@example.com",
        jwt_service=jwt_service,
        email_service=mailer,
        renderer=EmailTemplateRenderer.create_default(),
        settings=settings,
    )
    await request_password_reset.execute(
        uow=uow,
        email="nobody@example.com",
        jwt_service=jwt_service,
        email_service=mailer,
        renderer=EmailTemplateRenderer.create_default(),
        settings=settings,
    )

    assert len(mailer.sent) == 1
    message = mailer.sent[0]
    assert message.to == ["ana@example.com"]
    assert "https://app.test/reset?token=" in message.text
    token = message.text.split("token=", 1)[1].split()[0]

    await confirm_password_reset.execute(
        uow=uow,
        token=token,
        new_password="brand-new",
        jwt_service=jwt_service,
        password_hasher=hasher,
    )
    user = await uow.users.get_by_email("ana@example.com")
    assert hasher.verify("brand-new", user.hashed_password)

    with pytest.raises(AuthError):
        await confirm_password_reset.execute(
            uow=uow,
            token=token,
            new_password="again-new",
            jwt_service=jwt_service,
            password_hasher=hasher,
        )
