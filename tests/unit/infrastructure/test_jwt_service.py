from __future__ import annotations

from uuid import uuid4

import pytest

from src.application.errors import AuthError
from src.infrastructure.auth.jwt_service import JWTService


@pytest.fixture()
def jwt_service() -> JWTService:
    return JWTService(
        secret_key="unit-secret",
        algorithm="HS256",
        access_token_expires_minutes=5,
        issuer="herd",
        audience="herd-clients",
    )


def test_access_token_carries_claims(jwt_service):
    user_id = uuid4()
    token = jwt_service.create_access_token(subject=user_id, extra_claims={"email": "a@b.test"})
    claims = jwt_service.decode(token)
    assert claims["sub"] == str(user_id)
    assert claims["typ"] == "access"
    assert claims["email"] == "a@b.test"
    assert claims["iss"] == "herd"


def test_token_types_are_not_interchangeable(jwt_service):
    user_id = uuid4()
    refresh = jwt_service.create_refresh_token(subject=user_id)
    reset = jwt_service.create_reset_token(subject=user_id, password_fingerprint="abc")

    assert jwt_service.decode_refresh(refresh)["typ"] == "refresh"
    assert jwt_service.decode_reset(reset)["pwd"] == "abc"
    with pytest.raises(AuthError):
        jwt_service.decode(refresh)
    with pytest.raises(AuthError):
        jwt_service.decode_refresh(reset)


def test_foreign_secret_rejected(jwt_service):
    other = JWTService(secret_key="other", algorithm="HS256", access_token_expires_minutes=5)
    token = other.create_access_token(subject=uuid4())
    with pytest.raises(AuthError):
        jwt_service.decode(token)


def test_expired_token_rejected():
    service = JWTService(secret_key="s", algorithm="HS256", access_token_expires_minutes=-1)
    token = service.create_access_token(subject=uuid4())
    with pytest.raises(AuthError):
        service.decode(token)
