from __future__ import annotations

from uuid import uuid4

import pytest


async def test_signup_creates_admin_with_farm(client, signup_as):
    session = await signup_as(client, email="Ana@Example.com", display_name="Ana")
    profile = session["profile"]
    assert profile["role"] == "ADMIN"
    assert profile["display_name"] == "Ana"
    assert len(profile["farm_ids"]) == 1
    assert session["token_type"] == "bearer"
    assert session["refresh_token"] is None
    assert "refresh_token" in client.cookies


async def test_signup_rejects_duplicates_and_short_passwords(client, owner):
    duplicate = await client.post(
        "/api/v1/auth/signup",
        json={"email": "owner@example.com", "password": "secret123", "farm_name": "Other"},
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["code"] == "conflict"

    short = await client.post(
        "/api/v1/auth/signup",
        json={"email": "new@example.com", "password": "abc", "farm_name": "Other"},
    )
    assert short.status_code == 422
    assert short.json()["code"] == "validation_error"


async def test_signin(client, owner):
    ok = await client.post(
        "/api/v1/auth/signin",
        json={"email": "owner@example.com", "password": "secret123"},
        headers={"X-Mobile-Client": "1"},
    )
    assert ok.status_code == 200
    assert ok.json()["refresh_token"]

    wrong = await client.post(
        "/api/v1/auth/signin", json={"email": "owner@example.com", "password": "nope123"}
    )
    assert wrong.status_code == 401
    assert wrong.json() == {"code": "auth_error", "message": "Invalid credentials"}


async def test_refresh_from_cookie_and_body(client, owner):
    from_cookie = await client.post("/api/v1/auth/refresh", headers={"X-Return-Refresh": "1"})
    assert from_cookie.status_code == 200, from_cookie.text
    refresh_token = from_cookie.json()["refresh_token"]

    client.cookies.clear()
    from_body = await client.post("/api/v1/auth/refresh", json={"refresh_token": refresh_token})
    assert from_body.status_code == 200
    assert from_body.json()["profile"]["email"] == "owner@example.com"

    client.cookies.clear()
    access = owner["session"]["access_token"]
    rejected = await client.post("/api/v1/auth/refresh", json={"refresh_token": access})
    assert rejected.status_code == 401
    missing = await client.post("/api/v1/auth/refresh")
    assert missing.status_code == 401


async def test_signout_expires_cookie(client, owner):
    response = await client.post("/api/v1/auth/signout")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert "refresh_token=" in response.headers["set-cookie"]
    assert "Max-Age=0" in response.headers["set-cookie"]


async def test_me_without_farm_header(client, owner):
    headers = {"Authorization": owner["headers"]["Authorization"]}
    response = await client.get("/api/v1/me", headers=headers)
    assert response.status_code == 200
    assert response.json()["email"] == "owner@example.com"


@pytest.mark.parametrize(
    ("headers", "status_code"),
    [
        ({"X-Farm-ID": str(uuid4())}, 401),
        ({"Authorization": "Token abc", "X-Farm-ID": str(uuid4())}, 401),
        ({"Authorization": "Bearer not-a-jwt", "X-Farm-ID": str(uuid4())}, 401),
    ],
)
async def test_requests_without_valid_token_rejected(client, headers, status_code):
    response = await client.get("/api/v1/animals", headers=headers)
    assert response.status_code == status_code
    assert response.json()["code"] == "auth_error"


async def test_farm_header_required_and_scoped(client, owner, signup_as):
    token_only = {"Authorization": owner["headers"]["Authorization"]}
    missing = await client.get("/api/v1/animals", headers=token_only)
    assert missing.status_code == 403

    invalid = await client.get("/api/v1/animals", headers={**token_only, "X-Farm-ID": "x"})
    assert invalid.status_code == 403

    other = await signup_as(client, email="neighbour@example.com", farm_name="Hill Top")
    foreign = {**token_only, "X-Farm-ID": other["profile"]["farm_ids"][0]}
    response = await client.get("/api/v1/animals", headers=foreign)
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


async def test_password_reset_flow(app, client, owner):
    outbox = app.state.email_service
    unknown = await client.post("/api/v1/auth/reset-password", json={"email": "ghost@example.com"})
    assert unknown.status_code == 202
    assert outbox.sent == []

    accepted = await client.post("/api/v1/auth/reset-password", json={"email": "owner@example.com"})
    assert accepted.status_code == 202
    assert accepted.json() == {"status": "accepted"}
    message = outbox.sent[-1]
    assert list(message.to) == ["owner@example.com"]
    token = message.text.split("choose a new one: ", 1)[1].split()[0]

    confirm = await client.post(
        "/api/v1/auth/reset-password/confirm", json={"token": token, "new_password": "fresh-pass"}
    )
    assert confirm.status_code == 200
    assert confirm.json() == {"status": "password_changed"}

    reused = await client.post(
        "/api/v1/auth/reset-password/confirm", json={"token": token, "new_password": "again-pass"}
    )
    assert reused.status_code == 401

    signin = await client.post(
        "/api/v1/auth/signin", json={"email": "owner@example.com", "password": "fresh-pass"}
    )
    assert signin.status_code == 200


async def test_health_is_public(client):
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
