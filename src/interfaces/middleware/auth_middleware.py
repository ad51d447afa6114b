from __future__ import annotations

from typing import Iterable
from uuid import UUID

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from src.application.errors import AuthError, PermissionDenied
from src.config.settings import Settings
from src.infrastructure.auth.context import (
    AuthContext,
    ensure_farm_access,
    fetch_farm_ids,
    fetch_user,
)

PUBLIC_PATHS: Iterable[str] = (
    "/api/v1/health",
    "/api/v1/auth/signup",
    "/api/v1/auth/signin",
    "/api/v1/auth/signout",
    "/api/v1/auth/refresh",
    "/api/v1/auth/reset-password",
    "/docs",
    "/openapi.json",
    "/redoc",
)

# Authenticated paths that do not need a farm selected
FARMLESS_PATHS: Iterable[str] = ("/api/v1/me",)


def _matches(path: str, prefixes: Iterable[str]) -> bool:
    return any(path == prefix or path.startswith(prefix + "/") for prefix in prefixes)


def _bearer_token(authorization: str | None) -> str:
    if not authorization:
        raise AuthError("Missing Authorization header")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token:
        raise AuthError("Invalid Authorization header")
    return token


def _subject(claims: dict) -> UUID:
    subject = claims.get("sub")
    if not subject:
        raise AuthError("Token missing subject")
    try:
        return UUID(str(subject))
    except ValueError as exc:
        raise AuthError("Token subject is not a valid UUID") from exc


class AuthMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, *, settings: Settings) -> None:
        super().__init__(app)
        self.settings = settings

    async def dispatch(self, request: Request, call_next) -> Response:
        # Let CORS preflight pass without auth checks
        if request.method == "OPTIONS" or _matches(request.url.path, PUBLIC_PATHS):
            return await call_next(request)
        try:
            request.state.auth_context = await self._authenticate(request)
        except (AuthError, PermissionDenied) as exc:
            return JSONResponse(status_code=exc.status_code, content=exc.to_payload())
        return await call_next(request)

    async def _authenticate(self, request: Request) -> AuthContext:
        token = _bearer_token(request.headers.get("Authorization"))
        farm_id = self._farm_id(request)
        state = request.app.state
        claims = state.jwt_service.decode(token)
        user_id = _subject(claims)
        async with state.session_factory() as session:
            user = await fetch_user(session, user_id)
            if not user or not user.is_active:
                raise AuthError("Inactive or missing user")
            farm_ids = await fetch_farm_ids(session, user_id)
        if farm_id is not None:
            ensure_farm_access(farm_ids, farm_id)
        return AuthContext(
            user_id=user_id,
            email=user.email,
            farm_id=farm_id,
            role=user.role,
            farm_ids=farm_ids,
            claims=claims,
            display_name=user.display_name,
        )

    def _farm_id(self, request: Request) -> UUID | None:
        farm_value = request.headers.get(self.settings.farm_header)
        if not farm_value:
            if _matches(request.url.path, FARMLESS_PATHS):
                return None
            raise PermissionDenied("Missing farm header")
        try:
            return UUID(farm_value)
        except ValueError as exc:
            raise PermissionDenied("Invalid farm identifier") from exc
