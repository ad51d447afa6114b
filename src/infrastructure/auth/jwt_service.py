from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping
from uuid import UUID

from jose import jwt
from jose.exceptions import JWTError

from src.application.errors import AuthError


class JWTService:
    def __init__(
        self,
        *,
        secret_key: str,
        algorithm: str,
        access_token_expires_minutes: int,
        refresh_token_expires_days: int = 30,
        reset_token_expires_minutes: int = 30,
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.access_token_expires_minutes = access_token_expires_minutes
        self.refresh_token_expires_days = refresh_token_expires_days
        self.reset_token_expires_minutes = reset_token_expires_minutes
        self.issuer = issuer
        self.audience = audience

    def _encode(
        self,
        subject: UUID,
        typ: str,
        lifetime: timedelta,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        now = datetime.now(timezone.utc)
        to_encode: dict[str, Any] = {
            "sub": str(subject),
            "iat": int(now.timestamp()),
            "exp": int((now + lifetime).timestamp()),
            "typ": typ,
        }
        if self.issuer:
            to_encode["iss"] = self.issuer
        if self.audience:
            to_encode["aud"] = self.audience
        if extra_claims:
            to_encode.update(extra_claims)
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def create_access_token(
        self,
        *,
        subject: UUID,
        extra_claims: Mapping[str, Any] | None = None,
    ) -> str:
        return self._encode(
            subject, "access", timedelta(minutes=self.access_token_expires_minutes), extra_claims
        )

    def create_refresh_token(self, *, subject: UUID) -> str:
        return self._encode(subject, "refresh", timedelta(days=self.refresh_token_expires_days))

    def create_reset_token(self, *, subject: UUID, password_fingerprint: str) -> str:
        # The fingerprint ties the token to the current password hash, so it is single-use
        return self._encode(
            subject,
            "reset",
            timedelta(minutes=self.reset_token_expires_minutes),
            {"pwd": password_fingerprint},
        )

    def decode(self, token: str, *, expected_type: str | None = "access") -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
            )
        except JWTError as exc:
            raise AuthError("Token validation failed") from exc
        if expected_type is not None and claims.get("typ") != expected_type:
            raise AuthError(f"Invalid {expected_type} token")
        return claims

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self.decode(token, expected_type="refresh")

    def decode_reset(self, token: str) -> dict[str, Any]:
        return self.decode(token, expected_type="reset")
