from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str
    farm_header: str = "X-Farm-ID"
    log_level: str = "INFO"
    environment: str = "dev"
    jwt_secret_key: SecretStr
    jwt_algorithm: str = "HS256"
    jwt_access_token_expires_minutes: int = 60
    jwt_refresh_token_expires_days: int = 30
    jwt_reset_token_expires_minutes: int = 30
    jwt_issuer: str | None = None
    jwt_audience: str | None = None
    # CORS
    cors_allow_origins: str = "*"
    # Email
    email_provider: str = "logging"
    email_from_name: str = "Herd Dashboard"
    email_from_address: str = "no-reply@herd-dashboard.local"
    email_reset_url_base: str | None = None
    # Auth cookies (for refresh token)
    cookie_samesite: str = "lax"  # options: 'lax', 'none', 'strict'
    cookie_secure: bool = False  # set True when served over HTTPS
    # Dashboard
    timezone: str = "UTC"  # farm-local calendar for "today"
    week_start: str = "sunday"  # sunday | monday
    recent_health_limit: int = 5
    upcoming_doses_limit: int = 8
    # Dose reminders (0 disables the background poll)
    dose_reminder_interval_seconds: float = 60.0

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_asyncpg_scheme(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        return value

    @field_validator("week_start")
    @classmethod
    def ensure_week_start(cls, value: str) -> str:
        normalized = value.strip().lower()
        if normalized not in {"sunday", "monday"}:
            raise ValueError("week_start must be 'sunday' or 'monday'")
        return normalized

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
