from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date

from fastapi import Depends, Request

from src.application.errors import AuthError, PermissionDenied
from src.application.services.farm_data_provider import FarmDataProvider, FarmDataRegistry
from src.config.settings import Settings, get_settings
from src.infrastructure.auth.context import AuthContext
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.reports.report_service import ProductionReportService
from src.utils.datetime_tz import today_in


async def get_auth_context(request: Request) -> AuthContext:
    context = getattr(request.state, "auth_context", None)
    if context is None:
        raise AuthError("Authentication required")
    return context


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


def get_registry(request: Request) -> FarmDataRegistry:
    registry = getattr(request.app.state, "farm_registry", None)
    if registry is None:
        raise RuntimeError("Farm registry not configured")
    return registry


async def get_provider(
    context: AuthContext = Depends(get_auth_context),
    registry: FarmDataRegistry = Depends(get_registry),
) -> FarmDataProvider:
    """Loaded data provider for the farm selected by the request."""
    if context.farm_id is None:
        raise PermissionDenied("Missing farm header")
    return await registry.get(context.farm_id)


def get_today(settings: Settings = Depends(get_app_settings)) -> date:
    return today_in(settings.timezone)


def get_password_hasher(request: Request) -> PasswordHasher:
    hasher = getattr(request.app.state, "password_hasher", None)
    if hasher is None:
        raise RuntimeError("Password hasher not configured")
    return hasher


def get_jwt_service(request: Request) -> JWTService:
    service = getattr(request.app.state, "jwt_service", None)
    if service is None:
        raise RuntimeError("JWT service not configured")
    return service


def get_email_service(request: Request) -> EmailService:
    service = getattr(request.app.state, "email_service", None)
    if service is None:
        raise RuntimeError("Email service not configured")
    return service


def get_email_renderer(request: Request) -> EmailTemplateRenderer:
    renderer = getattr(request.app.state, "email_renderer", None)
    if renderer is None:
        raise RuntimeError("Email renderer not configured")
    return renderer


def get_report_service(request: Request) -> ProductionReportService:
    service = getattr(request.app.state, "report_service", None)
    if service is None:
        raise RuntimeError("Report service not configured")
    return service
