from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from functools import partial

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.application.services.farm_data_provider import FarmDataRegistry
from src.config.settings import Settings, get_settings
from src.domain.services.dashboard import WeekStart
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer
from src.infrastructure.reports.pdf_generator import PDFGenerator
from src.infrastructure.reports.report_service import ProductionReportService
from src.infrastructure.scheduler.dose_reminders import run_dose_reminder_loop
from src.interfaces.http.deps import get_app_settings
from src.interfaces.http.routers import (
    animals,
    dashboard,
    farm,
    genealogy,
    health_records,
    production_records,
    reports,
)
from src.interfaces.http.routers import auth as auth_router
from src.interfaces.middleware.auth_middleware import AuthMiddleware
from src.interfaces.middleware.error_handler import register_error_handlers
from src.utils.datetime_tz import resolve_tz, today_in

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    reminder_task = None
    if settings.dose_reminder_interval_seconds > 0:
        reminder_task = asyncio.create_task(
            run_dose_reminder_loop(
                app.state.farm_registry,
                interval_seconds=settings.dose_reminder_interval_seconds,
                clock=partial(today_in, settings.timezone),
            )
        )
        logger.info(
            "Dose reminder poll started (every %ss)", settings.dose_reminder_interval_seconds
        )
    try:
        yield
    finally:
        if reminder_task is not None:
            reminder_task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await reminder_task
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    password_hasher: PasswordHasher | None = None,
    jwt_service: JWTService | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Herd Dashboard API",
        version="0.1.0",
        description="Livestock records, production rollups and dose reminders per farm",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.password_hasher = password_hasher or PasswordHasher()
    app.state.jwt_service = jwt_service or JWTService(
        secret_key=settings.jwt_secret_key.get_secret_value(),
        algorithm=settings.jwt_algorithm,
        access_token_expires_minutes=settings.jwt_access_token_expires_minutes,
        refresh_token_expires_days=settings.jwt_refresh_token_expires_days,
        reset_token_expires_minutes=settings.jwt_reset_token_expires_minutes,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
    )
    # Email delivery is logged only; messages are kept in memory
    app.state.email_service = LoggingEmailService()
    app.state.email_renderer = EmailTemplateRenderer.create_default()
    app.state.report_service = ProductionReportService(PDFGenerator())

    session_factory = app.state.session_factory
    app.state.farm_registry = FarmDataRegistry(
        lambda: SQLAlchemyUnitOfWork(session_factory),
        clock=partial(today_in, settings.timezone),
        tz=resolve_tz(settings.timezone),
        week_start=WeekStart.parse(settings.week_start),
        recent_limit=settings.recent_health_limit,
        upcoming_limit=settings.upcoming_doses_limit,
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(auth_router.router)
    api.include_router(farm.router)
    api.include_router(animals.router)
    api.include_router(health_records.router)
    api.include_router(production_records.router)
    api.include_router(genealogy.router)
    api.include_router(dashboard.router)
    api.include_router(reports.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    # Add Auth first, then CORS last so CORS runs outermost and can handle preflight OPTIONS
    app.add_middleware(AuthMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
