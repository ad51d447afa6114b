from __future__ import annotations

import logging

from src.application.interfaces.unit_of_work import UnitOfWork
from src.config.settings import Settings
from src.infrastructure.auth.jwt_service import JWTService
from src.infrastructure.auth.password import PasswordHasher
from src.infrastructure.email.models import EmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer

logger = logging.getLogger(__name__)


async def execute(
    *,
    uow: UnitOfWork,
    email: str,
    jwt_service: JWTService,
    email_service: EmailService,
    renderer: EmailTemplateRenderer,
    settings: Settings,
) -> None:
    """Email a reset token when the account exists; silent otherwise."""
    user = await uow.users.get_by_email(email.strip().lower())
    if not user or not user.is_active:
        logger.info("Password reset requested for unknown account")
        return
    token = jwt_service.create_reset_token(
        subject=user.id, password_fingerprint=PasswordHasher.fingerprint(user.hashed_password)
    )
    reset_url = None
    if settings.email_reset_url_base:
        reset_url = f"{settings.email_reset_url_base.rstrip('/')}?token={token}"
    message = renderer.render(
        template_key="password_reset",
        settings=settings,
        context={
            "display_name": user.profile_name,
            "reset_url": reset_url,
            "token": token,
            "expires_minutes": settings.jwt_reset_token_expires_minutes,
        },
    )
    await email_service.send(
        message.addressed(
            [user.email],
            from_email=settings.email_from_address,
            from_name=settings.email_from_name,
        )
    )
