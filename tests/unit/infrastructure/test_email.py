from __future__ import annotations

import logging

from src.config.settings import Settings
from src.infrastructure.email.models import EmailMessage
from src.infrastructure.email.providers.logging_provider import LoggingEmailService
from src.infrastructure.email.renderer.engine import EmailTemplateRenderer


def _settings() -> Settings:
    return Settings(
        database_url="sqlite+aiosqlite://",
        jwt_secret_key="x",
        email_from_name="Herd",
    )


def test_password_reset_with_link():
    message = EmailTemplateRenderer.create_default().render(
        template_key="password_reset",
        settings=_settings(),
        context={
            "display_name": "Ana <b>",
            "reset_url": "https://app.test/reset?token=abc",
            "token": "abc",
            "expires_minutes": 30,
        },
    )
    assert message.subject == "Herd: reset your password"
    assert "https://app.test/reset?token=abc" in message.text
    assert "Hello Ana <b>," in message.text
    assert "Ana &lt;b&gt;" in message.html


def test_password_reset_without_link_shows_code():
    message = EmailTemplateRenderer.create_default().render(
        template_key="password_reset",
        settings=_settings(),
        context={"display_name": "Ana", "reset_url": None, "token": "abc", "expires_minutes": 5},
    )
    assert "Use this code to choose a new one: abc" in message.text
    assert "<code>abc</code>" in message.html


async def test_logging_provider_keeps_recent_messages(caplog):
    service = LoggingEmailService(keep=2)
    with caplog.at_level(logging.INFO):
        for n in range(3):
            await service.send(EmailMessage(subject=f"s{n}", to=["a@b.test"], text="hi"))
    assert [m.subject for m in service.sent] == ["s1", "s2"]
    assert "subject=s2" in caplog.text
