from __future__ import annotations

import logging

from src.infrastructure.email.models import EmailMessage, EmailService

logger = logging.getLogger(__name__)


class LoggingEmailService(EmailService):
    """Writes outgoing mail to the log; keeps the last messages for inspection."""

    def __init__(self, keep: int = 20) -> None:
        self.keep = keep
        self.sent: list[EmailMessage] = []

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Sending email (logging provider): subject=%s to=%s from=%s <%s> text_len=%s html_len=%s",
            message.subject,
            ",".join(message.to),
            message.from_name or "",
            message.from_email or "",
            len(message.text or ""),
            len(message.html or ""),
        )
        self.sent.append(message)
        del self.sent[: -self.keep]
