from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Sequence


@dataclass(slots=True)
class EmailMessage:
    subject: str
    to: Sequence[str]
    text: str | None = None
    html: str | None = None
    from_email: str | None = None
    from_name: str | None = None

    def addressed(self, to: Sequence[str], *, from_email: str, from_name: str) -> EmailMessage:
        return replace(self, to=list(to), from_email=from_email, from_name=from_name)


class EmailService:
    async def send(self, message: EmailMessage) -> None:  # pragma: no cover - interface
        raise NotImplementedError
