from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from jinja2 import DictLoader, Environment, TemplateNotFound, select_autoescape

from src.config.settings import Settings
from src.infrastructure.email.models import EmailMessage

_TEMPLATES = {
    "password_reset/subject.txt.j2": "{{ app.name }}: reset your password",
    "password_reset/body.txt.j2": (
        "Hello {{ display_name }},\n\n"
        "We received a request to reset your password.\n"
        "{% if reset_url %}Open this link to choose a new one: {{ reset_url }}\n"
        "{% else %}Use this code to choose a new one: {{ token }}\n{% endif %}"
        "The link expires in {{ expires_minutes }} minutes.\n\n"
        "If you did not ask for this, you can ignore this email.\n"
    ),
    "password_reset/body.html.j2": (
        "<p>Hello {{ display_name }},</p>"
        "<p>We received a request to reset your password.</p>"
        "{% if reset_url %}<p><a href=\"{{ reset_url }}\">Choose a new password</a></p>"
        "{% else %}<p>Reset code: <code>{{ token }}</code></p>{% endif %}"
        "<p>The link expires in {{ expires_minutes }} minutes.</p>"
    ),
}


@dataclass(slots=True)
class EmailTemplateRenderer:
    env: Environment

    @classmethod
    def create_default(cls) -> EmailTemplateRenderer:
        env = Environment(
            loader=DictLoader(_TEMPLATES),
            autoescape=select_autoescape(["html.j2", "html"], default_for_string=False),
            enable_async=False,
        )
        return cls(env=env)

    def render(
        self,
        *,
        template_key: str,
        settings: Settings,
        context: dict[str, Any],
    ) -> EmailMessage:
        ctx = {"app": {"name": settings.email_from_name}, **context}
        subject = self.env.get_template(f"{template_key}/subject.txt.j2").render(ctx).strip()
        text = self.env.get_template(f"{template_key}/body.txt.j2").render(ctx).strip()
        try:
            html = self.env.get_template(f"{template_key}/body.html.j2").render(ctx)
        except TemplateNotFound:
            html = None
        return EmailMessage(subject=subject, to=[], text=text, html=html)
