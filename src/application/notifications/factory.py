from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from src.domain.services.dose_status import DoseAlert, DoseStatus
from src.utils.datetime_tz import format_day_date

from .types import NotificationType


@dataclass
class BuiltNotification:
    type: str
    title: str
    message: str
    data: dict[str, Any]


def _short_label(s: str | None, *, max_len: int = 16) -> str | None:
    if not s:
        return s
    s = str(s)
    return s if len(s) <= max_len else (s[: max(0, max_len - 3)] + "...")


def build_notification(ntype: str, **kwargs: Any) -> BuiltNotification:
    """Build notification title/message/data from its type and context."""
    if ntype in (NotificationType.DOSE_DUE_TODAY, NotificationType.DOSE_OVERDUE):
        alert: DoseAlert = kwargs["alert"]
        today = kwargs.get("today")
        tag = _short_label(alert.animal_tag)
        if ntype == NotificationType.DOSE_OVERDUE:
            title = f"Dose overdue ({tag})"
        else:
            title = f"Dose due today {format_day_date(today)}".rstrip()
        data = {
            "health_record_id": str(alert.record_id),
            "animal_id": str(alert.animal_id),
            "animal_tag": alert.animal_tag,
            "status": alert.status.value,
            "days_remaining": alert.days_remaining,
        }
        return BuiltNotification(ntype, title, alert.message, data)
    raise ValueError(f"Unknown notification type: {ntype}")


def notification_for_alert(alert: DoseAlert, *, today: Any = None) -> BuiltNotification:
    ntype = (
        NotificationType.DOSE_OVERDUE
        if alert.status is DoseStatus.OVERDUE
        else NotificationType.DOSE_DUE_TODAY
    )
    return build_notification(ntype, alert=alert, today=today)
