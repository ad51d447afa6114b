from __future__ import annotations

from datetime import date
from uuid import uuid4

import pytest

from src.application.notifications.factory import build_notification, notification_for_alert
from src.application.notifications.types import NotificationType
from src.domain.services.dose_status import DoseAlert, DoseStatus


def _alert(status: DoseStatus, days: int, tag: str = "COW-12") -> DoseAlert:
    return DoseAlert(
        record_id=uuid4(),
        animal_id=uuid4(),
        animal_tag=tag,
        status=status,
        days_remaining=days,
        message=f"Apply treatment to {tag}",
    )


def test_overdue_alert_notification():
    alert = _alert(DoseStatus.OVERDUE, -4, tag="A-VERY-LONG-TAG-NAME-123")
    built = notification_for_alert(alert, today=date(2024, 6, 3))
    assert built.type == NotificationType.DOSE_OVERDUE
    assert built.title == "Dose overdue (A-VERY-LONG-T...)"
    assert built.message == alert.message
    assert built.data["days_remaining"] == -4
    assert built.data["status"] == "overdue"


def test_due_today_notification_mentions_date():
    built = notification_for_alert(_alert(DoseStatus.DUE_TODAY, 0), today=date(2024, 6, 3))
    assert built.type == NotificationType.DOSE_DUE_TODAY
    assert built.title == "Dose due today Mon 03 Jun"
    assert built.data["animal_tag"] == "COW-12"


def test_unknown_type_rejected():
    with pytest.raises(ValueError):
        build_notification("weaning_due")
