from __future__ import annotations


class NotificationType:
    """Canonical notification type names shared with clients."""

    DOSE_DUE_TODAY = "dose_due_today"
    DOSE_OVERDUE = "dose_overdue"


ALL_TYPES = {
    NotificationType.DOSE_DUE_TODAY,
    NotificationType.DOSE_OVERDUE,
}
