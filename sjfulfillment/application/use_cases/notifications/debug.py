"""Operational helpers used by the admin debug endpoints."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    User,
)
from sjfulfillment.infrastructure.repositories import NotificationRepository
from sjfulfillment.utils import now_in_app_timezone

from .create_notification import create_direct_notification

RECENT_LIMIT = 10


@dataclass
class NotificationDebugInfo:
    total_count: int
    recent: list[Notification]


def get_notification_debug_info(session: Session) -> NotificationDebugInfo:
    """Return the number of stored notifications and the most recent ones."""

    repository = NotificationRepository(session)
    return NotificationDebugInfo(
        total_count=repository.count(),
        recent=list(repository.list_recent(limit=RECENT_LIMIT)),
    )


def create_test_notification(session: Session, user: User) -> Notification:
    """Send a direct notification to ``user`` to check delivery end to end."""

    return create_direct_notification(
        session,
        recipient_id=user.id,
        title="Test Notification",
        message="This is a test notification to verify the system is working",
        type=NotificationType.SYSTEM_ALERT,
        priority=NotificationPriority.MEDIUM,
        metadata={"test": True, "createdAt": now_in_app_timezone().isoformat()},
    )


__all__ = [
    "NotificationDebugInfo",
    "create_test_notification",
    "get_notification_debug_info",
]
