"""Use cases that record read receipts."""

import logging
from datetime import datetime

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import User
from sjfulfillment.domain.errors import NotFoundError
from sjfulfillment.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def mark_all_as_read(session: Session, user: User) -> int:
    """Mark every notification visible to ``user`` as read.

    Returns how many notifications changed state, so a repeated call returns 0.
    """

    count = NotificationRepository(session).mark_all_as_read(
        user.id, user.role.alias.upper()
    )
    logger.info("Marked %s notifications as read for user %s", count, user.id)
    return count


def mark_as_read(session: Session, user: User, notification_id: int) -> datetime:
    repository = NotificationRepository(session)
    notification = repository.get_visible(
        notification_id, user_id=user.id, role=user.role.alias.upper()
    )
    if notification is None:
        raise NotFoundError("Notification not found")
    return repository.mark_as_read(notification_id, user_id=user.id)


__all__ = ["mark_all_as_read", "mark_as_read"]
