"""Use cases for creating notifications."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import (
    DEFAULT_PRIORITY,
    Notification,
    NotificationPriority,
    NotificationTarget,
    NotificationType,
    UserRole,
)
from sjfulfillment.domain.errors import UnexpectedError, ValidationError
from sjfulfillment.infrastructure.repositories import NotificationRepository
from sjfulfillment.utils import now_in_app_timezone

from .targeting import resolve_target

logger = logging.getLogger(__name__)


def _require_text(value: str | None, field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field} is required")
    return str(value).strip()


def _parse_type(value: str | NotificationType | None) -> NotificationType:
    if isinstance(value, NotificationType):
        return value
    raw = _require_text(value, "type").upper()
    try:
        return NotificationType(raw)
    except ValueError:
        raise ValidationError(f"Unknown notification type: {value}") from None


def _parse_priority(value: str | NotificationPriority | None) -> NotificationPriority:
    if value is None:
        return DEFAULT_PRIORITY
    if isinstance(value, NotificationPriority):
        return value
    try:
        return NotificationPriority(str(value).strip().upper())
    except ValueError:
        raise ValidationError(f"Unknown notification priority: {value}") from None


def _persist(session: Session, notification: Notification) -> Notification:
    try:
        saved = NotificationRepository(session).create(notification)
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("Could not store notification %r", notification.title)
        raise UnexpectedError("Failed to create notification") from exc
    logger.info("Notification created: %s for %s", saved.id, saved.target.describe())
    return saved


def create_notification(
    session: Session,
    *,
    title: str,
    message: str,
    type: str | NotificationType,
    priority: str | NotificationPriority | None = None,
    recipient_id: int | None = None,
    recipient_role: str | UserRole | None = None,
    is_global: bool = False,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    """Validate and store a notification addressed to exactly one audience."""

    notification = Notification(
        id=None,
        title=_require_text(title, "title"),
        message=_require_text(message, "message"),
        type=_parse_type(type),
        priority=_parse_priority(priority),
        target=resolve_target(
            recipient_id=recipient_id,
            recipient_role=recipient_role,
            is_global=is_global,
        ),
        metadata=dict(metadata or {}),
        created_at=now_in_app_timezone(),
    )
    return _persist(session, notification)


def create_for_target(
    session: Session,
    target: NotificationTarget,
    *,
    title: str,
    message: str,
    type: str | NotificationType,
    priority: str | NotificationPriority | None = None,
    metadata: Mapping[str, Any] | None = None,
) -> Notification:
    """Create a notification for an already resolved ``target``."""

    return create_notification(
        session,
        title=title,
        message=message,
        type=type,
        priority=priority,
        recipient_id=target.recipient_id,
        recipient_role=target.recipient_role,
        is_global=target.is_global,
        metadata=metadata,
    )


def create_role_notification(
    session: Session, *, recipient_role: str | UserRole, **fields: Any
) -> Notification:
    return create_notification(session, recipient_role=recipient_role, **fields)


def create_global_notification(session: Session, **fields: Any) -> Notification:
    return create_notification(session, is_global=True, **fields)


def create_direct_notification(
    session: Session, *, recipient_id: int, **fields: Any
) -> Notification:
    return create_notification(session, recipient_id=recipient_id, **fields)


__all__ = [
    "create_direct_notification",
    "create_for_target",
    "create_global_notification",
    "create_notification",
    "create_role_notification",
]
