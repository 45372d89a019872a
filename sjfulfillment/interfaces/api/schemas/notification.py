"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import Field

from sjfulfillment.domain.entities import (
    DEFAULT_PRIORITY,
    InboxEntry,
    Notification,
    NotificationPriority,
    NotificationType,
)

from .base import CamelModel


class NotificationCreate(CamelModel):
    """Admin broadcast addressed to a role or to every user."""

    title: str = Field(..., min_length=1, max_length=200)
    message: str = Field(..., min_length=1)
    type: NotificationType
    priority: NotificationPriority = DEFAULT_PRIORITY
    recipient_role: str | None = None
    is_global: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)


class NotificationRead(CamelModel):
    id: int
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    recipient_id: int | None = None
    recipient_role: str | None = None
    is_global: bool = False
    metadata: dict[str, Any] = Field(default_factory=dict)
    created_at: datetime | None = None
    is_read: bool = False
    read_at: datetime | None = None

    @classmethod
    def from_entity(
        cls, notification: Notification, *, read_at: datetime | None = None
    ) -> "NotificationRead":
        return cls(
            id=notification.id or 0,
            title=notification.title,
            message=notification.message,
            type=notification.type,
            priority=notification.priority,
            recipient_id=notification.recipient_id,
            recipient_role=notification.recipient_role,
            is_global=notification.is_global,
            metadata=notification.metadata or {},
            created_at=notification.created_at,
            is_read=read_at is not None,
            read_at=read_at,
        )

    @classmethod
    def from_inbox_entry(cls, entry: InboxEntry) -> "NotificationRead":
        return cls.from_entity(entry.notification, read_at=entry.read_at)


class NotificationList(CamelModel):
    notifications: list[NotificationRead]
    unread_count: int
    total: int
    limit: int
    offset: int


class MarkAllReadResult(CamelModel):
    count: int


class MarkReadResult(CamelModel):
    id: int
    is_read: bool = True
    read_at: datetime


class NotificationDebugRead(CamelModel):
    total_count: int
    recent_notifications: list[NotificationRead]
