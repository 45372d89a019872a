"""Domain entities describing notifications and their audience."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationType(str, Enum):
    """Business category of a notification."""

    ORDER_CREATED = "ORDER_CREATED"
    ORDER_UPDATED = "ORDER_UPDATED"
    ORDER_DELIVERED = "ORDER_DELIVERED"
    ORDER_CANCELLED = "ORDER_CANCELLED"
    STOCK_LOW = "STOCK_LOW"
    STOCK_OUT = "STOCK_OUT"
    PRODUCT_CREATED = "PRODUCT_CREATED"
    PRODUCT_UPDATED = "PRODUCT_UPDATED"
    MERCHANT_REGISTERED = "MERCHANT_REGISTERED"
    MERCHANT_APPROVED = "MERCHANT_APPROVED"
    MERCHANT_SUSPENDED = "MERCHANT_SUSPENDED"
    PAYMENT_RECEIVED = "PAYMENT_RECEIVED"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    RETURN_REQUESTED = "RETURN_REQUESTED"
    RETURN_APPROVED = "RETURN_APPROVED"
    RETURN_REJECTED = "RETURN_REJECTED"
    WAREHOUSE_ALERT = "WAREHOUSE_ALERT"
    SYSTEM_ALERT = "SYSTEM_ALERT"
    BILLING_ALERT = "BILLING_ALERT"
    SUBSCRIPTION_EXPIRED = "SUBSCRIPTION_EXPIRED"
    SUBSCRIPTION_RENEWED = "SUBSCRIPTION_RENEWED"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


DEFAULT_PRIORITY = NotificationPriority.MEDIUM


@dataclass(frozen=True)
class NotificationTarget:
    """Audience of a notification; exactly one attribute is set."""

    recipient_id: int | None = None
    recipient_role: str | None = None
    is_global: bool = False

    def describe(self) -> str:
        if self.is_global:
            return "Global"
        if self.recipient_role is not None:
            return f"role {self.recipient_role}"
        return f"user {self.recipient_id}"


@dataclass
class Notification:
    """Message addressed to a user, a role or everybody."""

    id: int | None
    title: str
    message: str
    type: NotificationType
    priority: NotificationPriority
    target: NotificationTarget
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: datetime | None = None

    @property
    def recipient_id(self) -> int | None:
        return self.target.recipient_id

    @property
    def recipient_role(self) -> str | None:
        return self.target.recipient_role

    @property
    def is_global(self) -> bool:
        return self.target.is_global


@dataclass
class InboxEntry:
    """A notification as seen by one user, including that user's read state."""

    notification: Notification
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None


@dataclass
class InboxPage:
    entries: list[InboxEntry]
    unread_count: int
    total: int
    limit: int
    offset: int


__all__ = [
    "DEFAULT_PRIORITY",
    "InboxEntry",
    "InboxPage",
    "Notification",
    "NotificationPriority",
    "NotificationTarget",
    "NotificationType",
]
