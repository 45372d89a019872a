"""Domain entities exposed by the application."""

from .merchant import Merchant
from .notification import (
    DEFAULT_PRIORITY,
    InboxEntry,
    InboxPage,
    Notification,
    NotificationPriority,
    NotificationTarget,
    NotificationType,
)
from .role import ALL_ROLES, Role, UserRole
from .stock import CRITICAL_STOCK_LEVEL, StockAlert
from .user import User
from .webhook import (
    TEST_EVENT,
    Webhook,
    WebhookDeliveryJob,
    WebhookDeliveryResult,
    WebhookEvents,
    WebhookLog,
)

__all__ = [
    "ALL_ROLES",
    "CRITICAL_STOCK_LEVEL",
    "DEFAULT_PRIORITY",
    "InboxEntry",
    "InboxPage",
    "Merchant",
    "Notification",
    "NotificationPriority",
    "NotificationTarget",
    "NotificationType",
    "Role",
    "StockAlert",
    "TEST_EVENT",
    "User",
    "UserRole",
    "Webhook",
    "WebhookDeliveryJob",
    "WebhookDeliveryResult",
    "WebhookEvents",
    "WebhookLog",
]
