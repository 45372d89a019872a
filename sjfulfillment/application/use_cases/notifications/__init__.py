"""Use cases for creating, listing and reading notifications."""

from . import templates
from .create_notification import (
    create_direct_notification,
    create_for_target,
    create_global_notification,
    create_notification,
    create_role_notification,
)
from .debug import (
    NotificationDebugInfo,
    create_test_notification,
    get_notification_debug_info,
)
from .list_notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    get_total_count,
    get_unread_count,
    get_user_notifications,
)
from .mark_read import mark_all_as_read, mark_as_read
from .targeting import resolve_broadcast_target, resolve_target

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "NotificationDebugInfo",
    "create_direct_notification",
    "create_for_target",
    "create_global_notification",
    "create_notification",
    "create_role_notification",
    "create_test_notification",
    "get_notification_debug_info",
    "get_total_count",
    "get_unread_count",
    "get_user_notifications",
    "mark_all_as_read",
    "mark_as_read",
    "resolve_broadcast_target",
    "resolve_target",
    "templates",
]
