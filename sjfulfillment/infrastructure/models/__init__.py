"""ORM models used by the application infrastructure."""

from .merchant import MerchantModel
from .notification import NotificationModel, NotificationReadModel
from .role import RoleModel
from .user import UserModel
from .webhook import WebhookLogModel, WebhookModel

__all__ = [
    "MerchantModel",
    "NotificationModel",
    "NotificationReadModel",
    "RoleModel",
    "UserModel",
    "WebhookLogModel",
    "WebhookModel",
]
