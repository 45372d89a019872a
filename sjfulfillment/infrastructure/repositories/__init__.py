"""Repository implementations for infrastructure layer."""

from .merchant_repository import MerchantRepository
from .notification_repository import NotificationRepository
from .role_repository import RoleRepository
from .user_repository import UserRepository
from .webhook_repository import WebhookRepository

__all__ = [
    "MerchantRepository",
    "NotificationRepository",
    "RoleRepository",
    "UserRepository",
    "WebhookRepository",
]
