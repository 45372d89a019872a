from .auth import Token
from .base import ApiResponse, CamelModel
from .notification import (
    MarkAllReadResult,
    MarkReadResult,
    NotificationCreate,
    NotificationDebugRead,
    NotificationList,
    NotificationRead,
)
from .stock import StockAlertBatch, StockAlertItem, StockAlertSummaryRead
from .webhook import WebhookDeliveryRead

__all__ = [
    "ApiResponse",
    "CamelModel",
    "MarkAllReadResult",
    "MarkReadResult",
    "NotificationCreate",
    "NotificationDebugRead",
    "NotificationList",
    "NotificationRead",
    "StockAlertBatch",
    "StockAlertItem",
    "StockAlertSummaryRead",
    "Token",
    "WebhookDeliveryRead",
]
