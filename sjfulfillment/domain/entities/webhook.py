"""Domain entities for merchant webhook registrations and deliveries."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

TEST_EVENT = "test.webhook"


class WebhookEvents:
    """Event names merchants can subscribe to."""

    ORDER_CREATED = "order.created"
    ORDER_UPDATED = "order.updated"
    ORDER_STATUS_CHANGED = "order.status_changed"
    ORDER_DELIVERED = "order.delivered"
    ORDER_CANCELLED = "order.cancelled"

    PRODUCT_CREATED = "product.created"
    PRODUCT_UPDATED = "product.updated"
    PRODUCT_DELETED = "product.deleted"

    INVENTORY_UPDATED = "inventory.updated"
    LOW_STOCK_ALERT = "inventory.low_stock"
    OUT_OF_STOCK = "inventory.out_of_stock"

    PAYMENT_RECEIVED = "payment.received"
    PAYMENT_FAILED = "payment.failed"

    RETURN_CREATED = "return.created"
    RETURN_PROCESSED = "return.processed"


@dataclass
class Webhook:
    """Merchant-owned endpoint that receives event payloads."""

    id: int | None
    merchant_id: int
    name: str
    url: str
    secret: str
    events: list[str] = field(default_factory=list)
    is_active: bool = True
    last_triggered: datetime | None = None
    success_count: int = 0
    failure_count: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def accepts(self, event: str) -> bool:
        """Return ``True`` when the registration listens to ``event``.

        An empty subscription list means every event is accepted.
        """

        return not self.events or event in self.events


@dataclass
class WebhookDeliveryJob:
    """Event payload bound to the registrations that should receive it."""

    event: str
    payload: dict[str, Any]
    webhooks: list[Webhook]


@dataclass
class WebhookDeliveryResult:
    """Outcome of a single delivery attempt to one registration."""

    webhook_id: int | None
    url: str
    event: str
    success: bool
    attempted_at: datetime
    status_code: int | None = None
    response_text: str | None = None
    error: str | None = None
    duration_ms: float = 0.0
    attempts: int = 1


@dataclass
class WebhookLog:
    id: int | None
    webhook_id: int
    event: str
    status_code: int | None
    response: str | None
    error: str | None
    attempts: int
    created_at: datetime | None = None


__all__ = [
    "TEST_EVENT",
    "Webhook",
    "WebhookDeliveryJob",
    "WebhookDeliveryResult",
    "WebhookEvents",
    "WebhookLog",
]
