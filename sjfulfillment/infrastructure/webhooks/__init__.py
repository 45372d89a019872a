"""Outbound webhook delivery for the infrastructure layer."""

from .dispatcher import (
    ResultHandler,
    WebhookDispatcher,
    build_event_payload,
    serialize_payload,
)
from .queue import WebhookDeliveryQueue, build_webhook_queue
from .recorder import DeliveryRecorder

__all__ = [
    "DeliveryRecorder",
    "ResultHandler",
    "WebhookDeliveryQueue",
    "WebhookDispatcher",
    "build_event_payload",
    "build_webhook_queue",
    "serialize_payload",
]
