"""Use cases for merchant webhooks."""

from .send_test_webhook import TEST_MESSAGE, send_test_webhook
from .trigger_webhooks import DeliveryQueue, trigger_webhooks

__all__ = [
    "DeliveryQueue",
    "TEST_MESSAGE",
    "send_test_webhook",
    "trigger_webhooks",
]
