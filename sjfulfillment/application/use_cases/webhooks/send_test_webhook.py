"""Use case for sending a test event to one webhook registration."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import (
    TEST_EVENT,
    User,
    UserRole,
    WebhookDeliveryJob,
    WebhookDeliveryResult,
)
from sjfulfillment.domain.errors import AuthorizationError, NotFoundError
from sjfulfillment.infrastructure.repositories import WebhookRepository
from sjfulfillment.infrastructure.webhooks import build_event_payload
from sjfulfillment.utils import now_in_app_timezone

logger = logging.getLogger(__name__)

TEST_MESSAGE = "This is a test webhook from SJFulfillment"

Deliver = Callable[[WebhookDeliveryJob], list[WebhookDeliveryResult]]


def send_test_webhook(
    session: Session,
    *,
    user: User,
    webhook_id: int,
    deliver: Deliver,
) -> WebhookDeliveryResult:
    """Deliver a ``test.webhook`` event to ``webhook_id`` and return the outcome.

    The registration must belong to the caller's merchant. It is sent the
    event even when inactive so the endpoint can be checked before enabling it.
    """

    if not user.has_role(UserRole.MERCHANT_ADMIN) or user.merchant_id is None:
        raise AuthorizationError("Only merchant administrators can test webhooks")

    webhook = WebhookRepository(session).get_for_merchant(webhook_id, user.merchant_id)
    if webhook is None:
        raise NotFoundError("Webhook not found")

    moment = now_in_app_timezone()
    data = {
        "message": TEST_MESSAGE,
        "timestamp": moment.isoformat(),
        "webhookId": webhook.id,
        "webhookName": webhook.name,
    }
    job = WebhookDeliveryJob(
        event=TEST_EVENT,
        payload=build_event_payload(
            event=TEST_EVENT,
            data=data,
            merchant_id=webhook.merchant_id,
            timestamp=moment,
        ),
        webhooks=[webhook],
    )
    logger.info("Sending test webhook %s for merchant %s", webhook.id, user.merchant_id)
    (result,) = deliver(job)
    return result


__all__ = ["Deliver", "TEST_MESSAGE", "send_test_webhook"]
