"""Use case for handing a merchant event to the webhook delivery queue."""

from __future__ import annotations

import logging
from typing import Any, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import WebhookDeliveryJob
from sjfulfillment.infrastructure.repositories import WebhookRepository
from sjfulfillment.infrastructure.webhooks import build_event_payload

logger = logging.getLogger(__name__)


class DeliveryQueue(Protocol):
    def enqueue(self, job: WebhookDeliveryJob) -> None: ...


def trigger_webhooks(
    session: Session,
    *,
    merchant_id: int,
    event: str,
    data: Any,
    queue: DeliveryQueue,
) -> WebhookDeliveryJob | None:
    """Queue ``event`` for every active registration of ``merchant_id``.

    Returns the queued job, or ``None`` when no registration listens to the
    event or the job could not be queued. Never raises: lookup and queueing
    failures are logged so the triggering action is not affected.
    """

    try:
        webhooks = list(
            WebhookRepository(session).list_active_for_event(merchant_id, event)
        )
    except SQLAlchemyError:
        session.rollback()
        logger.exception(
            "Error loading webhooks for merchant %s and event %s", merchant_id, event
        )
        return None

    if not webhooks:
        logger.debug("No webhooks for merchant %s and event %s", merchant_id, event)
        return None

    job = WebhookDeliveryJob(
        event=event,
        payload=build_event_payload(event=event, data=data, merchant_id=merchant_id),
        webhooks=webhooks,
    )
    try:
        queue.enqueue(job)
    except Exception:
        logger.exception(
            "Could not queue webhook event %s for merchant %s", event, merchant_id
        )
        return None
    return job


__all__ = ["DeliveryQueue", "trigger_webhooks"]
