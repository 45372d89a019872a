"""Result handler that persists webhook delivery attempts."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import WebhookDeliveryResult
from sjfulfillment.infrastructure.repositories import WebhookRepository

logger = logging.getLogger(__name__)


class DeliveryRecorder:
    """Write a webhook log row and update counters for each delivery result.

    Runs outside the request that triggered the delivery, so it opens its own
    session from ``session_factory``.
    """

    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def __call__(self, result: WebhookDeliveryResult) -> None:
        session = self._session_factory()
        try:
            WebhookRepository(session).record_delivery(result)
        except SQLAlchemyError:
            session.rollback()
            logger.exception(
                "Could not record delivery of %s to webhook %s",
                result.event,
                result.webhook_id,
            )
        finally:
            session.close()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


__all__ = ["DeliveryRecorder"]
