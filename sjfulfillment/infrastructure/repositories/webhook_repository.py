"""Persistence helpers for webhook registrations and their delivery log."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import Webhook, WebhookDeliveryResult, WebhookLog
from sjfulfillment.infrastructure.models import WebhookLogModel, WebhookModel
from sjfulfillment.utils import ensure_app_naive_datetime, ensure_app_timezone

_MAX_RESPONSE_LENGTH = 2000


class WebhookRepository:
    """Provide access to :class:`Webhook` registrations."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, webhook: Webhook) -> Webhook:
        model = WebhookModel(
            merchant_id=webhook.merchant_id,
            name=webhook.name,
            url=webhook.url,
            secret=webhook.secret,
            events=list(webhook.events),
            is_active=webhook.is_active,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_for_merchant(self, webhook_id: int, merchant_id: int) -> Webhook | None:
        model = (
            self.session.query(WebhookModel)
            .filter(WebhookModel.id == webhook_id)
            .filter(WebhookModel.merchant_id == merchant_id)
            .first()
        )
        return self._to_entity(model) if model else None

    def list_active_for_event(self, merchant_id: int, event: str) -> Sequence[Webhook]:
        query = (
            self.session.query(WebhookModel)
            .filter(WebhookModel.merchant_id == merchant_id)
            .filter(WebhookModel.is_active.is_(True))
            .order_by(WebhookModel.id)
        )
        # Event lists are JSON arrays; membership is checked here so the query
        # stays portable across database engines.
        webhooks = [self._to_entity(model) for model in query.all()]
        return [webhook for webhook in webhooks if webhook.accepts(event)]

    def record_delivery(self, result: WebhookDeliveryResult) -> WebhookLog | None:
        """Append a log entry for ``result`` and bump the webhook counters."""

        if result.webhook_id is None:
            return None

        log = WebhookLogModel(
            webhook_id=result.webhook_id,
            event=result.event,
            status_code=result.status_code,
            response=_truncate(result.response_text),
            error=_truncate(result.error),
            attempts=result.attempts,
            created_at=ensure_app_naive_datetime(result.attempted_at),
        )
        self.session.add(log)
        self.session.query(WebhookModel).filter(
            WebhookModel.id == result.webhook_id
        ).update(
            {
                WebhookModel.last_triggered: ensure_app_naive_datetime(
                    result.attempted_at
                ),
                WebhookModel.success_count: WebhookModel.success_count
                + (1 if result.success else 0),
                WebhookModel.failure_count: WebhookModel.failure_count
                + (0 if result.success else 1),
            },
            synchronize_session=False,
        )
        self.session.commit()
        self.session.refresh(log)
        return self._log_to_entity(log)

    def list_logs(self, webhook_id: int, *, limit: int = 20) -> Sequence[WebhookLog]:
        query = (
            self.session.query(WebhookLogModel)
            .filter(WebhookLogModel.webhook_id == webhook_id)
            .order_by(WebhookLogModel.created_at.desc(), WebhookLogModel.id.desc())
            .limit(limit)
        )
        return [self._log_to_entity(model) for model in query.all()]

    @staticmethod
    def _to_entity(model: WebhookModel) -> Webhook:
        return Webhook(
            id=model.id,
            merchant_id=model.merchant_id,
            name=model.name,
            url=model.url,
            secret=model.secret,
            events=list(model.events or []),
            is_active=model.is_active,
            last_triggered=ensure_app_timezone(model.last_triggered),
            success_count=model.success_count or 0,
            failure_count=model.failure_count or 0,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )

    @staticmethod
    def _log_to_entity(model: WebhookLogModel) -> WebhookLog:
        return WebhookLog(
            id=model.id,
            webhook_id=model.webhook_id,
            event=model.event,
            status_code=model.status_code,
            response=model.response,
            error=model.error,
            attempts=model.attempts,
            created_at=ensure_app_timezone(model.created_at),
        )


def _truncate(value: str | None) -> str | None:
    if value is None:
        return None
    return value[:_MAX_RESPONSE_LENGTH]


__all__ = ["WebhookRepository"]
