"""Schemas for webhook delivery results."""

from datetime import datetime

from sjfulfillment.domain.entities import WebhookDeliveryResult

from .base import CamelModel


class WebhookDeliveryRead(CamelModel):
    webhook_id: int | None
    url: str
    event: str
    success: bool
    status_code: int | None = None
    error: str | None = None
    duration_ms: float = 0.0
    attempted_at: datetime

    @classmethod
    def from_result(cls, result: WebhookDeliveryResult) -> "WebhookDeliveryRead":
        return cls(
            webhook_id=result.webhook_id,
            url=result.url,
            event=result.event,
            success=result.success,
            status_code=result.status_code,
            error=result.error,
            duration_ms=round(result.duration_ms, 1),
            attempted_at=result.attempted_at,
        )
