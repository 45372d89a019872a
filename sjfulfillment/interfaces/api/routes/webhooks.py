"""Endpoints for merchant webhook registrations."""

from anyio import from_thread
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.webhooks import send_test_webhook
from sjfulfillment.domain.entities import User
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.infrastructure.webhooks import WebhookDeliveryQueue
from sjfulfillment.interfaces.api.dependencies import (
    get_webhook_queue,
    require_merchant_admin,
)
from sjfulfillment.interfaces.api.schemas import ApiResponse, WebhookDeliveryRead

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


@router.post("/{webhook_id}/test", response_model=ApiResponse[WebhookDeliveryRead])
def test_webhook(
    webhook_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_merchant_admin),
    queue: WebhookDeliveryQueue = Depends(get_webhook_queue),
):
    """Send a ``test.webhook`` event to one of the caller's registrations."""

    # Sync handlers run in a worker thread; the delivery runs on the app loop.
    result = send_test_webhook(
        db,
        user=current_user,
        webhook_id=webhook_id,
        deliver=lambda job: from_thread.run(queue.dispatcher.deliver, job),
    )
    message = (
        "Test webhook sent successfully"
        if result.success
        else "Test webhook delivery failed"
    )
    return ApiResponse(message=message, data=WebhookDeliveryRead.from_result(result))
