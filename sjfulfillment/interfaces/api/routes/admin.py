"""Administrative endpoints."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.stock import notify_stock_levels
from sjfulfillment.domain.entities import User
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.infrastructure.webhooks import WebhookDeliveryQueue
from sjfulfillment.interfaces.api.dependencies import get_webhook_queue, require_admin
from sjfulfillment.interfaces.api.schemas import (
    ApiResponse,
    StockAlertBatch,
    StockAlertSummaryRead,
)

router = APIRouter(prefix="/admin", tags=["admin"])
logger = logging.getLogger(__name__)


@router.post("/stock-alerts", response_model=ApiResponse[StockAlertSummaryRead])
def submit_stock_alerts(
    payload: StockAlertBatch,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    queue: WebhookDeliveryQueue = Depends(get_webhook_queue),
):
    """Raise notifications for stock levels reported by the stock monitor."""

    logger.info(
        "Stock alerts submitted by user %s (%s items)",
        current_user.id,
        len(payload.alerts),
    )
    summary = notify_stock_levels(
        db, [item.to_entity() for item in payload.alerts], queue=queue
    )
    return ApiResponse(
        message="Stock alerts processed successfully",
        data=StockAlertSummaryRead(
            processed=summary.processed,
            notifications_created=len(summary.notifications),
            webhooks_queued=summary.webhooks_queued,
        ),
    )
