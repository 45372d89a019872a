"""Use case that turns stock level alerts into notifications and webhooks."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from itertools import groupby

from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.notifications import (
    create_role_notification,
    templates,
)
from sjfulfillment.application.use_cases.webhooks import DeliveryQueue, trigger_webhooks
from sjfulfillment.domain.entities import (
    Notification,
    NotificationPriority,
    NotificationType,
    StockAlert,
    UserRole,
    WebhookEvents,
)

logger = logging.getLogger(__name__)


@dataclass
class StockNotificationSummary:
    processed: int = 0
    notifications: list[Notification] = field(default_factory=list)
    webhooks_queued: int = 0


def _alert_metadata(alert: StockAlert) -> dict:
    return {
        "productId": alert.product_id,
        "productName": alert.product_name,
        "sku": alert.sku,
        "warehouseId": alert.warehouse_id,
        "warehouseName": alert.warehouse_name,
        "currentStock": alert.available_quantity,
        "reorderLevel": alert.reorder_level,
        "merchantId": alert.merchant_id,
    }


def notify_stock_levels(
    session: Session,
    alerts: Iterable[StockAlert],
    *,
    queue: DeliveryQueue,
) -> StockNotificationSummary:
    """Raise stock notifications for ``alerts`` computed by the stock monitor.

    Out of stock and low stock items are broadcast to merchant administrators
    and sent to the merchant's inventory webhooks. Items at or below the
    critical level are summarised once per merchant for warehouse staff.
    Alerts above their reorder level are ignored.
    """

    relevant = [
        alert for alert in alerts if alert.is_out_of_stock or alert.is_low
    ]
    summary = StockNotificationSummary(processed=len(relevant))
    if not relevant:
        logger.info("No low stock items to notify")
        return summary

    relevant.sort(key=lambda alert: alert.merchant_id)
    for merchant_id, group in groupby(relevant, key=lambda alert: alert.merchant_id):
        items = list(group)
        for alert in items:
            metadata = _alert_metadata(alert)
            if alert.is_out_of_stock:
                content = templates.stock_out(alert.product_name)
                event = WebhookEvents.OUT_OF_STOCK
            else:
                content = templates.stock_low(
                    alert.product_name, alert.available_quantity, alert.reorder_level
                )
                event = WebhookEvents.LOW_STOCK_ALERT
            # Not scoped to the merchant: every MERCHANT_ADMIN receives it.
            summary.notifications.append(
                create_role_notification(
                    session,
                    recipient_role=UserRole.MERCHANT_ADMIN,
                    metadata=metadata,
                    **content,
                )
            )
            if trigger_webhooks(
                session,
                merchant_id=merchant_id,
                event=event,
                data=metadata,
                queue=queue,
            ):
                summary.webhooks_queued += 1

        critical = [alert for alert in items if alert.is_critical]
        if critical:
            summary.notifications.append(
                create_role_notification(
                    session,
                    recipient_role=UserRole.WAREHOUSE_STAFF,
                    title="Critical Stock Alert",
                    message=(
                        f"{len(critical)} items are critically low in stock "
                        "and need immediate attention"
                    ),
                    type=NotificationType.WAREHOUSE_ALERT,
                    priority=NotificationPriority.URGENT,
                    metadata={
                        "merchantId": merchant_id,
                        "criticalItems": [
                            {
                                "productId": alert.product_id,
                                "productName": alert.product_name,
                                "sku": alert.sku,
                                "currentStock": alert.available_quantity,
                                "warehouseName": alert.warehouse_name,
                            }
                            for alert in critical
                        ],
                    },
                )
            )

    logger.info(
        "Stock notifications sent for %s items (%s notifications, %s webhook jobs)",
        summary.processed,
        len(summary.notifications),
        summary.webhooks_queued,
    )
    return summary


__all__ = ["StockNotificationSummary", "notify_stock_levels"]
