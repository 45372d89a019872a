"""Tests for turning stock alerts into notifications and webhook jobs."""

from sjfulfillment.application.use_cases.notifications import get_user_notifications
from sjfulfillment.application.use_cases.stock import notify_stock_levels
from sjfulfillment.domain.entities import (
    NotificationPriority,
    NotificationType,
    StockAlert,
    UserRole,
    WebhookEvents,
)


def _alert(merchant_id: int, product: str, quantity: int, reorder_level: int = 10) -> StockAlert:
    return StockAlert(
        merchant_id=merchant_id,
        product_id=f"prod-{product}",
        product_name=product,
        sku=f"SKU-{product}",
        warehouse_id="wh-1",
        warehouse_name="Lagos Main",
        available_quantity=quantity,
        reorder_level=reorder_level,
    )


def test_stock_alerts_notify_admins_and_warehouse(
    db_session, make_merchant, make_user, make_webhook, recording_queue
) -> None:
    merchant = make_merchant()
    admin = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    warehouse = make_user(UserRole.WAREHOUSE_STAFF)
    make_webhook(
        merchant.id,
        events=[WebhookEvents.OUT_OF_STOCK, WebhookEvents.LOW_STOCK_ALERT],
    )

    summary = notify_stock_levels(
        db_session,
        [
            _alert(merchant.id, "Mug", 0),
            _alert(merchant.id, "Cap", 3),
            _alert(merchant.id, "Shirt", 8),
            _alert(merchant.id, "Bag", 50),
        ],
        queue=recording_queue,
    )

    assert summary.processed == 3
    assert len(summary.notifications) == 4
    assert summary.webhooks_queued == 3
    assert [job.event for job in recording_queue.jobs] == [
        WebhookEvents.OUT_OF_STOCK,
        WebhookEvents.LOW_STOCK_ALERT,
        WebhookEvents.LOW_STOCK_ALERT,
    ]

    admin_inbox = get_user_notifications(db_session, admin)
    types = sorted(entry.notification.type.value for entry in admin_inbox.entries)
    assert types == ["STOCK_LOW", "STOCK_LOW", "STOCK_OUT"]

    (critical,) = get_user_notifications(db_session, warehouse).entries
    assert critical.notification.type is NotificationType.WAREHOUSE_ALERT
    assert critical.notification.priority is NotificationPriority.URGENT
    assert critical.notification.message.startswith("2 items are critically low")
    assert [item["productName"] for item in critical.notification.metadata["criticalItems"]] == [
        "Mug",
        "Cap",
    ]


def test_stock_alerts_are_grouped_per_merchant(
    db_session, make_merchant, recording_queue
) -> None:
    first = make_merchant("First")
    second = make_merchant("Second")

    summary = notify_stock_levels(
        db_session,
        [_alert(second.id, "Lamp", 1), _alert(first.id, "Desk", 2)],
        queue=recording_queue,
    )

    warehouse_alerts = [
        n for n in summary.notifications if n.type is NotificationType.WAREHOUSE_ALERT
    ]
    assert sorted(n.metadata["merchantId"] for n in warehouse_alerts) == [
        first.id,
        second.id,
    ]
    assert summary.webhooks_queued == 0


def test_no_relevant_alerts(db_session, recording_queue) -> None:
    summary = notify_stock_levels(
        db_session, [_alert(1, "Bag", 40)], queue=recording_queue
    )

    assert summary.processed == 0
    assert summary.notifications == []


class _FailingQueue:
    def enqueue(self, job) -> None:
        raise RuntimeError("Event loop is closed")


def test_webhook_queue_failure_keeps_notifications(
    db_session, make_merchant, make_user, make_webhook
) -> None:
    merchant = make_merchant()
    admin = make_user(UserRole.MERCHANT_ADMIN, merchant_id=merchant.id)
    make_webhook(merchant.id)

    summary = notify_stock_levels(
        db_session, [_alert(merchant.id, "Mug", 0)], queue=_FailingQueue()
    )

    assert summary.webhooks_queued == 0
    assert get_user_notifications(db_session, admin).unread_count == 1


def test_stock_notifications_reach_admins_of_every_merchant(
    db_session, make_merchant, make_user, recording_queue
) -> None:
    owner = make_merchant("Owner")
    other = make_merchant("Other")
    other_admin = make_user(UserRole.MERCHANT_ADMIN, merchant_id=other.id)

    notify_stock_levels(db_session, [_alert(owner.id, "Mug", 3)], queue=recording_queue)

    (entry,) = get_user_notifications(db_session, other_admin).entries
    assert entry.notification.metadata["merchantId"] == owner.id
