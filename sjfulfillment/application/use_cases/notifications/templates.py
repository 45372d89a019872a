"""Ready-made notification contents for common business events.

Each helper returns the ``title``, ``message``, ``type`` and ``priority``
keyword arguments accepted by the notification creation use cases::

    create_role_notification(
        session,
        recipient_role=UserRole.MERCHANT_ADMIN,
        **templates.stock_out("Blue T-Shirt"),
    )
"""

from typing import Any

from sjfulfillment.domain.entities import NotificationPriority, NotificationType


def _content(
    title: str, message: str, type: NotificationType, priority: NotificationPriority
) -> dict[str, Any]:
    return {"title": title, "message": message, "type": type, "priority": priority}


def order_created(order_number: str, customer_name: str) -> dict[str, Any]:
    return _content(
        "New Order Received",
        f"Order {order_number} has been placed by {customer_name}",
        NotificationType.ORDER_CREATED,
        NotificationPriority.HIGH,
    )


def order_delivered(order_number: str, customer_name: str) -> dict[str, Any]:
    return _content(
        "Order Delivered",
        f"Order {order_number} has been successfully delivered to {customer_name}",
        NotificationType.ORDER_DELIVERED,
        NotificationPriority.MEDIUM,
    )


def stock_low(product_name: str, current_stock: int, reorder_level: int) -> dict[str, Any]:
    return _content(
        "Low Stock Alert",
        f"{product_name} is running low. Current stock: {current_stock}, "
        f"Reorder level: {reorder_level}",
        NotificationType.STOCK_LOW,
        NotificationPriority.HIGH,
    )


def stock_out(product_name: str) -> dict[str, Any]:
    return _content(
        "Out of Stock",
        f"{product_name} is out of stock and needs immediate attention",
        NotificationType.STOCK_OUT,
        NotificationPriority.URGENT,
    )


def merchant_registered(merchant_name: str) -> dict[str, Any]:
    return _content(
        "New Merchant Registration",
        f"{merchant_name} has registered and is pending approval",
        NotificationType.MERCHANT_REGISTERED,
        NotificationPriority.MEDIUM,
    )


def payment_received(amount: float, order_number: str) -> dict[str, Any]:
    return _content(
        "Payment Received",
        f"Payment of ₦{amount:,.2f} received for order {order_number}",
        NotificationType.PAYMENT_RECEIVED,
        NotificationPriority.MEDIUM,
    )


def return_requested(order_number: str, reason: str) -> dict[str, Any]:
    return _content(
        "Return Request",
        f"Return requested for order {order_number}. Reason: {reason}",
        NotificationType.RETURN_REQUESTED,
        NotificationPriority.HIGH,
    )


def system_alert(message: str) -> dict[str, Any]:
    return _content(
        "System Alert",
        message,
        NotificationType.SYSTEM_ALERT,
        NotificationPriority.HIGH,
    )


__all__ = [
    "merchant_registered",
    "order_created",
    "order_delivered",
    "payment_received",
    "return_requested",
    "stock_low",
    "stock_out",
    "system_alert",
]
