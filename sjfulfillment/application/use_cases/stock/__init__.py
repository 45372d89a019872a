"""Use cases fed by the stock monitor."""

from .notify_stock_levels import StockNotificationSummary, notify_stock_levels

__all__ = ["StockNotificationSummary", "notify_stock_levels"]
