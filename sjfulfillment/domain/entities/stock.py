"""Domain entity describing a stock level reported by the stock monitor."""

from dataclasses import dataclass

CRITICAL_STOCK_LEVEL = 5


@dataclass
class StockAlert:
    """Stock level of one product in one warehouse that crossed its threshold."""

    merchant_id: int
    product_id: str
    product_name: str
    sku: str
    warehouse_id: str
    warehouse_name: str
    available_quantity: int
    reorder_level: int

    @property
    def is_out_of_stock(self) -> bool:
        return self.available_quantity <= 0

    @property
    def is_low(self) -> bool:
        return 0 < self.available_quantity <= self.reorder_level

    @property
    def is_critical(self) -> bool:
        return self.available_quantity <= CRITICAL_STOCK_LEVEL


__all__ = ["CRITICAL_STOCK_LEVEL", "StockAlert"]
