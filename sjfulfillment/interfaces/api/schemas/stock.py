"""Schemas for stock level alerts submitted by the stock monitor."""

from pydantic import Field

from sjfulfillment.domain.entities import StockAlert

from .base import CamelModel


class StockAlertItem(CamelModel):
    merchant_id: int = Field(..., ge=1)
    product_id: str = Field(..., min_length=1)
    product_name: str = Field(..., min_length=1)
    sku: str = ""
    warehouse_id: str = ""
    warehouse_name: str = ""
    available_quantity: int = Field(..., ge=0)
    reorder_level: int = Field(..., ge=0)

    def to_entity(self) -> StockAlert:
        return StockAlert(
            merchant_id=self.merchant_id,
            product_id=self.product_id,
            product_name=self.product_name,
            sku=self.sku,
            warehouse_id=self.warehouse_id,
            warehouse_name=self.warehouse_name,
            available_quantity=self.available_quantity,
            reorder_level=self.reorder_level,
        )


class StockAlertBatch(CamelModel):
    alerts: list[StockAlertItem] = Field(..., min_length=1)


class StockAlertSummaryRead(CamelModel):
    processed: int
    notifications_created: int
    webhooks_queued: int
