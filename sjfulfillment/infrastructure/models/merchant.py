"""SQLAlchemy model for merchants."""

from sqlalchemy import Boolean, Column, DateTime, Integer, String

from sjfulfillment.infrastructure.database import Base
from sjfulfillment.utils import now_in_app_naive_datetime


class MerchantModel(Base):
    """Database representation of a tenant business."""

    __tablename__ = "merchant"

    id = Column(Integer, primary_key=True, index=True)
    business_name = Column(String(120), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["MerchantModel"]
