"""SQLAlchemy models for merchant webhooks and their delivery log."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from sjfulfillment.infrastructure.database import Base
from sjfulfillment.utils import now_in_app_naive_datetime


class WebhookModel(Base):
    """Database representation of a merchant webhook registration."""

    __tablename__ = "webhook"

    id = Column(Integer, primary_key=True, index=True)
    merchant_id = Column(
        Integer, ForeignKey("merchant.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(100), nullable=False)
    url = Column(String(2048), nullable=False)
    secret = Column(String(128), nullable=False)
    events = Column(JSON, nullable=False, default=list)
    is_active = Column(Boolean, nullable=False, default=True)
    last_triggered = Column(DateTime(), nullable=True)
    success_count = Column(Integer, nullable=False, default=0)
    failure_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)
    updated_at = Column(DateTime(), nullable=True, onupdate=now_in_app_naive_datetime)

    logs = relationship(
        "WebhookLogModel",
        back_populates="webhook",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class WebhookLogModel(Base):
    """One recorded delivery attempt."""

    __tablename__ = "webhook_log"

    id = Column(Integer, primary_key=True, index=True)
    webhook_id = Column(
        Integer, ForeignKey("webhook.id", ondelete="CASCADE"), nullable=False, index=True
    )
    event = Column(String(100), nullable=False)
    status_code = Column(Integer, nullable=True)
    response = Column(Text, nullable=True)
    error = Column(Text, nullable=True)
    attempts = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)

    webhook = relationship("WebhookModel", back_populates="logs")


__all__ = ["WebhookLogModel", "WebhookModel"]
