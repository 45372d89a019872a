"""SQLAlchemy models for notifications and their per-user read receipts."""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.sql import expression

from sjfulfillment.infrastructure.database import Base
from sjfulfillment.utils import now_in_app_naive_datetime


class NotificationModel(Base):
    """Database representation of a notification and its audience."""

    __tablename__ = "notification"
    __table_args__ = (
        CheckConstraint(
            "(CASE WHEN recipient_id IS NOT NULL THEN 1 ELSE 0 END)"
            " + (CASE WHEN recipient_role IS NOT NULL THEN 1 ELSE 0 END)"
            " + (CASE WHEN is_global THEN 1 ELSE 0 END) = 1",
            name="ck_notification_single_target",
        ),
        Index("ix_notification_created_at_id", "created_at", "id"),
    )

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(50), nullable=False)
    priority = Column(String(20), nullable=False, default="MEDIUM")
    recipient_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=True, index=True
    )
    recipient_role = Column(String(50), nullable=True, index=True)
    is_global = Column(
        Boolean, nullable=False, default=False, server_default=expression.false()
    )
    metadata_ = Column("metadata", JSON, nullable=False, default=dict)
    created_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


class NotificationReadModel(Base):
    """Receipt recording that ``user_id`` has read ``notification_id``."""

    __tablename__ = "notification_read"
    __table_args__ = (
        UniqueConstraint("notification_id", "user_id", name="uq_notification_read_user"),
    )

    id = Column(Integer, primary_key=True, index=True)
    notification_id = Column(
        Integer,
        ForeignKey("notification.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    read_at = Column(DateTime(), nullable=False, default=now_in_app_naive_datetime)


__all__ = ["NotificationModel", "NotificationReadModel"]
