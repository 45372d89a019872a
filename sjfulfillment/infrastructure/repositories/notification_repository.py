"""Persistence helpers for notification entities."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import DateTime, Integer, and_, func, insert, literal, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import (
    InboxEntry,
    Notification,
    NotificationPriority,
    NotificationTarget,
    NotificationType,
)
from sjfulfillment.infrastructure.models import NotificationModel, NotificationReadModel
from sjfulfillment.utils import (
    ensure_app_naive_datetime,
    ensure_app_timezone,
    now_in_app_timezone,
)


class NotificationRepository:
    """Store notifications and the per-user receipts that mark them as read.

    Every query that takes ``user_id`` and ``role`` works on the set of
    notifications visible to that user: addressed to them, to their role, or
    to everybody.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def get_visible(
        self, notification_id: int, *, user_id: int, role: str
    ) -> Notification | None:
        model = (
            self.session.query(NotificationModel)
            .filter(NotificationModel.id == notification_id)
            .filter(self._visible_to(user_id, role))
            .first()
        )
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: int,
        role: str,
        *,
        limit: int = 50,
        offset: int = 0,
        unread_only: bool = False,
    ) -> Sequence[InboxEntry]:
        query = (
            self.session.query(NotificationModel, NotificationReadModel.read_at)
            .outerjoin(NotificationReadModel, self._receipt_for(user_id))
            .filter(self._visible_to(user_id, role))
        )
        if unread_only:
            query = query.filter(NotificationReadModel.id.is_(None))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        )
        query = query.offset(offset).limit(limit)
        return [
            InboxEntry(
                notification=self._to_entity(model),
                read_at=ensure_app_timezone(read_at),
            )
            for model, read_at in query.all()
        ]

    def count_for_user(self, user_id: int, role: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .filter(self._visible_to(user_id, role))
            .scalar()
            or 0
        )

    def count_unread_for_user(self, user_id: int, role: str) -> int:
        return (
            self.session.query(func.count(NotificationModel.id))
            .outerjoin(NotificationReadModel, self._receipt_for(user_id))
            .filter(self._visible_to(user_id, role))
            .filter(NotificationReadModel.id.is_(None))
            .scalar()
            or 0
        )

    def mark_all_as_read(self, user_id: int, role: str) -> int:
        """Write receipts for every visible unread notification in one statement.

        Returns the number of receipts written.
        """

        try:
            return self._insert_missing_receipts(user_id, role)
        except IntegrityError:
            # A concurrent request inserted some of the same receipts first.
            self.session.rollback()
            return self._insert_missing_receipts(user_id, role)

    def mark_as_read(self, notification_id: int, *, user_id: int) -> datetime:
        """Record that ``user_id`` has read ``notification_id`` and return when."""

        existing = self._get_read_at(notification_id, user_id)
        if existing is not None:
            return existing

        read_at = ensure_app_naive_datetime(now_in_app_timezone())
        self.session.add(
            NotificationReadModel(
                notification_id=notification_id, user_id=user_id, read_at=read_at
            )
        )
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            existing = self._get_read_at(notification_id, user_id)
            if existing is None:
                raise
            return existing
        return ensure_app_timezone(read_at)

    def list_recent(self, *, limit: int = 10) -> Sequence[Notification]:
        query = (
            self.session.query(NotificationModel)
            .order_by(NotificationModel.created_at.desc(), NotificationModel.id.desc())
            .limit(limit)
        )
        return [self._to_entity(model) for model in query.all()]

    def count(self) -> int:
        return self.session.query(func.count(NotificationModel.id)).scalar() or 0

    def _insert_missing_receipts(self, user_id: int, role: str) -> int:
        read_at = ensure_app_naive_datetime(now_in_app_timezone())
        already_read = select(NotificationReadModel.notification_id).where(
            NotificationReadModel.user_id == user_id
        )
        source = (
            select(
                NotificationModel.id,
                literal(user_id, Integer),
                literal(read_at, DateTime()),
            )
            .where(self._visible_to(user_id, role))
            .where(NotificationModel.id.not_in(already_read))
        )
        statement = insert(NotificationReadModel).from_select(
            ["notification_id", "user_id", "read_at"], source
        )
        result = self.session.execute(statement)
        self.session.commit()
        return max(result.rowcount or 0, 0)

    def _get_read_at(self, notification_id: int, user_id: int) -> datetime | None:
        read_at = (
            self.session.query(NotificationReadModel.read_at)
            .filter(NotificationReadModel.notification_id == notification_id)
            .filter(NotificationReadModel.user_id == user_id)
            .scalar()
        )
        return ensure_app_timezone(read_at)

    @staticmethod
    def _visible_to(user_id: int, role: str):
        return or_(
            NotificationModel.recipient_id == user_id,
            NotificationModel.recipient_role == role,
            NotificationModel.is_global.is_(True),
        )

    @staticmethod
    def _receipt_for(user_id: int):
        return and_(
            NotificationReadModel.notification_id == NotificationModel.id,
            NotificationReadModel.user_id == user_id,
        )

    @staticmethod
    def _apply_entity_to_model(
        model: NotificationModel, notification: Notification
    ) -> None:
        model.created_at = ensure_app_naive_datetime(
            notification.created_at
        ) or ensure_app_naive_datetime(now_in_app_timezone())
        model.title = notification.title
        model.message = notification.message
        model.type = notification.type.value
        model.priority = notification.priority.value
        model.recipient_id = notification.target.recipient_id
        model.recipient_role = notification.target.recipient_role
        model.is_global = notification.target.is_global
        model.metadata_ = dict(notification.metadata or {})

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            title=model.title,
            message=model.message,
            type=NotificationType(model.type),
            priority=NotificationPriority(model.priority),
            target=NotificationTarget(
                recipient_id=model.recipient_id,
                recipient_role=model.recipient_role,
                is_global=bool(model.is_global),
            ),
            metadata=model.metadata_ or {},
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["NotificationRepository"]
