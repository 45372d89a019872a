"""Use cases for reading a user's inbox."""

from sqlalchemy.orm import Session

from sjfulfillment.domain.entities import InboxPage, User
from sjfulfillment.domain.errors import ValidationError
from sjfulfillment.infrastructure.repositories import NotificationRepository

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 50


def _validate_page(limit: int, offset: int) -> None:
    if limit < 1 or limit > MAX_PAGE_SIZE:
        raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")
    if offset < 0:
        raise ValidationError("offset must not be negative")


def get_user_notifications(
    session: Session,
    user: User,
    *,
    limit: int = DEFAULT_PAGE_SIZE,
    offset: int = 0,
    unread_only: bool = False,
) -> InboxPage:
    """Return one page of the notifications visible to ``user``, newest first."""

    _validate_page(limit, offset)
    repository = NotificationRepository(session)
    role = user.role.alias.upper()
    entries = repository.list_for_user(
        user.id, role, limit=limit, offset=offset, unread_only=unread_only
    )
    return InboxPage(
        entries=list(entries),
        unread_count=repository.count_unread_for_user(user.id, role),
        total=repository.count_for_user(user.id, role),
        limit=limit,
        offset=offset,
    )


def get_unread_count(session: Session, user: User) -> int:
    return NotificationRepository(session).count_unread_for_user(
        user.id, user.role.alias.upper()
    )


def get_total_count(session: Session, user: User) -> int:
    return NotificationRepository(session).count_for_user(
        user.id, user.role.alias.upper()
    )


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "get_total_count",
    "get_unread_count",
    "get_user_notifications",
]
