"""Endpoints for reading and broadcasting notifications."""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.notifications import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    create_for_target,
    get_user_notifications,
    mark_all_as_read,
    mark_as_read,
    resolve_broadcast_target,
)
from sjfulfillment.domain.entities import User
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.interfaces.api.dependencies import get_current_active_user, require_admin
from sjfulfillment.interfaces.api.schemas import (
    ApiResponse,
    MarkAllReadResult,
    MarkReadResult,
    NotificationCreate,
    NotificationList,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=ApiResponse[NotificationList])
def list_notifications(
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE),
    offset: int = Query(0, ge=0),
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    """Return a page of the caller's inbox, newest first."""

    page = get_user_notifications(
        db, current_user, limit=limit, offset=offset, unread_only=unread_only
    )
    return ApiResponse(
        message="Notifications retrieved successfully",
        data=NotificationList(
            notifications=[NotificationRead.from_inbox_entry(e) for e in page.entries],
            unread_count=page.unread_count,
            total=page.total,
            limit=page.limit,
            offset=page.offset,
        ),
    )


@router.put("/mark-all-read", response_model=ApiResponse[MarkAllReadResult])
def mark_all_notifications_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    count = mark_all_as_read(db, current_user)
    return ApiResponse(
        message=f"{count} notifications marked as read",
        data=MarkAllReadResult(count=count),
    )


@router.put("/{notification_id}", response_model=ApiResponse[MarkReadResult])
def mark_notification_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
):
    read_at = mark_as_read(db, current_user, notification_id)
    return ApiResponse(
        message="Notification marked as read",
        data=MarkReadResult(id=notification_id, read_at=read_at),
    )


@router.post(
    "",
    response_model=ApiResponse[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def create_broadcast_notification(
    payload: NotificationCreate,
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    """Create a notification for every user of a role, or for every user."""

    target = resolve_broadcast_target(
        recipient_role=payload.recipient_role, is_global=payload.is_global
    )
    notification = create_for_target(
        db,
        target,
        title=payload.title,
        message=payload.message,
        type=payload.type,
        priority=payload.priority,
        metadata=payload.metadata,
    )
    return ApiResponse(
        message="Notification created successfully",
        data=NotificationRead.from_entity(notification),
    )
