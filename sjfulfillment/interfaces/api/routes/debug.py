"""Operational endpoints for inspecting the notification store."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from sjfulfillment.application.use_cases.notifications import (
    create_test_notification,
    get_notification_debug_info,
)
from sjfulfillment.domain.entities import User
from sjfulfillment.infrastructure.database import get_db
from sjfulfillment.interfaces.api.dependencies import require_admin
from sjfulfillment.interfaces.api.schemas import (
    ApiResponse,
    NotificationDebugRead,
    NotificationRead,
)

router = APIRouter(prefix="/debug", tags=["debug"])


@router.get("/notifications", response_model=ApiResponse[NotificationDebugRead])
def debug_notifications(
    db: Session = Depends(get_db),
    _: User = Depends(require_admin),
):
    info = get_notification_debug_info(db)
    return ApiResponse(
        message="Debug info retrieved successfully",
        data=NotificationDebugRead(
            total_count=info.total_count,
            recent_notifications=[NotificationRead.from_entity(n) for n in info.recent],
        ),
    )


@router.post(
    "/create-test-notification",
    response_model=ApiResponse[NotificationRead],
    status_code=status.HTTP_201_CREATED,
)
def debug_create_test_notification(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    notification = create_test_notification(db, current_user)
    return ApiResponse(
        message="Test notification created successfully",
        data=NotificationRead.from_entity(notification),
    )
