"""Notification inbox endpoints for the Setlist Board API."""

from fastapi import APIRouter, Query

from setlist_board.api.v1.dependencies import CurrentUserDep, ServicesDep
from setlist_board.schemas.notification import (
    MarkReadRequest,
    MarkReadResponse,
    NotificationListResponse,
    NotificationResponse,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])


@router.get("", response_model=NotificationListResponse)
def list_notifications(
    current_user: CurrentUserDep,
    services: ServicesDep,
    unread_only: bool = Query(False),
    limit: int = Query(20, ge=1, le=100),
) -> NotificationListResponse:
    """Get the caller's notifications, newest first."""
    views = services.notifications.get_notifications(
        current_user.id,
        unread_only=unread_only,
        limit=limit,
    )
    return NotificationListResponse(
        notifications=[NotificationResponse.from_view(view) for view in views],
        unread_count=services.notifications.get_unread_count(current_user.id),
    )


@router.post("/mark-read", response_model=MarkReadResponse)
def mark_read(
    request: MarkReadRequest,
    current_user: CurrentUserDep,
    services: ServicesDep,
) -> MarkReadResponse:
    """Mark specific notifications as read."""
    marked = services.notifications.mark_as_read(current_user.id, request.ids)
    return MarkReadResponse(marked_count=marked)


@router.post("/mark-all-read", response_model=MarkReadResponse)
def mark_all_read(current_user: CurrentUserDep, services: ServicesDep) -> MarkReadResponse:
    """Mark every notification of the caller as read."""
    marked = services.notifications.mark_all_as_read(current_user.id)
    return MarkReadResponse(marked_count=marked)
