"""Notification-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from setlist_board.db.time import ensure_utc
from setlist_board.services.notifications import NotificationView

from .common import UserSummary


class NotificationPostPreview(BaseModel):
    """Post details a notification may show; content is withheld when hidden."""

    id: str
    content: str | None = None
    is_visible: bool


class NotificationResponse(BaseModel):
    """Schema for one inbox entry."""

    id: str
    type: str
    read: bool
    created_at: datetime
    actor: UserSummary
    post: NotificationPostPreview

    @classmethod
    def from_view(cls, view: NotificationView) -> NotificationResponse:
        notification = view.notification
        return cls(
            id=notification.id,
            type=notification.type,
            read=notification.read,
            created_at=ensure_utc(notification.created_at),
            actor=UserSummary.model_validate(view.actor),
            post=NotificationPostPreview(
                id=view.post.id,
                content=view.post.content,
                is_visible=view.post.is_visible,
            ),
        )


class NotificationListResponse(BaseModel):
    """The inbox page together with the total unread count."""

    notifications: list[NotificationResponse]
    unread_count: int


class MarkReadRequest(BaseModel):
    """Notifications to mark as read."""

    ids: list[str] = Field(default_factory=list)


class MarkReadResponse(BaseModel):
    """How many notifications changed state."""

    success: bool = True
    marked_count: int
