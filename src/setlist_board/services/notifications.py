"""Notification fan-out for replies, quotes and reactions."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.orm import Session, joinedload

from setlist_board.core.settings import settings
from setlist_board.db.session import run_atomic
from setlist_board.models.notification import (
    NOTIFICATION_QUOTE,
    NOTIFICATION_REACTION,
    NOTIFICATION_REPLY,
    Notification,
)
from setlist_board.models.user import User

logger = logging.getLogger(__name__)

__all__ = ["NotificationService", "NotificationView", "PostPreview"]


@dataclass(frozen=True)
class PostPreview:
    """What a notification may reveal about its post."""

    id: str
    content: str | None
    is_visible: bool


@dataclass(frozen=True)
class NotificationView:
    """A notification enriched for display."""

    notification: Notification
    actor: User
    post: PostPreview


class NotificationService:
    """Records social actions for their recipients and serves the inbox.

    The ``create_*`` methods only flush; they are meant to run inside the
    caller's atomic unit so the notification commits with the action itself.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def _create(
        self,
        kind: str,
        post_id: str,
        actor_id: str,
        recipient_id: str,
    ) -> Notification | None:
        if actor_id == recipient_id:
            logger.debug("Skipping %s notification on post %s: self action", kind, post_id)
            return None
        notification = Notification(
            user_id=recipient_id,
            actor_id=actor_id,
            post_id=post_id,
            type=kind,
        )
        self.db.add(notification)
        self.db.flush()
        logger.debug("Queued %s notification for %s on post %s", kind, recipient_id, post_id)
        return notification

    def create_reply_notification(
        self, post_id: str, actor_id: str, recipient_id: str
    ) -> Notification | None:
        """Notify a parent's author about a new reply."""
        return self._create(NOTIFICATION_REPLY, post_id, actor_id, recipient_id)

    def create_reaction_notification(
        self, post_id: str, actor_id: str, recipient_id: str
    ) -> Notification | None:
        """Notify a post's author about a new reaction."""
        return self._create(NOTIFICATION_REACTION, post_id, actor_id, recipient_id)

    def create_quote_notification(
        self, post_id: str, actor_id: str, recipient_id: str
    ) -> Notification | None:
        """Notify a post's author that someone quoted it."""
        return self._create(NOTIFICATION_QUOTE, post_id, actor_id, recipient_id)

    def get_notifications(
        self,
        user_id: str,
        unread_only: bool = False,
        limit: int | None = None,
    ) -> list[NotificationView]:
        """Return the inbox newest first.

        Posts that were deleted, hidden or removed after the notification was
        created are still referenced, but their content is withheld.
        """
        if limit is None:
            limit = settings.notifications_default_limit
        stmt = (
            select(Notification)
            .options(joinedload(Notification.actor), joinedload(Notification.post))
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .limit(max(limit, 1))
        )
        if unread_only:
            stmt = stmt.where(Notification.read.is_(False))

        views = []
        for notification in self.db.execute(stmt).scalars():
            post = notification.post
            visible = post.is_visible
            views.append(
                NotificationView(
                    notification=notification,
                    actor=notification.actor,
                    post=PostPreview(
                        id=post.id,
                        content=post.content if visible else None,
                        is_visible=visible,
                    ),
                )
            )
        return views

    def get_unread_count(self, user_id: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Notification)
            .where(Notification.user_id == user_id, Notification.read.is_(False))
        )
        return int(self.db.execute(stmt).scalar_one())

    def mark_as_read(self, user_id: str, notification_ids: Iterable[str]) -> int:
        """Mark the given notifications read and return how many changed.

        Ids that belong to another user are ignored.
        """
        ids = list(notification_ids)
        if not ids:
            return 0
        return self._mark_read(user_id, Notification.id.in_(ids))

    def mark_all_as_read(self, user_id: str) -> int:
        return self._mark_read(user_id)

    def _mark_read(self, user_id: str, *criteria: ColumnElement[bool]) -> int:
        stmt = (
            update(Notification)
            .where(
                Notification.user_id == user_id,
                Notification.read.is_(False),
                *criteria,
            )
            .values(read=True)
            .execution_options(synchronize_session=False)
        )
        marked = int(run_atomic(self.db, lambda: self.db.execute(stmt).rowcount) or 0)
        logger.debug("Marked %d notifications read for %s", marked, user_id)
        return marked
