# src/setlist_board/models/notification.py
"""Append-only social notifications."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow

from .post import Post
from .user import User

NOTIFICATION_REPLY = "reply"
NOTIFICATION_REACTION = "reaction"
NOTIFICATION_QUOTE = "quote"
NOTIFICATION_TYPES = (NOTIFICATION_REPLY, NOTIFICATION_REACTION, NOTIFICATION_QUOTE)


class Notification(Base):
    """One social action delivered to one recipient.

    Rows are never edited; the only transition is ``read`` going False -> True.
    """

    __tablename__ = "notifications"
    __table_args__ = (
        CheckConstraint(
            "type IN ('reply', 'reaction', 'quote')",
            name="ck_notifications_type",
        ),
        CheckConstraint("user_id <> actor_id", name="ck_notifications_not_self"),
        Index("ix_notifications_user_id_read", "user_id", "read"),
        Index("ix_notifications_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    # Recipient.
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    actor_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    type: Mapped[str] = mapped_column(String(16), nullable=False)
    read: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    actor: Mapped[User] = relationship(User, foreign_keys=[actor_id])
    post: Mapped[Post] = relationship(Post)
