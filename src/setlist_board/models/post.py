# src/setlist_board/models/post.py
"""SQLAlchemy models for board posts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow

from .user import User

MODERATION_STATUS_CLEAN = "clean"
MODERATION_STATUS_FLAGGED = "flagged"
MODERATION_STATUS_HIDDEN = "hidden"
MODERATION_STATUS_REMOVED = "removed"

MODERATION_STATUSES = (
    MODERATION_STATUS_CLEAN,
    MODERATION_STATUS_FLAGGED,
    MODERATION_STATUS_HIDDEN,
    MODERATION_STATUS_REMOVED,
)
# Statuses that take a post out of every read path.
INVISIBLE_STATUSES = (MODERATION_STATUS_HIDDEN, MODERATION_STATUS_REMOVED)

MEDIA_TYPES = ("cloudflare_image", "giphy")

DELETED_MARKER = "[deleted]"


class Post(Base):
    """Board post, reply or quote.

    Threading is one level deep: a post with ``parent_id`` set is a reply and
    can never be a parent itself. Aggregate columns are derived data owned by
    different writers (post service, vote ledger, moderation pipeline).
    """

    __tablename__ = "posts"
    __table_args__ = (
        CheckConstraint(
            "moderation_status IN ('clean', 'flagged', 'hidden', 'removed')",
            name="ck_posts_moderation_status",
        ),
        CheckConstraint("reply_count >= 0", name="ck_posts_reply_count"),
        Index("ix_posts_feed", "parent_id", "is_deleted", "moderation_status", "created_at"),
        Index("ix_posts_parent_id", "parent_id"),
        Index("ix_posts_user_id", "user_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)

    title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    media_type: Mapped[str | None] = mapped_column(String(32), nullable=True)

    # Parent chain for replies; top-level posts have parent_id = NULL.
    parent_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("posts.id"),
        nullable=True,
    )

    quoted_post_id: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("posts.id"),
        nullable=True,
    )
    # Frozen at quote time; edits and deletes of the original never touch it.
    quoted_content_snapshot: Mapped[str | None] = mapped_column(Text, nullable=True)

    reply_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    upvote_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    downvote_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    vote_score: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    flag_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    is_deleted: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    edited_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    moderation_status: Mapped[str] = mapped_column(
        String(16),
        default=MODERATION_STATUS_CLEAN,
        nullable=False,
    )
    moderated_by: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
    )
    moderated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    user: Mapped[User] = relationship(User, foreign_keys=[user_id], lazy="joined")
    moderator: Mapped[User | None] = relationship(User, foreign_keys=[moderated_by])

    @property
    def is_reply(self) -> bool:
        """Return True when this post hangs off a parent."""
        return self.parent_id is not None

    @property
    def is_visible(self) -> bool:
        """Return True when the post may appear in feed, thread or previews."""
        return not self.is_deleted and self.moderation_status not in INVISIBLE_STATUSES
