# src/setlist_board/models/moderation.py
"""Models tracking user reports against posts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow

from .post import Post
from .user import User

FLAG_STATUS_PENDING = "pending"
FLAG_STATUS_REVIEWED = "reviewed"
FLAG_STATUS_DISMISSED = "dismissed"
FLAG_STATUS_ACTIONED = "actioned"

FLAG_STATUSES = (
    FLAG_STATUS_PENDING,
    FLAG_STATUS_REVIEWED,
    FLAG_STATUS_DISMISSED,
    FLAG_STATUS_ACTIONED,
)

FLAG_REASONS = ("spam", "harassment", "inappropriate", "misinformation", "other")


class ContentFlag(Base):
    """A single report of a post by a user, plus its review outcome.

    Reports are not deduplicated: the same user may flag the same post more
    than once and every report counts toward the auto-hide threshold.
    """

    __tablename__ = "content_flags"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'reviewed', 'dismissed', 'actioned')",
            name="ck_content_flags_status",
        ),
        Index("ix_content_flags_status_created_at", "status", "created_at"),
        Index("ix_content_flags_post_id", "post_id"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("posts.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False)
    reason: Mapped[str] = mapped_column(String(32), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(16), default=FLAG_STATUS_PENDING, nullable=False)
    reviewed_by: Mapped[str | None] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        nullable=True,
    )
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )

    reporter: Mapped[User] = relationship(User, foreign_keys=[user_id])
    reviewer: Mapped[User | None] = relationship(User, foreign_keys=[reviewed_by])
    post: Mapped[Post] = relationship(Post)
