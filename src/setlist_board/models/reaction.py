# src/setlist_board/models/reaction.py
"""Emoji reactions attached to posts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow

EMOJI_CODE_MAX_LENGTH = 32


class Reaction(Base):
    """A user's emoji on a post; one row per (post, user, emoji)."""

    __tablename__ = "reactions"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", "emoji_code", name="uq_reactions_post_user_emoji"),
        Index("ix_reactions_post_id", "post_id"),
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
    emoji_code: Mapped[str] = mapped_column(String(EMOJI_CODE_MAX_LENGTH), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
