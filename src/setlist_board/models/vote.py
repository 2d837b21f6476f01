# src/setlist_board/models/vote.py
"""Models capturing voting interactions on posts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow

VOTE_UPVOTE = "upvote"
VOTE_DOWNVOTE = "downvote"
VOTE_TYPES = (VOTE_UPVOTE, VOTE_DOWNVOTE)


class Vote(Base):
    """Per-user vote on a post.

    At most one row exists per (post, user); no row means no vote.
    """

    __tablename__ = "votes"
    __table_args__ = (
        UniqueConstraint("post_id", "user_id", name="uq_votes_post_user"),
        CheckConstraint("vote_type IN ('upvote', 'downvote')", name="ck_votes_vote_type"),
        Index("ix_votes_post_id_vote_type", "post_id", "vote_type"),
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
    vote_type: Mapped[str] = mapped_column(String(8), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
