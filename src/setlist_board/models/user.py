# src/setlist_board/models/user.py
"""SQLAlchemy model for the user directory rows the posting core reads."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from setlist_board.db.session import Base
from setlist_board.db.time import utcnow


class User(Base):
    """Minimal mirror of a directory user.

    Accounts are owned by the external user directory; the posting core only
    reads them for author, actor and reviewer summaries and for the moderator
    role check.
    """

    __tablename__ = "users"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    username: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_moderator: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
