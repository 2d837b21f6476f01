"""Feed ranking queries."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy import DateTime, Float, cast, func, literal, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.elements import ColumnElement

from setlist_board.core.errors import ValidationError
from setlist_board.core.settings import settings
from setlist_board.db.time import ensure_utc, utcnow
from setlist_board.models.post import Post
from setlist_board.repositories.post_repo import PostRepository, PostView, visible_posts
from setlist_board.services.ranking import (
    AGE_OFFSET_HOURS,
    DECAY_EXPONENT,
    REPLY_WEIGHT,
    SQLITE_HOT_SCORE_FUNCTION,
)

logger = logging.getLogger(__name__)

SORT_CHRONOLOGICAL = "chronological"
SORT_HOT = "hot"
FEED_SORTS = (SORT_CHRONOLOGICAL, SORT_HOT)

__all__ = ["FEED_SORTS", "FeedPage", "FeedRanker", "clamp_limit", "parse_cursor"]


@dataclass
class FeedPage:
    """One page of feed items plus the cursor for the next one."""

    items: list[PostView] = field(default_factory=list)
    next_cursor: str | None = None


def clamp_limit(limit: int | None) -> int:
    """Clamp a requested page size into ``[1, FEED_MAX_LIMIT]``."""
    if limit is None:
        limit = settings.feed_default_limit
    return max(1, min(int(limit), settings.feed_max_limit))


def parse_cursor(cursor: str | None) -> datetime | None:
    """Turn an ISO-8601 cursor into an aware UTC datetime.

    Raises:
        ValidationError: The cursor is not a timestamp.
    """
    if not cursor:
        return None
    raw = cursor.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as err:
        raise ValidationError(f"Invalid cursor: {cursor}") from err
    return ensure_utc(parsed)


def format_cursor(value: datetime) -> str:
    """Render a timestamp as the opaque cursor handed back to clients."""
    return ensure_utc(value).isoformat()


class FeedRanker:
    """Read-only orderings over top-level visible posts."""

    def __init__(self, db: Session, posts: PostRepository) -> None:
        self.db = db
        self.posts = posts

    def _hot_score_column(self, now: datetime) -> ColumnElement[float]:
        dialect = self.db.get_bind().dialect.name
        if dialect == "sqlite":
            age_hours = (
                func.julianday(literal(now, DateTime())) - func.julianday(Post.created_at)
            ) * 24.0
            return getattr(func, SQLITE_HOT_SCORE_FUNCTION)(
                Post.upvote_count, Post.reply_count, age_hours, type_=Float
            )

        age = literal(now, DateTime(timezone=True)) - Post.created_at
        age_hours = func.greatest(func.extract("epoch", age) / 3600.0, 0.0)
        engagement = cast(Post.upvote_count + Post.reply_count * REPLY_WEIGHT, Float)
        return engagement / func.power(age_hours + AGE_OFFSET_HOURS, DECAY_EXPONENT)

    def get_feed(
        self,
        sort: str = SORT_CHRONOLOGICAL,
        cursor: str | None = None,
        limit: int | None = None,
        viewer_id: str | None = None,
    ) -> FeedPage:
        """Return one page of the board feed.

        Only top-level posts that are neither deleted, hidden nor removed are
        returned. ``cursor`` is the ISO timestamp from a previous page's
        ``next_cursor`` and bounds ``created_at`` for both orderings.

        Raises:
            ValidationError: Unknown sort or malformed cursor.
        """
        if sort not in FEED_SORTS:
            raise ValidationError(f"Invalid sort: {sort}")
        before = parse_cursor(cursor)
        page_size = clamp_limit(limit)

        filters = [Post.parent_id.is_(None), visible_posts()]
        if before is not None:
            filters.append(Post.created_at < before)

        if sort == SORT_HOT:
            score = self._hot_score_column(utcnow()).label("hot_score")
            stmt = (
                select(Post, score)
                .where(*filters)
                .order_by(score.desc(), Post.created_at.desc(), Post.id.desc())
                .limit(page_size)
            )
            rows = self.db.execute(stmt).all()
            posts = [row[0] for row in rows]
            scores = [float(row[1] or 0.0) for row in rows]
        else:
            stmt = (
                select(Post)
                .where(*filters)
                .order_by(Post.created_at.desc(), Post.id.desc())
                .limit(page_size)
            )
            posts = list(self.db.execute(stmt).scalars())
            scores = []

        items = self.posts.with_viewer(posts, viewer_id)
        for item, value in zip(items, scores):
            item.hot_score = value

        next_cursor = format_cursor(posts[-1].created_at) if posts else None
        logger.debug("Feed %s page: %d items, next cursor %s", sort, len(items), next_cursor)
        return FeedPage(items=items, next_cursor=next_cursor)
