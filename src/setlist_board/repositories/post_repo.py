"""Data access helpers for working with posts.

Each aggregate column on ``Post`` has exactly one writer. The update methods
here are split by owner so no caller can patch fields it does not own:

* post service: ``create``, ``update_content``, ``soft_delete``,
  ``adjust_reply_count``
* vote ledger: ``set_vote_counts``
* moderation pipeline: ``increment_flag_count``, ``update_moderation_state``
"""
from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqlalchemy import ColumnElement, and_, case, select, update
from sqlalchemy.orm import Session

from setlist_board.db.time import utcnow
from setlist_board.models.post import (
    DELETED_MARKER,
    INVISIBLE_STATUSES,
    MODERATION_STATUS_REMOVED,
    Post,
)
from setlist_board.models.vote import Vote

__all__ = ["PostRepository", "PostView", "visible_posts"]


@dataclass
class PostView:
    """A post as seen by one viewer."""

    post: Post
    user_vote: str | None = None
    hot_score: float | None = None


def visible_posts() -> ColumnElement[bool]:
    """Filter clause shared by every read path."""
    return and_(
        Post.is_deleted.is_(False),
        Post.moderation_status.not_in(INVISIBLE_STATUSES),
    )


def _counts_toward_parent(post: Post) -> bool:
    return (
        post.parent_id is not None
        and not post.is_deleted
        and post.moderation_status != MODERATION_STATUS_REMOVED
    )


class PostRepository:
    """Thin wrapper around database access for post entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    # Reads

    def get_by_id(self, post_id: str, *, for_update: bool = False) -> Post | None:
        """Return a post by identifier regardless of visibility."""
        stmt = select(Post).where(Post.id == post_id)
        if for_update:
            stmt = stmt.with_for_update()
        return self.session.execute(stmt).scalars().first()

    def get_visible(self, post_id: str) -> Post | None:
        """Return a post only if it may be shown to readers."""
        stmt = select(Post).where(Post.id == post_id, visible_posts())
        return self.session.execute(stmt).scalars().first()

    def list_replies(self, parent_id: str) -> list[Post]:
        """Return visible direct replies, oldest first."""
        stmt = (
            select(Post)
            .where(Post.parent_id == parent_id, visible_posts())
            .order_by(Post.created_at.asc(), Post.id.asc())
        )
        return list(self.session.execute(stmt).scalars())

    def user_votes(self, post_ids: Iterable[str], user_id: str) -> dict[str, str]:
        """Map post id -> vote type for the posts ``user_id`` has voted on."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = select(Vote.post_id, Vote.vote_type).where(
            Vote.user_id == user_id,
            Vote.post_id.in_(ids),
        )
        return {post_id: vote_type for post_id, vote_type in self.session.execute(stmt)}

    def with_viewer(self, posts: list[Post], viewer_id: str | None) -> list[PostView]:
        """Wrap posts in views carrying the viewer's own vote."""
        votes = self.user_votes((p.id for p in posts), viewer_id) if viewer_id else {}
        return [PostView(post=p, user_vote=votes.get(p.id)) for p in posts]

    # Post service writes

    def create(
        self,
        *,
        user_id: str,
        content: str | None,
        title: str | None = None,
        parent_id: str | None = None,
        quoted_post_id: str | None = None,
        quoted_content_snapshot: str | None = None,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> Post:
        """Insert a new post and return the persisted ORM instance."""
        now = utcnow()
        post = Post(
            user_id=user_id,
            title=title,
            content=content,
            parent_id=parent_id,
            quoted_post_id=quoted_post_id,
            quoted_content_snapshot=quoted_content_snapshot,
            media_url=media_url,
            media_type=media_type,
            created_at=now,
            updated_at=now,
        )
        self.session.add(post)
        self.session.flush()
        return post

    def adjust_reply_count(self, post_id: str, delta: int) -> None:
        """Shift ``reply_count`` in SQL, never below zero."""
        new_count = Post.reply_count + delta
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(reply_count=case((new_count < 0, 0), else_=new_count))
            .execution_options(synchronize_session="fetch")
        )

    def update_content(self, post: Post, content: str) -> Post:
        """Replace the body of ``post`` and stamp the edit."""
        now = utcnow()
        post.content = content
        post.edited_at = now
        post.updated_at = now
        self.session.flush()
        return post

    def soft_delete(self, post: Post) -> None:
        """Mark ``post`` deleted and release its slot in the parent's count."""
        counted = _counts_toward_parent(post)
        post.is_deleted = True
        post.content = DELETED_MARKER
        post.updated_at = utcnow()
        self.session.flush()
        if counted and post.parent_id is not None:
            self.adjust_reply_count(post.parent_id, -1)

    # Vote ledger writes

    def set_vote_counts(self, post_id: str, upvotes: int, downvotes: int) -> None:
        """Overwrite vote aggregates with freshly counted values."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(
                upvote_count=upvotes,
                downvote_count=downvotes,
                vote_score=upvotes - downvotes,
            )
            .execution_options(synchronize_session="fetch")
        )

    # Moderation writes

    def increment_flag_count(self, post_id: str) -> int:
        """Bump ``flag_count`` in SQL and return the resulting value."""
        self.session.execute(
            update(Post)
            .where(Post.id == post_id)
            .values(flag_count=Post.flag_count + 1)
            .execution_options(synchronize_session="fetch")
        )
        return int(
            self.session.execute(select(Post.flag_count).where(Post.id == post_id)).scalar_one()
        )

    def update_moderation_state(
        self,
        post: Post,
        status: str,
        moderated_by: str | None,
    ) -> Post:
        """Single transition primitive for every moderation state change.

        ``moderated_by`` is None for system-initiated transitions. Moving a
        reply into or out of ``removed`` keeps the parent's ``reply_count`` in
        step.
        """
        counted_before = _counts_toward_parent(post)
        now = utcnow()
        post.moderation_status = status
        post.moderated_by = moderated_by
        post.moderated_at = now
        post.updated_at = now
        self.session.flush()

        counted_after = _counts_toward_parent(post)
        if post.parent_id is not None and counted_before != counted_after:
            self.adjust_reply_count(post.parent_id, 1 if counted_after else -1)
        return post
