"""Service-level helpers for creating, threading and editing posts."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from setlist_board.core.errors import (
    ForbiddenError,
    InvalidStateError,
    InvalidThreadDepthError,
    NotFoundError,
    ValidationError,
)
from setlist_board.core.settings import settings
from setlist_board.db.session import run_atomic
from setlist_board.models.post import DELETED_MARKER, MEDIA_TYPES, Post
from setlist_board.repositories.post_repo import PostRepository, PostView
from setlist_board.services.feed import SORT_CHRONOLOGICAL, FeedPage, FeedRanker
from setlist_board.services.notifications import NotificationService

logger = logging.getLogger(__name__)

__all__ = ["PostService", "ThreadView", "validate_content", "validate_media"]


@dataclass
class ThreadView:
    """A top-level post and its visible direct replies, oldest first."""

    post: PostView
    replies: list[PostView]


def validate_content(content: str | None, label: str = "Post") -> str:
    """Ensure ``content`` is non-blank and within the length limit.

    Raises:
        ValidationError: When the content is empty or too long.
    """
    if content is None or not content.strip():
        raise ValidationError(f"{label} content cannot be empty")
    if len(content) > settings.post_max_length:
        raise ValidationError(
            f"{label} content must be {settings.post_max_length} characters or less"
        )
    return content


def validate_media(media_url: str | None, media_type: str | None) -> None:
    """Reject media types the board cannot render."""
    if media_type is not None and media_type not in MEDIA_TYPES:
        raise ValidationError(f"Invalid media type: {media_type}")
    if media_type is not None and not media_url:
        raise ValidationError("media_url is required when media_type is set")


class PostService:
    """Entry point for every content and thread mutation.

    Each write validates its input first and then runs as a single atomic
    unit, so the post row, the parent's ``reply_count`` and the notification
    either all commit or none do.
    """

    def __init__(
        self,
        db: Session,
        posts: PostRepository,
        notifications: NotificationService,
        feed: FeedRanker,
    ) -> None:
        self.db = db
        self.posts = posts
        self.notifications = notifications
        self.feed = feed

    def create_post(
        self,
        user_id: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> Post:
        """Create a new top-level post."""
        validate_content(content)
        validate_media(media_url, media_type)

        post = run_atomic(
            self.db,
            lambda: self.posts.create(
                user_id=user_id,
                content=content,
                media_url=media_url,
                media_type=media_type,
            ),
        )
        logger.info("Post %s created by %s", post.id, user_id)
        return post

    def reply_to_post(
        self,
        parent_id: str,
        user_id: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> Post:
        """Reply to a top-level post.

        Raises:
            ValidationError: Content or media is invalid.
            NotFoundError: The parent is missing, deleted or moderated away.
            InvalidThreadDepthError: The parent is itself a reply.
        """
        validate_content(content, "Reply")
        validate_media(media_url, media_type)

        def _apply() -> Post:
            parent = self.posts.get_by_id(parent_id, for_update=True)
            if parent is None or not parent.is_visible:
                raise NotFoundError("Parent post not found")
            if parent.is_reply:
                raise InvalidThreadDepthError(
                    "Cannot reply to a reply. Please reply to the top-level post."
                )

            reply = self.posts.create(
                user_id=user_id,
                content=content,
                parent_id=parent.id,
                media_url=media_url,
                media_type=media_type,
            )
            self.posts.adjust_reply_count(parent.id, 1)
            self.notifications.create_reply_notification(reply.id, user_id, parent.user_id)
            return reply

        reply = run_atomic(self.db, _apply)
        logger.info("Reply %s to %s created by %s", reply.id, parent_id, user_id)
        return reply

    def quote_post(
        self,
        quoted_post_id: str,
        user_id: str,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> Post:
        """Create a post embedding a frozen copy of another post's content.

        A deleted original may still be quoted; its snapshot is the deletion
        marker. Hidden or removed posts cannot be quoted.
        """
        validate_content(content, "Quote")
        validate_media(media_url, media_type)

        def _apply() -> Post:
            quoted = self.posts.get_by_id(quoted_post_id)
            if quoted is None or (not quoted.is_deleted and not quoted.is_visible):
                raise NotFoundError("Quoted post not found")
            snapshot = DELETED_MARKER if quoted.is_deleted else (quoted.content or "")

            quote = self.posts.create(
                user_id=user_id,
                content=content,
                quoted_post_id=quoted.id,
                quoted_content_snapshot=snapshot,
                media_url=media_url,
                media_type=media_type,
            )
            self.notifications.create_quote_notification(quote.id, user_id, quoted.user_id)
            return quote

        quote = run_atomic(self.db, _apply)
        logger.info("Quote %s of %s created by %s", quote.id, quoted_post_id, user_id)
        return quote

    def _get_owned(self, post_id: str, user_id: str, verb: str) -> Post:
        post = self.posts.get_by_id(post_id, for_update=True)
        if post is None:
            raise NotFoundError("Post not found")
        if post.user_id != user_id:
            raise ForbiddenError(f"Not authorized to {verb} this post")
        if post.is_deleted:
            raise InvalidStateError(f"Cannot {verb} a deleted post")
        return post

    def edit_post(self, post_id: str, user_id: str, content: str) -> Post:
        """Replace a post's content. Concurrent edits resolve last-write-wins."""
        validate_content(content)

        post = run_atomic(
            self.db,
            lambda: self.posts.update_content(self._get_owned(post_id, user_id, "edit"), content),
        )
        logger.info("Post %s edited by %s", post_id, user_id)
        return post

    def delete_post(self, post_id: str, user_id: str) -> None:
        """Soft-delete a post owned by ``user_id``."""
        run_atomic(
            self.db,
            lambda: self.posts.soft_delete(self._get_owned(post_id, user_id, "delete")),
        )
        logger.info("Post %s deleted by %s", post_id, user_id)

    def view(self, post: Post, viewer_id: str | None = None) -> PostView:
        """Wrap a post the caller already holds, regardless of visibility."""
        return self.posts.with_viewer([post], viewer_id)[0]

    def get_post(self, post_id: str, viewer_id: str | None = None) -> PostView:
        post = self.posts.get_visible(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return self.posts.with_viewer([post], viewer_id)[0]

    def get_thread(self, post_id: str, viewer_id: str | None = None) -> ThreadView:
        """Return a post and its visible replies with the viewer's votes."""
        post = self.posts.get_visible(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        replies = self.posts.list_replies(post.id)
        views = self.posts.with_viewer([post, *replies], viewer_id)
        return ThreadView(post=views[0], replies=views[1:])

    def get_feed(
        self,
        sort: str = SORT_CHRONOLOGICAL,
        cursor: str | None = None,
        limit: int | None = None,
        viewer_id: str | None = None,
    ) -> FeedPage:
        return self.feed.get_feed(sort=sort, cursor=cursor, limit=limit, viewer_id=viewer_id)
