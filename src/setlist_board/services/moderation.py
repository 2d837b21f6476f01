"""Moderation services for Setlist Board."""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload

from setlist_board.core.errors import ForbiddenError, NotFoundError, ValidationError
from setlist_board.db.session import run_atomic
from setlist_board.db.time import utcnow
from setlist_board.models.moderation import (
    FLAG_REASONS,
    FLAG_STATUS_ACTIONED,
    FLAG_STATUS_DISMISSED,
    FLAG_STATUS_PENDING,
    ContentFlag,
)
from setlist_board.models.post import (
    INVISIBLE_STATUSES,
    MODERATION_STATUS_CLEAN,
    MODERATION_STATUS_FLAGGED,
    MODERATION_STATUS_HIDDEN,
    MODERATION_STATUS_REMOVED,
    Post,
)
from setlist_board.models.user import User
from setlist_board.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)

# Number of reports after which a post is hidden without waiting for review.
AUTO_HIDE_THRESHOLD = 3

DESCRIPTION_MAX_LENGTH = 500

REVIEW_DISMISS = "dismiss"
REVIEW_HIDE = "hide"
REVIEW_REMOVE = "remove"
REVIEW_ACTIONS = (REVIEW_DISMISS, REVIEW_HIDE, REVIEW_REMOVE)

__all__ = [
    "AUTO_HIDE_THRESHOLD",
    "REVIEW_ACTIONS",
    "ModerationService",
]


class ModerationService:
    """Service handling content flags and post moderation state transitions.

    State machine: ``clean -> flagged -> hidden | removed`` and any state back
    to ``clean`` through :meth:`restore_post`. Every transition is written by
    ``PostRepository.update_moderation_state``.
    """

    def __init__(self, db: Session, posts: PostRepository) -> None:
        self.db = db
        self.posts = posts

    def _require_moderator(self, user_id: str) -> User:
        user = self.db.get(User, user_id)
        if user is None or not user.is_moderator:
            raise ForbiddenError("Moderator role required")
        return user

    def _get_post(self, post_id: str) -> Post:
        post = self.posts.get_by_id(post_id, for_update=True)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def flag_post(
        self,
        post_id: str,
        user_id: str,
        reason: str,
        description: str | None = None,
    ) -> ContentFlag:
        """Record a report against a post.

        The first report moves a clean post to ``flagged``. Once the post has
        collected ``AUTO_HIDE_THRESHOLD`` reports it is hidden by the system
        (``moderated_by`` stays None). Posts already hidden or removed keep
        their status.

        Args:
            post_id: Post being reported.
            user_id: Reporter.
            reason: One of ``FLAG_REASONS``.
            description: Optional free text, at most 500 characters.

        Returns:
            The new pending flag.

        Raises:
            ValidationError: Unknown reason or oversized description.
            NotFoundError: The post does not exist.
        """
        if reason not in FLAG_REASONS:
            raise ValidationError(f"Invalid flag reason: {reason}")
        if description is not None:
            description = description.strip() or None
        if description is not None and len(description) > DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
            )

        def _apply() -> ContentFlag:
            post = self._get_post(post_id)
            flag = ContentFlag(
                post_id=post_id,
                user_id=user_id,
                reason=reason,
                description=description,
                status=FLAG_STATUS_PENDING,
            )
            self.db.add(flag)
            self.db.flush()

            flag_count = self.posts.increment_flag_count(post_id)
            if post.moderation_status in INVISIBLE_STATUSES:
                return flag
            if flag_count >= AUTO_HIDE_THRESHOLD:
                self.posts.update_moderation_state(post, MODERATION_STATUS_HIDDEN, None)
                logger.warning("Post %s auto-hidden after %d flags", post_id, flag_count)
            elif post.moderation_status == MODERATION_STATUS_CLEAN:
                self.posts.update_moderation_state(post, MODERATION_STATUS_FLAGGED, None)
            return flag

        flag = run_atomic(self.db, _apply)
        logger.info("Post %s flagged by %s for %s", post_id, user_id, reason)
        return flag

    def get_pending_flags(self, limit: int = 20, offset: int = 0) -> list[ContentFlag]:
        """Return pending flags newest first with reporter, reviewer and post loaded."""
        stmt = (
            select(ContentFlag)
            .options(
                joinedload(ContentFlag.reporter),
                joinedload(ContentFlag.reviewer),
                joinedload(ContentFlag.post),
            )
            .where(ContentFlag.status == FLAG_STATUS_PENDING)
            .order_by(ContentFlag.created_at.desc(), ContentFlag.id.desc())
            .limit(max(limit, 1))
            .offset(max(offset, 0))
        )
        return list(self.db.execute(stmt).scalars())

    def get_flags_for_post(self, post_id: str) -> list[ContentFlag]:
        """Return every flag ever raised against a post, newest first."""
        stmt = (
            select(ContentFlag)
            .options(joinedload(ContentFlag.reporter), joinedload(ContentFlag.reviewer))
            .where(ContentFlag.post_id == post_id)
            .order_by(ContentFlag.created_at.desc(), ContentFlag.id.desc())
        )
        return list(self.db.execute(stmt).scalars())

    def review_flag(self, flag_id: str, action: str, reviewer_id: str) -> ContentFlag:
        """Resolve a pending flag.

        ``dismiss`` closes the flag and leaves the post alone; ``hide`` and
        ``remove`` close it as actioned and move the post accordingly.

        Raises:
            ValidationError: Unknown action.
            ForbiddenError: The reviewer is not a moderator.
            NotFoundError: The flag does not exist or was already reviewed.
        """
        if action not in REVIEW_ACTIONS:
            raise ValidationError(f"Invalid review action: {action}")
        self._require_moderator(reviewer_id)

        def _apply() -> ContentFlag:
            flag = self.db.get(ContentFlag, flag_id)
            if flag is None or flag.status != FLAG_STATUS_PENDING:
                raise NotFoundError("Flag not found")

            flag.status = FLAG_STATUS_DISMISSED if action == REVIEW_DISMISS else FLAG_STATUS_ACTIONED
            flag.reviewed_by = reviewer_id
            flag.reviewed_at = utcnow()
            self.db.flush()

            if action == REVIEW_HIDE:
                self._transition(flag.post_id, MODERATION_STATUS_HIDDEN, reviewer_id)
            elif action == REVIEW_REMOVE:
                self._transition(flag.post_id, MODERATION_STATUS_REMOVED, reviewer_id)
            return flag

        flag = run_atomic(self.db, _apply)
        logger.info("Flag %s reviewed by %s: %s", flag_id, reviewer_id, action)
        return flag

    def hide_post(self, post_id: str, moderator_id: str) -> Post:
        self._require_moderator(moderator_id)
        post = run_atomic(
            self.db,
            lambda: self._transition(post_id, MODERATION_STATUS_HIDDEN, moderator_id),
        )
        logger.info("Post %s hidden by %s", post_id, moderator_id)
        return post

    def remove_post(self, post_id: str, moderator_id: str) -> Post:
        self._require_moderator(moderator_id)
        post = run_atomic(
            self.db,
            lambda: self._transition(post_id, MODERATION_STATUS_REMOVED, moderator_id),
        )
        logger.info("Post %s removed by %s", post_id, moderator_id)
        return post

    def restore_post(self, post_id: str, moderator_id: str) -> Post:
        """Return a moderated post to ``clean``.

        ``flag_count`` is left untouched, so one more report re-hides a post
        that had reached the threshold.
        """
        self._require_moderator(moderator_id)
        post = run_atomic(
            self.db,
            lambda: self._transition(post_id, MODERATION_STATUS_CLEAN, moderator_id),
        )
        logger.info("Post %s restored by %s", post_id, moderator_id)
        return post

    def _transition(self, post_id: str, status: str, moderator_id: str | None) -> Post:
        post = self._get_post(post_id)
        return self.posts.update_moderation_state(post, status, moderator_id)
