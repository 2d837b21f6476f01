"""Emoji reactions on posts."""

from __future__ import annotations

import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from setlist_board.core.errors import NotFoundError, ValidationError
from setlist_board.db.session import run_atomic
from setlist_board.models.reaction import EMOJI_CODE_MAX_LENGTH, Reaction
from setlist_board.repositories.post_repo import PostRepository
from setlist_board.services.notifications import NotificationService

logger = logging.getLogger(__name__)

REACTION_ADDED = "added"
REACTION_REMOVED = "removed"

__all__ = ["REACTION_ADDED", "REACTION_REMOVED", "ReactionLedger"]


class ReactionLedger:
    """Toggles reactions and notifies authors when one is added."""

    def __init__(
        self,
        db: Session,
        posts: PostRepository,
        notifications: NotificationService,
    ) -> None:
        self.db = db
        self.posts = posts
        self.notifications = notifications

    def _count(self, post_id: str, emoji_code: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Reaction)
            .where(Reaction.post_id == post_id, Reaction.emoji_code == emoji_code)
        )
        return int(self.db.execute(stmt).scalar_one())

    def toggle_reaction(self, post_id: str, user_id: str, emoji_code: str) -> tuple[str, int]:
        """Add the reaction if absent, remove it otherwise.

        Returns:
            ``(action, count)`` where ``count`` is the number of reactions with
            this emoji on the post after the toggle.

        Raises:
            ValidationError: Blank or oversized emoji code.
            NotFoundError: The post is missing or deleted.
        """
        emoji_code = (emoji_code or "").strip()
        if not emoji_code:
            raise ValidationError("Emoji code cannot be empty")
        if len(emoji_code) > EMOJI_CODE_MAX_LENGTH:
            raise ValidationError(
                f"Emoji code must be {EMOJI_CODE_MAX_LENGTH} characters or less"
            )

        def _apply() -> tuple[str, int]:
            post = self.posts.get_by_id(post_id)
            if post is None or post.is_deleted:
                raise NotFoundError("Post not found")

            existing = self.db.execute(
                select(Reaction).where(
                    Reaction.post_id == post_id,
                    Reaction.user_id == user_id,
                    Reaction.emoji_code == emoji_code,
                )
            ).scalars().first()

            if existing is not None:
                self.db.delete(existing)
                self.db.flush()
                return REACTION_REMOVED, self._count(post_id, emoji_code)

            self.db.add(Reaction(post_id=post_id, user_id=user_id, emoji_code=emoji_code))
            self.db.flush()
            self.notifications.create_reaction_notification(post_id, user_id, post.user_id)
            return REACTION_ADDED, self._count(post_id, emoji_code)

        action, count = run_atomic(self.db, _apply)
        logger.debug("Reaction %s %s on post %s by %s", emoji_code, action, post_id, user_id)
        return action, count

    def get_reaction_summary(self, post_id: str) -> list[tuple[str, int]]:
        """Return ``(emoji_code, count)`` pairs, most used first."""
        count = func.count(Reaction.id)
        stmt = (
            select(Reaction.emoji_code, count)
            .where(Reaction.post_id == post_id)
            .group_by(Reaction.emoji_code)
            .order_by(count.desc(), Reaction.emoji_code.asc())
        )
        return [(emoji, int(total)) for emoji, total in self.db.execute(stmt)]
