"""Vote ledger: one vote per (post, user) and the aggregates derived from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from setlist_board.core.errors import NotFoundError, ValidationError
from setlist_board.db.session import run_atomic
from setlist_board.models.vote import VOTE_DOWNVOTE, VOTE_TYPES, VOTE_UPVOTE, Vote
from setlist_board.repositories.post_repo import PostRepository

logger = logging.getLogger(__name__)

__all__ = ["VoteLedger", "VoteResult"]


@dataclass(frozen=True)
class VoteResult:
    """Outcome of a toggle: the caller's vote after the call plus fresh totals."""

    vote_type: str | None
    upvote_count: int
    downvote_count: int
    vote_score: int


class VoteLedger:
    """Sole writer of ``Vote`` rows and of the vote aggregates on ``Post``."""

    def __init__(self, db: Session, posts: PostRepository) -> None:
        self.db = db
        self.posts = posts

    def _get_vote(self, post_id: str, user_id: str) -> Vote | None:
        stmt = select(Vote).where(Vote.post_id == post_id, Vote.user_id == user_id)
        return self.db.execute(stmt).scalars().first()

    def _count(self, post_id: str, vote_type: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Vote)
            .where(Vote.post_id == post_id, Vote.vote_type == vote_type)
        )
        return int(self.db.execute(stmt).scalar_one())

    def get_user_vote(self, post_id: str, user_id: str) -> str | None:
        """Return ``user_id``'s current vote type on the post, if any."""
        vote = self._get_vote(post_id, user_id)
        return vote.vote_type if vote is not None else None

    def toggle_vote(self, post_id: str, user_id: str, vote_type: str) -> VoteResult:
        """Apply a vote click.

        Same type as the existing vote removes it, a different type flips it,
        no vote yet creates one. Counts are then recomputed from the vote rows
        so concurrent toggles converge on the true totals.

        Raises:
            ValidationError: ``vote_type`` is not upvote/downvote.
            NotFoundError: the post does not exist or was deleted.
        """
        if vote_type not in VOTE_TYPES:
            raise ValidationError(f"Invalid vote type: {vote_type}")

        def _apply() -> VoteResult:
            post = self.posts.get_by_id(post_id)
            if post is None or post.is_deleted:
                raise NotFoundError("Post not found")

            existing = self._get_vote(post_id, user_id)
            current: str | None
            if existing is None:
                self.db.add(Vote(post_id=post_id, user_id=user_id, vote_type=vote_type))
                current = vote_type
            elif existing.vote_type == vote_type:
                self.db.delete(existing)
                current = None
            else:
                existing.vote_type = vote_type
                current = vote_type
            self.db.flush()

            upvotes = self._count(post_id, VOTE_UPVOTE)
            downvotes = self._count(post_id, VOTE_DOWNVOTE)
            self.posts.set_vote_counts(post_id, upvotes, downvotes)
            return VoteResult(
                vote_type=current,
                upvote_count=upvotes,
                downvote_count=downvotes,
                vote_score=upvotes - downvotes,
            )

        result = run_atomic(self.db, _apply)
        logger.debug(
            "Vote toggled on post %s by %s: %s (score %d)",
            post_id,
            user_id,
            result.vote_type,
            result.vote_score,
        )
        return result
