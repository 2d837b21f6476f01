"""Wiring of the posting core around one database session."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.orm import Session

from setlist_board.repositories.post_repo import PostRepository
from setlist_board.services.feed import FeedRanker
from setlist_board.services.moderation import ModerationService
from setlist_board.services.notifications import NotificationService
from setlist_board.services.post_service import PostService
from setlist_board.services.reactions import ReactionLedger
from setlist_board.services.vote_ledger import VoteLedger


@dataclass
class Services:
    """Every component of the posting core, sharing one session."""

    posts: PostService
    votes: VoteLedger
    notifications: NotificationService
    moderation: ModerationService
    feed: FeedRanker
    reactions: ReactionLedger


def build_services(db: Session) -> Services:
    """Construct the components for a single request or unit of work."""
    repo = PostRepository(db)
    notifications = NotificationService(db)
    feed = FeedRanker(db, repo)
    return Services(
        posts=PostService(db, repo, notifications, feed),
        votes=VoteLedger(db, repo),
        notifications=notifications,
        moderation=ModerationService(db, repo),
        feed=feed,
        reactions=ReactionLedger(db, repo, notifications),
    )
