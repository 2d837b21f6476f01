# src/setlist_board/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .moderation import router as moderation_router
from .notifications import router as notifications_router
from .posts import router as posts_router
from .reactions import router as reactions_router
from .votes import router as votes_router

__all__ = [
    "posts_router",
    "votes_router",
    "reactions_router",
    "notifications_router",
    "moderation_router",
]
