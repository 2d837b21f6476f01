# src/setlist_board/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    moderation_router,
    notifications_router,
    posts_router,
    reactions_router,
    votes_router,
)

__all__ = [
    "posts_router",
    "votes_router",
    "reactions_router",
    "notifications_router",
    "moderation_router",
]
