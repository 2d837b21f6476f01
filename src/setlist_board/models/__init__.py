# src/setlist_board/models/__init__.py
"""SQLAlchemy models for the Setlist Board posting core."""

from .moderation import ContentFlag
from .notification import Notification
from .post import Post
from .reaction import Reaction
from .user import User
from .vote import Vote

__all__ = [
    "ContentFlag",
    "Notification",
    "Post",
    "Reaction",
    "User",
    "Vote",
]
