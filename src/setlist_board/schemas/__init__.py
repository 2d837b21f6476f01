# src/setlist_board/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import SuccessResponse, UserSummary
from .moderation import FlagCreate, FlagResponse, FlagReview
from .notification import (
    MarkReadRequest,
    MarkReadResponse,
    NotificationListResponse,
    NotificationResponse,
)
from .post import (
    FeedResponse,
    PostCreate,
    PostDelete,
    PostResponse,
    PostUpdate,
    ThreadResponse,
)
from .reaction import ReactionCount, ReactionCreate, ReactionResponse
from .vote import VoteCreate, VoteResponse

__all__ = [
    "FeedResponse", "PostCreate", "PostDelete", "PostResponse", "PostUpdate", "ThreadResponse",
    "FlagCreate", "FlagResponse", "FlagReview",
    "MarkReadRequest", "MarkReadResponse", "NotificationListResponse", "NotificationResponse",
    "ReactionCount", "ReactionCreate", "ReactionResponse",
    "SuccessResponse", "UserSummary",
    "VoteCreate", "VoteResponse",
]
