"""Post-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from setlist_board.db.time import ensure_utc
from setlist_board.repositories.post_repo import PostView

from .common import UserSummary


class PostCreate(BaseModel):
    """Schema for creating a post, reply or quote.

    ``parent_id`` takes precedence over ``quoted_post_id`` when both are sent.
    Content rules are enforced by the post service so that violations surface
    as 400 responses.
    """

    content: str = Field(..., description="Post body, 1-1000 characters")
    parent_id: str | None = Field(None, description="Top-level post being replied to")
    quoted_post_id: str | None = Field(None, description="Post being quoted")
    media_url: str | None = Field(None, description="URL of an attached image or GIF")
    media_type: str | None = Field(None, description="cloudflare_image or giphy")


class PostUpdate(BaseModel):
    """Schema for editing a post's content."""

    post_id: str
    content: str


class PostDelete(BaseModel):
    """Schema for soft-deleting a post."""

    post_id: str


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: str
    user_id: str
    user: UserSummary | None = None
    title: str | None = None
    content: str | None = None
    parent_id: str | None = None
    quoted_post_id: str | None = None
    quoted_content_snapshot: str | None = None
    media_url: str | None = None
    media_type: str | None = None
    reply_count: int
    upvote_count: int
    downvote_count: int
    vote_score: int
    moderation_status: str
    is_deleted: bool
    is_edited: bool = False
    edited_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    user_vote: str | None = None
    hot_score: float | None = None

    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_view(cls, view: PostView) -> PostResponse:
        """Build a response from a post as seen by one viewer."""
        post = view.post
        return cls(
            id=post.id,
            user_id=post.user_id,
            user=UserSummary.model_validate(post.user) if post.user is not None else None,
            title=post.title,
            content=post.content,
            parent_id=post.parent_id,
            quoted_post_id=post.quoted_post_id,
            quoted_content_snapshot=post.quoted_content_snapshot,
            media_url=post.media_url,
            media_type=post.media_type,
            reply_count=post.reply_count,
            upvote_count=post.upvote_count,
            downvote_count=post.downvote_count,
            vote_score=post.vote_score,
            moderation_status=post.moderation_status,
            is_deleted=post.is_deleted,
            is_edited=post.edited_at is not None,
            edited_at=ensure_utc(post.edited_at) if post.edited_at else None,
            created_at=ensure_utc(post.created_at),
            updated_at=ensure_utc(post.updated_at),
            user_vote=view.user_vote,
            hot_score=view.hot_score,
        )


class FeedResponse(BaseModel):
    """A page of the board feed."""

    posts: list[PostResponse]
    next_cursor: str | None = None


class ThreadResponse(BaseModel):
    """A top-level post with its visible replies, oldest first."""

    post: PostResponse
    replies: list[PostResponse]
