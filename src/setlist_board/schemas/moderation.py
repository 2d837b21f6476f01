"""Moderation-related Pydantic schemas."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from setlist_board.db.time import ensure_utc
from setlist_board.models.moderation import ContentFlag

from .common import UserSummary


class FlagCreate(BaseModel):
    """Schema for reporting a post."""

    post_id: str
    reason: str = Field(
        ...,
        description="spam, harassment, inappropriate, misinformation or other",
    )
    description: str | None = Field(None, description="Optional details, at most 500 characters")


class FlagReview(BaseModel):
    """Schema for a moderator's decision on a pending flag."""

    action: str = Field(..., description="dismiss, hide or remove")


class FlaggedPostSummary(BaseModel):
    """The reported post as a moderator sees it."""

    id: str
    user_id: str
    content: str | None = None
    moderation_status: str
    flag_count: int
    is_deleted: bool

    model_config = ConfigDict(from_attributes=True)


class FlagResponse(BaseModel):
    """Schema for flag information returned by the API."""

    id: str
    post_id: str
    reason: str
    description: str | None = None
    status: str
    created_at: datetime
    reviewed_at: datetime | None = None
    reporter: UserSummary | None = None
    reviewer: UserSummary | None = None
    post: FlaggedPostSummary | None = None

    @classmethod
    def from_flag(cls, flag: ContentFlag) -> FlagResponse:
        return cls(
            id=flag.id,
            post_id=flag.post_id,
            reason=flag.reason,
            description=flag.description,
            status=flag.status,
            created_at=ensure_utc(flag.created_at),
            reviewed_at=ensure_utc(flag.reviewed_at) if flag.reviewed_at else None,
            reporter=UserSummary.model_validate(flag.reporter) if flag.reporter else None,
            reviewer=UserSummary.model_validate(flag.reviewer) if flag.reviewer else None,
            post=FlaggedPostSummary.model_validate(flag.post) if flag.post else None,
        )
