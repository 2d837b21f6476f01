"""Vote-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class VoteCreate(BaseModel):
    """Schema for casting or toggling a vote."""

    post_id: str
    vote_type: Literal["upvote", "downvote"] = Field(
        ...,
        description="Sending the same type twice removes the vote",
    )


class VoteResponse(BaseModel):
    """The caller's vote after the toggle plus the post's fresh totals."""

    action: Literal["added", "removed"]
    vote_type: Literal["upvote", "downvote"] | None
    upvote_count: int
    downvote_count: int
    vote_score: int
