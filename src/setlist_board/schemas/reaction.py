"""Reaction-related Pydantic schemas."""

from typing import Literal

from pydantic import BaseModel, Field


class ReactionCreate(BaseModel):
    """Schema for toggling an emoji reaction."""

    post_id: str
    emoji_code: str = Field(..., description="Emoji short code, at most 32 characters")


class ReactionResponse(BaseModel):
    """Outcome of a reaction toggle."""

    action: Literal["added", "removed"]
    reaction_count: int


class ReactionCount(BaseModel):
    """How many users reacted to a post with one emoji."""

    emoji_code: str
    count: int
