"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class UserSummary(BaseModel):
    """Minimal author, actor or reviewer details embedded in responses."""

    id: str
    username: str
    avatar_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class SuccessResponse(BaseModel):
    """Acknowledgement for writes that return no resource."""

    success: bool = Field(True, description="Always true; failures are HTTP errors.")
