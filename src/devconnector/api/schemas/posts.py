"""Pydantic schemas for post endpoints."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from devconnector.api.schemas.common import require_text


class PostRequest(BaseModel):
    """Request schema for creating a post."""

    text: str | None = Field(None, validate_default=True)

    @field_validator("text")
    @classmethod
    def _text_required(cls, value: str | None) -> str:
        return require_text(value, "Text is required")


class CommentRequest(PostRequest):
    """Request schema for commenting on a post.

    The avatar shown next to the comment is taken from the request as sent.
    """

    avatar: str | None = None


class LikeResponse(BaseModel):
    id: str
    user: str


class CommentResponse(BaseModel):
    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    date: datetime


class PostResponse(BaseModel):
    """Response schema for a post."""

    id: str
    user: str
    text: str
    name: str | None = None
    avatar: str | None = None
    likes: list[LikeResponse] = Field(default_factory=list)
    comments: list[CommentResponse] = Field(default_factory=list)
    date: datetime
