"""Post request/response schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from blog_api.api.schemas.base import APIModel


class PostCreate(APIModel):
    """Request payload for /post and the nested posts of /signup."""

    title: str = Field(..., min_length=1, max_length=255)
    content: str | None = None


class PostRead(APIModel):
    id: int
    title: str
    content: str | None
    published: bool
    view_count: int
    author_id: int
    created_at: datetime
    updated_at: datetime


class PostAuthor(APIModel):
    id: int
    name: str | None
    email: str


class PostWithAuthor(PostRead):
    author: PostAuthor
