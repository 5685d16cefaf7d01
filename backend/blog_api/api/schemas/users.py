"""User request/response schemas."""

from __future__ import annotations

from pydantic import Field

from blog_api.api.schemas.base import APIModel
from blog_api.api.schemas.posts import PostCreate


class SignupRequest(APIModel):
    """Request payload for /signup: a user plus optional initial posts."""

    name: str | None = Field(default=None, max_length=255)
    email: str = Field(..., min_length=3, max_length=320)
    posts: list[PostCreate] = Field(default_factory=list)


class UserRead(APIModel):
    id: int
    name: str | None
    email: str
