"""Post endpoints: create, read, count views, publish and delete."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from blog_api.access import ScopedDataAccess
from blog_api.api.deps import get_data_access
from blog_api.api.schemas.base import ErrorResponse
from blog_api.api.schemas.posts import PostCreate, PostRead, PostWithAuthor
from blog_api.core.constants import MAX_ID

router = APIRouter(tags=["Posts"])

PostId = Annotated[int, Path(ge=1, le=MAX_ID)]

_NOT_FOUND_OR_DENIED = {
    403: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
}


@router.post("/post", response_model=PostRead)
async def create_post(
    payload: PostCreate,
    data: ScopedDataAccess = Depends(get_data_access),
) -> PostRead:
    """Create a post owned by the caller."""
    post = await data.posts.create(title=payload.title, content=payload.content)
    return PostRead.model_validate(post)


@router.put("/post/{post_id}/views", response_model=PostRead, responses=_NOT_FOUND_OR_DENIED)
async def increment_post_views(
    post_id: PostId,
    data: ScopedDataAccess = Depends(get_data_access),
) -> PostRead:
    post = await data.posts.increment_views(post_id)
    return PostRead.model_validate(post)


@router.put("/publish/{post_id}", response_model=PostRead, responses=_NOT_FOUND_OR_DENIED)
async def toggle_publish(
    post_id: PostId,
    data: ScopedDataAccess = Depends(get_data_access),
) -> PostRead:
    """Flip a post between draft and published."""
    post = await data.posts.toggle_published(post_id)
    return PostRead.model_validate(post)


@router.delete("/post/{post_id}", response_model=PostRead, responses=_NOT_FOUND_OR_DENIED)
async def delete_post(
    post_id: PostId,
    data: ScopedDataAccess = Depends(get_data_access),
) -> PostRead:
    """Delete a post and return it as it was."""
    post = await data.posts.delete(post_id)
    return PostRead.model_validate(post)


@router.get("/post/{post_id}", response_model=PostWithAuthor, responses=_NOT_FOUND_OR_DENIED)
async def get_post(
    post_id: PostId,
    data: ScopedDataAccess = Depends(get_data_access),
) -> PostWithAuthor:
    post = await data.posts.get(post_id)
    return PostWithAuthor.model_validate(post)


@router.get("/post", response_model=list[PostWithAuthor])
async def list_posts(data: ScopedDataAccess = Depends(get_data_access)) -> list[PostWithAuthor]:
    """All posts visible to the caller, with their authors."""
    posts = await data.posts.list_all()
    return [PostWithAuthor.model_validate(p) for p in posts]
