"""Public feed: search, paginate and sort published posts."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from blog_api.access import ScopedDataAccess
from blog_api.api.deps import get_data_access
from blog_api.api.schemas.posts import PostWithAuthor
from blog_api.core.constants import MAX_ID, SortOrder

router = APIRouter(tags=["Feed"])


@router.get("/feed", response_model=list[PostWithAuthor])
async def get_feed(
    search_string: str | None = Query(default=None, alias="searchString"),
    skip: int | None = Query(default=None, ge=0, le=MAX_ID),
    take: int | None = Query(default=None, ge=0, le=MAX_ID),
    order_by: SortOrder = Query(default=SortOrder.DESC, alias="orderBy"),
    data: ScopedDataAccess = Depends(get_data_access),
) -> list[PostWithAuthor]:
    """
    Published posts, newest update first unless `orderBy=asc`.

    `searchString` matches a substring of the title or the content;
    `skip`/`take` page through the result.
    """
    posts = await data.posts.feed(
        search=search_string,
        skip=skip,
        take=take,
        order=order_by,
    )
    return [PostWithAuthor.model_validate(p) for p in posts]
