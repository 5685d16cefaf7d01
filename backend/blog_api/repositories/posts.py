"""
Post repository containing all data-access operations for the posts table.

Counter and flag changes are issued as single UPDATE statements so that
concurrent requests never lose an increment or a toggle.
"""

from __future__ import annotations

from sqlalchemy import ColumnElement, asc, desc, not_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from blog_api.core.constants import SortOrder
from blog_api.db.models.post import Post


def build_post(*, title: str, content: str | None, author_id: int) -> Post:
    """Build an unsaved post with explicit defaults."""
    return Post(
        title=title,
        content=content,
        author_id=author_id,
        published=False,
        view_count=0,
    )


async def add_post(db: AsyncSession, post: Post) -> Post:
    """Persist a post built by `build_post`."""
    db.add(post)
    await db.flush()
    return post


async def get_post_by_id(
    db: AsyncSession,
    post_id: int,
    *,
    with_author: bool = False,
) -> Post | None:
    """Fetch a post by primary key, optionally eager-loading its author."""
    stmt = select(Post).where(Post.id == post_id)
    if with_author:
        stmt = stmt.options(selectinload(Post.author))
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_posts(
    db: AsyncSession,
    *,
    where: ColumnElement[bool] | None = None,
    with_author: bool = False,
) -> list[Post]:
    """List posts in id order, optionally restricted by a predicate."""
    stmt = select(Post).order_by(Post.id)
    if where is not None:
        stmt = stmt.where(where)
    if with_author:
        stmt = stmt.options(selectinload(Post.author))
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_drafts_by_author(
    db: AsyncSession,
    author_id: int,
    *,
    where: ColumnElement[bool] | None = None,
) -> list[Post]:
    """List unpublished posts written by one author."""
    stmt = (
        select(Post)
        .where(Post.author_id == author_id, Post.published.is_(False))
        .order_by(Post.id)
    )
    if where is not None:
        stmt = stmt.where(where)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def search_published(
    db: AsyncSession,
    *,
    search: str | None = None,
    skip: int | None = None,
    take: int | None = None,
    order: SortOrder = SortOrder.DESC,
    where: ColumnElement[bool] | None = None,
) -> list[Post]:
    """Published posts matching `search` in title or content, newest-updated first by default."""
    direction = asc if order == SortOrder.ASC else desc
    stmt = (
        select(Post)
        .where(Post.published.is_(True))
        .options(selectinload(Post.author))
        .order_by(direction(Post.updated_at), direction(Post.id))
    )
    if search:
        stmt = stmt.where(
            or_(
                Post.title.contains(search, autoescape=True),
                Post.content.contains(search, autoescape=True),
            )
        )
    if where is not None:
        stmt = stmt.where(where)
    if skip:
        stmt = stmt.offset(skip)
    if take:
        stmt = stmt.limit(take)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def increment_view_count(db: AsyncSession, post: Post) -> Post:
    """Atomically add one to the view counter and reload the row."""
    stmt = (
        update(Post)
        .where(Post.id == post.id)
        .values(view_count=Post.view_count + 1)
        .execution_options(synchronize_session=False)
    )
    await db.execute(stmt)
    await db.refresh(post)
    return post


async def toggle_published(db: AsyncSession, post: Post) -> Post:
    """Atomically flip the published flag and reload the row."""
    stmt = (
        update(Post)
        .where(Post.id == post.id)
        .values(published=not_(Post.published))
        .execution_options(synchronize_session=False)
    )
    await db.execute(stmt)
    await db.refresh(post)
    return post


async def delete_post(db: AsyncSession, post: Post) -> None:
    """Hard-delete a loaded post."""
    await db.delete(post)
    await db.flush()
