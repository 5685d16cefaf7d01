"""
User repository containing all data-access operations for the users table.

Repository rules:
- Pure data-access logic only
- Every function receives AsyncSession explicitly
- Functions flush, but never commit
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.db.models.post import Post
from blog_api.db.models.user import User


def build_user(
    *,
    email: str,
    name: str | None = None,
    posts: Iterable[dict] = (),
) -> User:
    """Build an unsaved user with nested unsaved posts."""
    user = User(email=email.strip(), name=name)
    user.posts = [
        Post(title=p["title"], content=p.get("content"), published=False, view_count=0)
        for p in posts
    ]
    return user


async def add_user(db: AsyncSession, user: User) -> User:
    """Persist a user built by `build_user` together with its posts."""
    db.add(user)
    await db.flush()
    return user


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by primary key."""
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    """Fetch a user by email address."""
    stmt = select(User).where(User.email == email.strip())
    result = await db.execute(stmt)
    return result.scalar_one_or_none()


async def list_users(
    db: AsyncSession,
    *,
    where: ColumnElement[bool] | None = None,
) -> list[User]:
    """List users in id order, optionally restricted by a predicate."""
    stmt = select(User).order_by(User.id)
    if where is not None:
        stmt = stmt.where(where)
    result = await db.execute(stmt)
    return list(result.scalars().all())
