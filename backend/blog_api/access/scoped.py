"""
Scoped data-access handle.

`scoped_data_access(db, caller)` returns a handle whose `users` and
`posts` operations all run as `caller`:

- single-entity operations load (or build) the entity, ask the policy,
  and raise AccessDeniedError on refusal instead of silently skipping;
- list operations add the policy's `readable` predicate to the query.

Repositories stay policy-free; this module is the only caller of them
from the API layer.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.access.context import CallerContext
from blog_api.access.policy import AccessPolicy, default_policy
from blog_api.core.constants import Action, SortOrder
from blog_api.core.errors import (
    AccessDeniedError,
    ConstraintViolationError,
    EntityNotFoundError,
)
from blog_api.core.logging import get_logger
from blog_api.db.models.post import Post
from blog_api.db.models.user import User
from blog_api.repositories import posts as post_repository
from blog_api.repositories import users as user_repository

logger = get_logger(__name__)


class _ScopedRepository:
    """Shared plumbing: session, caller, policy and the check itself."""

    entity_name = ""

    def __init__(self, db: AsyncSession, caller: CallerContext, policy: AccessPolicy) -> None:
        self._db = db
        self._caller = caller
        self._policy = policy

    def _check(self, action: Action, entity: object, entity_id: int | None = None) -> None:
        if not self._policy.can(self._caller, action, entity):
            logger.warning(
                "Access denied",
                action=str(action),
                entity=self.entity_name,
                entity_id=entity_id,
                user_id=self._caller.user_id,
            )
            raise AccessDeniedError(
                str(action),
                self.entity_name,
                entity_id,
                user_id=self._caller.user_id,
            )


class ScopedUsers(_ScopedRepository):
    """User operations as seen by one caller."""

    entity_name = "User"

    async def create(
        self,
        *,
        email: str,
        name: str | None = None,
        posts: Iterable[dict] = (),
    ) -> User:
        """Create a user and its initial posts in one flush.

        Nested posts are covered by the user-create check; they are owned
        by the new user, who does not exist yet when the caller asks.
        """
        user = user_repository.build_user(email=email, name=name, posts=posts)
        self._check(Action.CREATE, user)
        try:
            await user_repository.add_user(self._db, user)
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"User with email {email} already exists",
                entity=self.entity_name,
                user_id=self._caller.user_id,
            ) from exc
        logger.info("User created", new_user_id=user.id, posts=len(user.posts))
        return user

    async def get(self, user_id: int) -> User:
        user = await user_repository.get_user_by_id(self._db, user_id)
        if user is None:
            raise EntityNotFoundError(self.entity_name, user_id)
        self._check(Action.READ, user, user_id)
        return user

    async def list_all(self) -> list[User]:
        return await user_repository.list_users(
            self._db,
            where=self._policy.readable(self._caller, User),
        )

    async def drafts(self, user_id: int) -> list[Post]:
        """Unpublished posts of `user_id` that the caller may read."""
        await self.get(user_id)
        return await post_repository.list_drafts_by_author(
            self._db,
            user_id,
            where=self._policy.readable(self._caller, Post),
        )


class ScopedPosts(_ScopedRepository):
    """Post operations as seen by one caller."""

    entity_name = "Post"

    async def _load(self, post_id: int, action: Action, *, with_author: bool = False) -> Post:
        post = await post_repository.get_post_by_id(self._db, post_id, with_author=with_author)
        if post is None:
            raise EntityNotFoundError(self.entity_name, post_id)
        self._check(action, post, post_id)
        return post

    async def create(self, *, title: str, content: str | None = None) -> Post:
        """Create a post authored by the caller."""
        post = post_repository.build_post(
            title=title,
            content=content,
            author_id=self._caller.user_id,
        )
        self._check(Action.CREATE, post)
        try:
            await post_repository.add_post(self._db, post)
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"User with ID {self._caller.user_id} cannot author posts",
                entity=self.entity_name,
                user_id=self._caller.user_id,
            ) from exc
        logger.info("Post created", post_id=post.id)
        return post

    async def get(self, post_id: int, *, with_author: bool = True) -> Post:
        return await self._load(post_id, Action.READ, with_author=with_author)

    async def list_all(self, *, with_author: bool = True) -> list[Post]:
        return await post_repository.list_posts(
            self._db,
            where=self._policy.readable(self._caller, Post),
            with_author=with_author,
        )

    async def feed(
        self,
        *,
        search: str | None = None,
        skip: int | None = None,
        take: int | None = None,
        order: SortOrder = SortOrder.DESC,
    ) -> list[Post]:
        return await post_repository.search_published(
            self._db,
            search=search,
            skip=skip,
            take=take,
            order=order,
            where=self._policy.readable(self._caller, Post),
        )

    async def increment_views(self, post_id: int) -> Post:
        post = await self._load(post_id, Action.UPDATE)
        return await post_repository.increment_view_count(self._db, post)

    async def toggle_published(self, post_id: int) -> Post:
        post = await self._load(post_id, Action.UPDATE)
        post = await post_repository.toggle_published(self._db, post)
        logger.info("Post publish state changed", post_id=post_id, published=post.published)
        return post

    async def delete(self, post_id: int) -> Post:
        post = await self._load(post_id, Action.DELETE)
        await post_repository.delete_post(self._db, post)
        logger.info("Post deleted", post_id=post_id)
        return post


class ScopedDataAccess:
    """Data-access handle bound to one caller and one policy."""

    def __init__(
        self,
        db: AsyncSession,
        caller: CallerContext,
        policy: AccessPolicy,
    ) -> None:
        self.caller = caller
        self.users = ScopedUsers(db, caller, policy)
        self.posts = ScopedPosts(db, caller, policy)


def scoped_data_access(
    db: AsyncSession,
    caller: CallerContext,
    policy: AccessPolicy | None = None,
) -> ScopedDataAccess:
    """Build a handle whose operations are authorized for `caller`."""
    return ScopedDataAccess(db, caller, policy or default_policy)
