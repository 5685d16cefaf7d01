"""
Access policies — decide whether a caller may perform an action on an entity.

A policy answers two questions:

    can(caller, action, entity)  -> bool
        Single-entity check, evaluated before every create/read/update/delete
        issued through a scoped handle.

    readable(caller, model)      -> SQL predicate
        The rows of `model` the caller may see, applied to list queries so
        they never return rows the caller could not read one by one.
"""

from __future__ import annotations

from typing import Any, Protocol

from sqlalchemy import ColumnElement, false, or_, true

from blog_api.access.context import CallerContext
from blog_api.core.constants import Action
from blog_api.db.models.post import Post
from blog_api.db.models.user import User


class AccessPolicy(Protocol):
    def can(self, caller: CallerContext, action: Action, entity: Any) -> bool: ...

    def readable(self, caller: CallerContext, model: type) -> ColumnElement[bool]: ...


class OwnershipPolicy:
    """Default policy for the blog.

    Users:
        create: anyone (signup)
        read: any identified caller
        update / delete: only the user themself
    Posts:
        create: only as the author
        read: the author, or anyone once published
        update / delete: only the author
    """

    def can(self, caller: CallerContext, action: Action, entity: Any) -> bool:
        if isinstance(entity, User):
            return self._can_user(caller, action, entity)
        if isinstance(entity, Post):
            return self._can_post(caller, action, entity)
        return False

    def readable(self, caller: CallerContext, model: type) -> ColumnElement[bool]:
        if model is User:
            return true()
        if model is Post:
            return or_(Post.author_id == caller.user_id, Post.published.is_(True))
        return false()

    @staticmethod
    def _can_user(caller: CallerContext, action: Action, user: User) -> bool:
        if action in (Action.CREATE, Action.READ):
            return True
        return user.id == caller.user_id

    @staticmethod
    def _can_post(caller: CallerContext, action: Action, post: Post) -> bool:
        is_author = post.author_id == caller.user_id
        if action == Action.READ:
            return is_author or bool(post.published)
        return is_author


default_policy = OwnershipPolicy()
