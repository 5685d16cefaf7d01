"""Shared dependencies for API routes."""

from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from blog_api.access import AccessPolicy, CallerContext, ScopedDataAccess, default_policy, scoped_data_access
from blog_api.core.errors import UnauthorizedError
from blog_api.db.session import get_db


def get_policy() -> AccessPolicy:
    """Access policy applied to every scoped handle."""
    return default_policy


def get_caller(request: Request) -> CallerContext:
    """Caller identity placed on the request by IdentityMiddleware."""
    caller = getattr(request.state, "caller", None)
    if caller is None:
        raise UnauthorizedError()
    return caller


def get_data_access(
    # Function scope: the commit finishes before the response is sent
    db: AsyncSession = Depends(get_db, scope="function"),
    caller: CallerContext = Depends(get_caller),
    policy: AccessPolicy = Depends(get_policy),
) -> ScopedDataAccess:
    """Data-access handle scoped to the calling identity."""
    return scoped_data_access(db, caller, policy)
