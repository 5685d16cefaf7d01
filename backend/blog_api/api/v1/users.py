"""User endpoints: signup, directory listing and per-user drafts."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from blog_api.access import ScopedDataAccess
from blog_api.api.deps import get_data_access
from blog_api.api.schemas.base import ErrorResponse
from blog_api.api.schemas.posts import PostRead
from blog_api.api.schemas.users import SignupRequest, UserRead
from blog_api.core.constants import MAX_ID

router = APIRouter(tags=["Users"])

UserId = Annotated[int, Path(ge=1, le=MAX_ID)]


@router.post(
    "/signup",
    response_model=UserRead,
    responses={409: {"model": ErrorResponse}},
)
async def signup(
    payload: SignupRequest,
    data: ScopedDataAccess = Depends(get_data_access),
) -> UserRead:
    """Create a user together with any initial posts."""
    user = await data.users.create(
        email=payload.email,
        name=payload.name,
        posts=[p.model_dump() for p in payload.posts],
    )
    return UserRead.model_validate(user)


@router.get("/users", response_model=list[UserRead])
async def list_users(data: ScopedDataAccess = Depends(get_data_access)) -> list[UserRead]:
    users = await data.users.list_all()
    return [UserRead.model_validate(u) for u in users]


@router.get(
    "/user/{user_id}/drafts",
    response_model=list[PostRead],
    responses={404: {"model": ErrorResponse}},
)
async def list_user_drafts(
    user_id: UserId,
    data: ScopedDataAccess = Depends(get_data_access),
) -> list[PostRead]:
    """Unpublished posts of one user, as far as the caller may see them."""
    drafts = await data.users.drafts(user_id)
    return [PostRead.model_validate(p) for p in drafts]
