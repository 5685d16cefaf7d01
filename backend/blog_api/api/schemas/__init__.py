"""API schema package."""

from blog_api.api.schemas.posts import PostCreate, PostRead, PostWithAuthor
from blog_api.api.schemas.users import SignupRequest, UserRead

__all__ = ["PostCreate", "PostRead", "PostWithAuthor", "SignupRequest", "UserRead"]
