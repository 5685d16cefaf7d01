"""API middleware package."""

from blog_api.api.middleware.identity import IdentityMiddleware
from blog_api.api.middleware.request_context import RequestContextMiddleware

__all__ = [
    "IdentityMiddleware",
    "RequestContextMiddleware",
]
