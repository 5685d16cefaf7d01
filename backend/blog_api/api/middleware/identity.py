"""Caller identity middleware.

Rejects any API request whose identity header is not a positive integer,
before routing reaches a handler.
"""

from collections.abc import Callable, Sequence

from fastapi import Request, Response, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse

from blog_api.access.context import CallerContext
from blog_api.core.config import settings
from blog_api.core.constants import PUBLIC_PATHS, UNAUTHORIZED_MESSAGE
from blog_api.core.logging import bind_context, get_logger

logger = get_logger(__name__)


class IdentityMiddleware(BaseHTTPMiddleware):
    """Parse the identity header into `request.state.caller`."""

    def __init__(
        self,
        app,
        header_name: str | None = None,
        exclude_paths: Sequence[str] = PUBLIC_PATHS,
    ):
        super().__init__(app)
        self.header_name = header_name or settings.IDENTITY_HEADER
        self.exclude_paths = tuple(exclude_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path.startswith(self.exclude_paths):
            return await call_next(request)

        caller = CallerContext.from_header(request.headers.get(self.header_name))
        if caller is None:
            logger.info(
                "Rejected request without caller identity",
                method=request.method,
                path=request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_403_FORBIDDEN,
                content={"error": UNAUTHORIZED_MESSAGE},
            )

        request.state.caller = caller
        bind_context(user_id=caller.user_id)
        return await call_next(request)
