"""Request context middleware for log correlation."""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from blog_api.core.logging import bind_context, clear_context, get_logger

logger = get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Assign a correlation ID to each request and log its outcome.

    The ID comes from X-Request-ID when the client sends one and is
    echoed back on the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        clear_context()
        bind_context(request_id=request_id)

        try:
            logger.debug(
                "Request started",
                method=request.method,
                path=request.url.path,
            )
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
            )
            response.headers["X-Request-ID"] = request_id
            return response
        except Exception as exc:
            logger.exception(
                "Request failed",
                method=request.method,
                path=request.url.path,
                error=str(exc),
            )
            raise
        finally:
            clear_context()
