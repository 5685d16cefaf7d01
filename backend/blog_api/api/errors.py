"""Exception handlers rendering domain errors as `{"error": ...}` payloads."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from blog_api.core.errors import BlogApiError
from blog_api.core.logging import get_logger

logger = get_logger(__name__)


async def blog_api_error_handler(request: Request, exc: BlogApiError) -> JSONResponse:
    logger.info(
        "Request rejected",
        error_type=type(exc).__name__,
        error=exc.message,
        entity=exc.entity,
        entity_id=exc.entity_id,
    )
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogApiError, blog_api_error_handler)
