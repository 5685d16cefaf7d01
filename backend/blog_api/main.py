"""FastAPI application entry point."""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from blog_api.api.errors import register_exception_handlers
from blog_api.api.middleware import IdentityMiddleware, RequestContextMiddleware
from blog_api.api.v1 import feed, posts, users
from blog_api.core.config import settings
from blog_api.core.logging import get_logger, setup_logging
from blog_api.db.session import engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle hooks."""
    setup_logging("DEBUG" if settings.APP_ENV == "development" else settings.LOG_LEVEL)
    logger = get_logger("startup")
    logger.info(
        "Application starting",
        env=settings.APP_ENV,
        url=f"http://{settings.APP_HOST}:{settings.APP_PORT}",
    )
    yield
    await engine.dispose()
    logger.info("Application shutting down")


app = FastAPI(
    title="Scoped Blog API",
    description="Users and posts behind a per-caller access policy",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(IdentityMiddleware)
app.add_middleware(RequestContextMiddleware)
# Outermost, so CORS preflights never need an identity
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Restrict in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

app.include_router(users.router)
app.include_router(posts.router)
app.include_router(feed.router)


@app.get("/health", tags=["Health"])
async def health_check() -> dict[str, str]:
    """Public health-check endpoint."""
    return {"status": "ok", "env": settings.APP_ENV}


def run() -> None:
    """Serve the app on the configured host and port."""
    uvicorn.run(
        "blog_api.main:app",
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        reload=settings.APP_ENV == "development",
        log_config=None,
    )


if __name__ == "__main__":
    run()
