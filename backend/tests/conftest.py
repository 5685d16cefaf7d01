"""Pytest configuration and fixtures."""

import os

# Set test environment before the app modules read settings
os.environ.setdefault("DATABASE_URL_OVERRIDE", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("APP_ENV", "test")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from blog_api.api.deps import get_db
from blog_api.db.models import Base
from blog_api.db.session import enable_sqlite_foreign_keys
from blog_api.main import app


def as_user(user_id: int) -> dict[str, str]:
    """Identity header for a caller."""
    return {"X-USER-ID": str(user_id)}


@pytest_asyncio.fixture
async def engine(tmp_path):
    """Fresh SQLite database per test, schema created from the models."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'blog.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    """A session for arranging and inspecting data outside the API."""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    """HTTP client bound to the app, with get_db pointed at the test database."""

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """Create a user through the API and return the response body."""

    async def _signup(email: str, name: str | None = None, posts: list[dict] | None = None, caller: int = 1) -> dict:
        body = {"email": email, "name": name}
        if posts is not None:
            body["posts"] = posts
        resp = await client.post("/signup", json=body, headers=as_user(caller))
        assert resp.status_code == 200, resp.text
        return resp.json()

    return _signup


@pytest.fixture
def create_post(client):
    """Create a post as `author_id` and return the response body."""

    async def _create(author_id: int, title: str, content: str | None = None, publish: bool = False) -> dict:
        resp = await client.post(
            "/post",
            json={"title": title, "content": content},
            headers=as_user(author_id),
        )
        assert resp.status_code == 200, resp.text
        post = resp.json()
        if publish:
            resp = await client.put(f"/publish/{post['id']}", headers=as_user(author_id))
            assert resp.status_code == 200, resp.text
            post = resp.json()
        return post

    return _create
