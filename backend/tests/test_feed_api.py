"""Tests for GET /feed."""

import pytest
import pytest_asyncio

from conftest import as_user


@pytest_asyncio.fixture
async def feed_posts(signup, create_post):
    """Three published posts (in publish order) plus drafts that must never show."""
    a = await signup("a@x.com", "A")
    b = await signup("b@x.com", "B")
    await create_post(a["id"], "Hello world", "first", publish=True)
    await create_post(a["id"], "Other", "the world is big", publish=True)
    await create_post(a["id"], "Draft world", "not yet")
    await create_post(b["id"], "Unrelated", "nothing to see", publish=True)
    await create_post(b["id"], "B draft world")
    return a, b


class TestFeed:
    """Tests for search, pagination and ordering of published posts."""

    async def test_only_published_newest_first(self, client, feed_posts):
        """Test the default feed."""
        a, _ = feed_posts
        resp = await client.get("/feed", headers=as_user(a["id"]))
        assert resp.status_code == 200
        posts = resp.json()
        assert [p["title"] for p in posts] == ["Unrelated", "Other", "Hello world"]
        assert all(p["published"] for p in posts)
        assert all("author" in p for p in posts)

    async def test_search_matches_title_or_content(self, client, feed_posts):
        """Test that search hits title or content of published posts only."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"searchString": "world"}, headers=as_user(a["id"]))
        titles = {p["title"] for p in resp.json()}
        assert titles == {"Hello world", "Other"}
        for p in resp.json():
            assert p["published"] is True
            assert "world" in p["title"] or "world" in (p["content"] or "")

    async def test_search_without_match(self, client, feed_posts):
        """Test that an unmatched search yields an empty list."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"searchString": "zebra"}, headers=as_user(a["id"]))
        assert resp.json() == []

    async def test_search_treats_wildcards_literally(self, client, signup, create_post):
        """Test that LIKE wildcards in the search string are matched as text."""
        a = await signup("a@x.com", "A")
        await create_post(a["id"], "100% fun", publish=True)
        await create_post(a["id"], "plain", publish=True)

        resp = await client.get("/feed", params={"searchString": "%"}, headers=as_user(a["id"]))
        assert [p["title"] for p in resp.json()] == ["100% fun"]

    async def test_ascending_order(self, client, feed_posts):
        """Test orderBy=asc on last update time."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"orderBy": "asc"}, headers=as_user(a["id"]))
        assert [p["title"] for p in resp.json()] == ["Hello world", "Other", "Unrelated"]

    async def test_skip_and_take(self, client, feed_posts):
        """Test pagination."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"take": 2}, headers=as_user(a["id"]))
        assert [p["title"] for p in resp.json()] == ["Unrelated", "Other"]

        resp = await client.get("/feed", params={"skip": 1, "take": 1}, headers=as_user(a["id"]))
        assert [p["title"] for p in resp.json()] == ["Other"]

        resp = await client.get("/feed", params={"skip": 3}, headers=as_user(a["id"]))
        assert resp.json() == []

    async def test_take_zero_means_no_limit(self, client, feed_posts):
        """Test that take=0 does not truncate the feed."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"take": 0}, headers=as_user(a["id"]))
        assert len(resp.json()) == 3

    async def test_republished_post_moves_to_top(self, client, feed_posts):
        """Test that ordering follows the last update, not creation."""
        a, _ = feed_posts
        resp = await client.get("/feed", params={"searchString": "Hello"}, headers=as_user(a["id"]))
        post_id = resp.json()[0]["id"]
        await client.put(f"/post/{post_id}/views", headers=as_user(a["id"]))

        resp = await client.get("/feed", headers=as_user(a["id"]))
        assert resp.json()[0]["title"] == "Hello world"

    @pytest.mark.parametrize(
        "params",
        [
            {"orderBy": "sideways"},
            {"skip": -1},
            {"take": "many"},
            {"take": "18446744073709551616"},
            {"skip": str(2**31)},
        ],
    )
    async def test_invalid_query_rejected(self, client, params):
        """Test query parameter validation."""
        resp = await client.get("/feed", params=params, headers=as_user(1))
        assert resp.status_code == 422
