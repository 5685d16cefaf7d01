"""Tests for the default ownership policy."""

import pytest
from sqlalchemy import select

from blog_api.access.context import CallerContext
from blog_api.access.policy import OwnershipPolicy
from blog_api.core.constants import Action
from blog_api.db.models import Post, User

policy = OwnershipPolicy()
alice = CallerContext(user_id=1)
bob = CallerContext(user_id=2)


def make_post(author_id: int, published: bool = False) -> Post:
    return Post(id=10, title="t", content="c", author_id=author_id, published=published, view_count=0)


class TestUserRules:
    """Tests for decisions on User entities."""

    @pytest.mark.parametrize("action", [Action.CREATE, Action.READ])
    def test_anyone_may_create_and_read(self, action):
        """Test that signup and profile reads are open to any caller."""
        assert policy.can(bob, action, User(id=1, email="a@x.com"))

    @pytest.mark.parametrize("action", [Action.UPDATE, Action.DELETE])
    def test_only_self_may_modify(self, action):
        """Test that users may only change themselves."""
        user = User(id=1, email="a@x.com")
        assert policy.can(alice, action, user)
        assert not policy.can(bob, action, user)


class TestPostRules:
    """Tests for decisions on Post entities."""

    @pytest.mark.parametrize("action", list(Action))
    def test_author_may_do_everything(self, action):
        """Test that the author holds every capability on their post."""
        assert policy.can(alice, action, make_post(author_id=1))

    @pytest.mark.parametrize("action", [Action.CREATE, Action.UPDATE, Action.DELETE])
    def test_non_author_may_not_write(self, action):
        """Test that other callers cannot write, even once published."""
        assert not policy.can(bob, action, make_post(author_id=1, published=True))

    def test_draft_hidden_from_others(self):
        """Test that drafts are readable by their author only."""
        assert not policy.can(bob, Action.READ, make_post(author_id=1))

    def test_published_readable_by_others(self):
        """Test that published posts are readable by anyone."""
        assert policy.can(bob, Action.READ, make_post(author_id=1, published=True))

    def test_unknown_entities_denied(self):
        """Test that the policy denies entity types it does not know."""
        assert not policy.can(alice, Action.READ, object())


class TestReadableFilter:
    """Tests for the list-query predicate."""

    async def test_post_filter_matches_single_row_rule(self, db):
        """Test that the SQL predicate and can(READ) agree row by row."""
        db.add_all([User(id=1, email="a@x.com"), User(id=2, email="b@x.com")])
        await db.flush()
        db.add_all(
            [
                Post(title="a-draft", author_id=1, published=False, view_count=0),
                Post(title="a-pub", author_id=1, published=True, view_count=0),
                Post(title="b-draft", author_id=2, published=False, view_count=0),
            ]
        )
        await db.commit()

        rows = (await db.execute(select(Post).where(policy.readable(bob, Post)))).scalars().all()
        titles = sorted(p.title for p in rows)
        assert titles == ["a-pub", "b-draft"]

        all_posts = (await db.execute(select(Post))).scalars().all()
        expected = sorted(p.title for p in all_posts if policy.can(bob, Action.READ, p))
        assert titles == expected

    async def test_users_all_readable(self, db):
        """Test that every user row passes the user filter."""
        db.add_all([User(id=1, email="a@x.com"), User(id=2, email="b@x.com")])
        await db.commit()
        rows = (await db.execute(select(User).where(policy.readable(bob, User)))).scalars().all()
        assert len(rows) == 2
