"""
Seed sample users and posts for development.
Run: python -m scripts.seed_blog  (from backend/)
"""

import asyncio

from blog_api.db.session import async_session
from blog_api.repositories.users import add_user, build_user, get_user_by_email


SEED_USERS = [
    {
        "name": "Alice",
        "email": "alice@example.com",
        "posts": [
            {
                "title": "Getting started with the blog API",
                "content": "Send X-USER-ID with every request.",
                "published": True,
            },
        ],
    },
    {
        "name": "Nilu",
        "email": "nilu@example.com",
        "posts": [
            {
                "title": "Row-level access in practice",
                "content": "Drafts stay visible to their author only.",
                "published": True,
            },
        ],
    },
    {
        "name": "Mahmoud",
        "email": "mahmoud@example.com",
        "posts": [
            {
                "title": "Paginating the feed",
                "content": "Use skip and take on /feed.",
                "published": True,
            },
            {
                "title": "Unfinished thoughts",
                "content": "Still a draft.",
            },
        ],
    },
]


async def seed() -> int:
    """Insert seed users that are not present yet. Returns the number inserted."""
    created = 0
    async with async_session() as session:
        for data in SEED_USERS:
            if await get_user_by_email(session, data["email"]) is not None:
                print(f"  Skipped existing user: {data['email']}")
                continue
            user = build_user(email=data["email"], name=data["name"], posts=data["posts"])
            for post, post_data in zip(user.posts, data["posts"]):
                post.published = post_data.get("published", False)
            await add_user(session, user)
            created += 1
            print(f"  Created user: {user.email} (id={user.id}, posts={len(user.posts)})")
        await session.commit()
    print(f"Seeded {created} users.")
    return created


if __name__ == "__main__":
    asyncio.run(seed())
