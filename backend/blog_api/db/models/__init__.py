"""
Models package — re-exports Base and all models.

Import models here so Alembic's `target_metadata = Base.metadata`
picks up every table automatically.

When adding a new model:
    1. Create `blog_api/db/models/<table_name>.py`
    2. Import it here
"""

from blog_api.db.models.base import Base
from blog_api.db.models.post import Post
from blog_api.db.models.user import User

__all__ = [
    "Base",
    "Post",
    "User",
]
