"""Tests for settings."""

from blog_api.core.config import Settings


class TestSettings:
    """Tests for derived database URLs and defaults."""

    def test_urls_from_parts(self):
        """Test that URLs are assembled from POSTGRES_* values."""
        s = Settings(
            DATABASE_URL_OVERRIDE="",
            POSTGRES_USER="u",
            POSTGRES_PASSWORD="p",
            POSTGRES_SERVER="db",
            POSTGRES_PORT=5433,
            POSTGRES_DB="blog",
        )
        assert s.DATABASE_URL == "postgresql+asyncpg://u:p@db:5433/blog"
        assert s.DATABASE_URL_SYNC == "postgresql://u:p@db:5433/blog"

    def test_override_wins(self):
        """Test that a full URL override replaces the parts."""
        s = Settings(DATABASE_URL_OVERRIDE="postgresql+asyncpg://x:y@h/d")
        assert s.DATABASE_URL == "postgresql+asyncpg://x:y@h/d"
        assert s.DATABASE_URL_SYNC == "postgresql://x:y@h/d"

    def test_defaults(self, monkeypatch):
        """Test the port and identity header defaults."""
        monkeypatch.delenv("APP_PORT", raising=False)
        monkeypatch.delenv("IDENTITY_HEADER", raising=False)
        s = Settings(_env_file=None)
        assert s.APP_PORT == 3000
        assert s.IDENTITY_HEADER == "X-USER-ID"
