"""Tests for the Alembic migrations."""

from pathlib import Path

from alembic import command
from alembic.autogenerate import compare_metadata
from alembic.config import Config
from alembic.migration import MigrationContext
from sqlalchemy import create_engine, inspect

from blog_api.db.models import Base

MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "blog_api" / "db" / "migrations"


def _alembic_config(connection) -> Config:
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    config.attributes["connection"] = connection
    return config


class TestMigrations:
    """Tests that the migration history builds the schema the models declare."""

    def test_upgrade_matches_models(self, tmp_path):
        """Test that upgrading to head leaves no difference from the models."""
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        try:
            with engine.begin() as conn:
                command.upgrade(_alembic_config(conn), "head")
                diff = compare_metadata(MigrationContext.configure(conn), Base.metadata)
            assert diff == []
        finally:
            engine.dispose()

    def test_downgrade_removes_tables(self, tmp_path):
        """Test that downgrading to base drops everything the upgrade created."""
        engine = create_engine(f"sqlite:///{tmp_path / 'migrated.db'}")
        try:
            with engine.begin() as conn:
                config = _alembic_config(conn)
                command.upgrade(config, "head")
                command.downgrade(config, "base")
                tables = set(inspect(conn).get_table_names())
            assert tables <= {"alembic_version"}
        finally:
            engine.dispose()
