"""
Alembic environment for the blog schema.

Migrations run on a sync driver (psycopg2 for PostgreSQL). Callers that
already hold a connection, such as the test suite, pass it in
`config.attributes["connection"]` and the URL from settings is skipped.
"""

from logging.config import fileConfig

from alembic import context
from sqlalchemy import create_engine, pool
from sqlalchemy.engine import Connection, make_url

from blog_api.core.config import settings
from blog_api.db.models import Base

config = context.config
target_metadata = Base.metadata

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)


def _configure(dialect_name: str, **kwargs) -> None:
    # SQLite can only ALTER through batch table copies
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        render_as_batch=dialect_name == "sqlite",
        **kwargs,
    )


def run_offline() -> None:
    """Emit the migration SQL for DATABASE_URL_SYNC without connecting."""
    _configure(
        make_url(settings.DATABASE_URL_SYNC).get_backend_name(),
        url=settings.DATABASE_URL_SYNC,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )
    with context.begin_transaction():
        context.run_migrations()


def run_on(connection: Connection) -> None:
    _configure(connection.dialect.name, connection=connection)
    with context.begin_transaction():
        context.run_migrations()


def run_online() -> None:
    connection = config.attributes.get("connection")
    if connection is not None:
        run_on(connection)
        return

    migration_engine = create_engine(settings.DATABASE_URL_SYNC, poolclass=pool.NullPool)
    try:
        with migration_engine.connect() as conn:
            run_on(conn)
    finally:
        migration_engine.dispose()


if context.is_offline_mode():
    run_offline()
else:
    run_online()
