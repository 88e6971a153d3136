import logging

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url

from sports_store.core.config import settings

logger = logging.getLogger(__name__)


def create_db_engine(database_url: str) -> Engine:
    """Create an engine configured for the database type in the URL."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False}
        )

        # SQLite only enforces ON DELETE CASCADE with this pragma
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine

    # MySQL / PostgreSQL with connection pooling
    return create_engine(
        database_url,
        pool_size=10,
        max_overflow=10,
        pool_pre_ping=True  # Verify connections are alive
    )


def mask_database_url(database_url: str) -> str:
    """Render a database URL with the password hidden, for log output."""
    try:
        return make_url(database_url).render_as_string(hide_password=True)
    except Exception:
        return "<unparseable database url>"


engine = create_db_engine(settings.database_url)


def init_db(target_engine: Engine = None) -> list:
    """Apply pending schema migrations. Returns the versions applied."""
    from sports_store.core.migrations import apply_migrations

    target_engine = target_engine or engine
    safe_url = target_engine.url.render_as_string(hide_password=True)
    applied = apply_migrations(target_engine)
    if applied:
        logger.info(f"✅ Applied migrations {applied} on {target_engine.dialect.name}: {safe_url}")
    else:
        logger.info(f"✅ Database schema up to date on {target_engine.dialect.name}: {safe_url}")
    return applied
