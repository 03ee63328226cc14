"""
Database engine, session management and schema initialization
"""

from pathlib import Path
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession, async_sessionmaker
from core.config import settings
from core.exceptions import SchemaInitializationError
from models.base import Base
import models  # noqa: F401  registers every table on Base.metadata
import logging

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with FK enforcement off and the setting is per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def is_sqlite(url: str) -> bool:
    return make_url(url).get_backend_name() == "sqlite"


def build_engine(url: str, **kwargs) -> AsyncEngine:
    """
    Create an async engine for ``url``.

    SQLite engines get a connect listener that turns on foreign key
    checks, without which cascades and FK constraints are silently ignored.
    """
    kwargs.setdefault("echo", settings.SQL_ECHO)
    kwargs.setdefault("future", True)

    new_engine = create_async_engine(url, **kwargs)

    if is_sqlite(url):
        event.listen(new_engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    return new_engine


def build_session_maker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False
    )


# Create async engine
engine = build_engine(settings.DATABASE_URL)

# Create session factory
async_session_maker = build_session_maker(engine)


def _ensure_sqlite_directory(url: str) -> None:
    database = make_url(url).database
    if not database or database == ":memory:":
        return
    directory = Path(database).expanduser().parent
    if not directory.exists():
        directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"Created data directory: {directory}")


async def init_schema(bind: AsyncEngine = None) -> None:
    """
    Create all tables and indexes that do not exist yet.

    Safe to call repeatedly. Any failure is fatal for the caller: every
    query in the service assumes the schema is in place.
    """
    bind = bind or engine
    url = bind.url.render_as_string(hide_password=False)

    try:
        if is_sqlite(url):
            _ensure_sqlite_directory(url)

        async with bind.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except Exception as e:
        logger.error(f"Failed to initialize database schema: {e}")
        raise SchemaInitializationError(
            "Failed to initialize database schema",
            context={"database": bind.url.render_as_string(hide_password=True)},
            original_exception=e
        ) from e

    for table in Base.metadata.sorted_tables:
        logger.info(f"Table '{table.name}' checked/initialized")
