"""
Engine and session-factory construction.

The session factory is the application's "connection source": it is created
once at startup and passed explicitly into repositories and batch loaders.
Nothing in this module keeps a module-level engine.
"""
import logging
from typing import Any

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from blog_api.config.settings import Settings

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores FOREIGN KEY clauses unless enabled per connection.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(url: str, *, echo: bool = False, pool_size: int | None = None) -> AsyncEngine:
    """
    Create the AsyncEngine for `url`.

    - Postgres: pooled connections with pre-ping health checks.
    - SQLite: foreign keys switched on; in-memory databases share one connection
      (StaticPool) so every session sees the same tables.
    """
    parsed = make_url(url)
    kwargs: dict[str, Any] = {"echo": echo, "future": True}

    if parsed.get_backend_name() == "sqlite":
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
        if pool_size is not None:
            kwargs["pool_size"] = pool_size

    engine = create_async_engine(url, **kwargs)

    if parsed.get_backend_name() == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    logger.debug("database.engine.created", extra={"backend": parsed.get_backend_name()})
    return engine


def create_engine_from_settings(settings: Settings) -> AsyncEngine:
    return create_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,
        pool_size=settings.DATABASE_POOL_SIZE,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Return the async session factory used by repositories and loaders.

    expire_on_commit=False: rows decoded before commit stay readable afterwards.
    """
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
