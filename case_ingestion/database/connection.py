from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from case_ingestion.config.settings import Settings
from case_ingestion.logging.logger import Log

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """Connection string for the documents database; values are quoted by psycopg."""
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        application_name="case_ingestion",
    )


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool from settings.

    The pool is sized for the batch: every in-flight document holds at most
    one connection while it persists.
    """
    global _pool  # noqa: PLW0603
    if _pool is not None:
        return
    max_size = max(settings.db_pool_max_size, settings.max_concurrent_documents)
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=min(settings.db_pool_min_size, max_size),
        max_size=max_size,
        open=True,
    )
    Log.info(
        f"Database pool opened for {settings.db_host}:{settings.db_port}/"
        f"{settings.db_database} (max {max_size} connections)"
    )


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a connection from the pool. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
