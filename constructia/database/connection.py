from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from constructia.config.settings import Settings

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """Build a libpq connection string from settings."""
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
        application_name=f"constructia-{settings.app_env}",
    )


def init_pool(settings: Settings) -> None:
    """Initialize the global connection pool and wait until it is usable."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        return
    pool = ConnectionPool(build_conninfo(settings), min_size=1, max_size=10, open=True)
    try:
        pool.wait(timeout=10.0)
    except Exception:
        pool.close()
        raise
    _pool = pool


def close_pool() -> None:
    """Close the global connection pool."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller commits; the pool rolls back leftovers."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
