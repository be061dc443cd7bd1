"""
db/connection.py
----------------
Owns the process-wide PostgreSQL pool.

Repositories take a pool in their constructor and borrow one connection
per statement; when none is passed they fall back to `get_pool()`.
`get_connection` / `release_connection` serve one-off jobs such as the
schema bootstrap.
"""

import psycopg2
from psycopg2 import pool

from config import DATABASE_URL, DB_POOL_MIN, DB_POOL_MAX
from utils.logger import get_logger

logger = get_logger(__name__)

_pool: pool.SimpleConnectionPool | None = None


def init_pool(min_conn: int = DB_POOL_MIN, max_conn: int = DB_POOL_MAX) -> None:
    """
    Open the shared pool against DATABASE_URL. Calling it again is a no-op.

    Raises:
        psycopg2.OperationalError: If the database is unreachable.
    """
    global _pool
    if _pool is not None:
        return
    try:
        _pool = pool.SimpleConnectionPool(min_conn, max_conn, DATABASE_URL)
    except psycopg2.OperationalError as e:
        logger.error(f"Could not open a pool of {min_conn}-{max_conn} connections: {e}")
        raise
    logger.info(f"PostgreSQL pool ready ({min_conn}-{max_conn} connections).")


def get_pool() -> pool.SimpleConnectionPool:
    """
    The shared pool handed to repositories built without one.

    Raises:
        RuntimeError: If init_pool() has not run yet.
    """
    if _pool is None:
        raise RuntimeError("Database pool not initialized. Call init_pool() first.")
    return _pool


def get_connection():
    return get_pool().getconn()


def release_connection(conn) -> None:
    if _pool is not None:
        _pool.putconn(conn)


def close_pool() -> None:
    """Close every pooled connection and forget the pool."""
    global _pool
    if _pool is not None:
        _pool.closeall()
        _pool = None
        logger.info("PostgreSQL pool closed.")
