"""Database connection pool management and query execution."""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import aiomysql

from .config import (
    DB_HOST,
    DB_NAME,
    DB_PASSWORD,
    DB_PORT,
    DB_SOCKET,
    DB_USER,
    QUERY_TIMEOUT,
    TABLE_PREFIX,
    ApiConfig,
    load_api_config,
    logger,
)
from .errors import QueryError


class Database:
    """Read-only query executor bound to an aiomysql connection pool."""

    def __init__(self, pool: aiomysql.Pool, timeout: int = QUERY_TIMEOUT):
        self.pool = pool
        self.timeout = timeout

    async def fetch_all(self, sql: str, params=None) -> list[dict[str, Any]]:
        """Execute a read-only query and return every row as a dict.

        Raises:
            QueryError: On connection, pool, timeout or MySQL errors.
        """
        try:
            async with self.pool.acquire() as conn, conn.cursor(aiomysql.DictCursor) as cur:
                # Enforce timeout at MySQL level (parameterized to prevent SQL injection)
                await cur.execute(
                    "SET SESSION MAX_EXECUTION_TIME = %s", (self.timeout * 1000,)
                )
                # Also enforce at Python level with buffer
                await asyncio.wait_for(
                    cur.execute(sql, params), timeout=self.timeout + 5
                )
                return list(await cur.fetchall())
        except asyncio.TimeoutError as e:
            raise QueryError(f"Query timed out after {self.timeout}s") from e
        except aiomysql.OperationalError as e:
            raise QueryError(f"Database connection error: {e}") from e
        except aiomysql.PoolError as e:
            raise QueryError(f"Connection pool exhausted: {e}") from e
        except aiomysql.MySQLError as e:
            raise QueryError(f"Database error: {e}") from e

    async def fetch_one(self, sql: str, params=None) -> dict[str, Any] | None:
        """Execute a query and return its first row, or None when it has no rows."""
        rows = await self.fetch_all(sql, params)
        return rows[0] if rows else None


async def create_pool() -> aiomysql.Pool:
    """Create the MySQL connection pool.

    Supports both TCP/IP (host:port) and Unix socket connections.
    """
    # Build connection kwargs - use socket if provided, otherwise host:port
    conn_kwargs = {
        "user": DB_USER,
        "password": DB_PASSWORD,
        "db": DB_NAME,
        "autocommit": True,
        "minsize": 1,
        "maxsize": 10,
        "connect_timeout": 10,
        "charset": "utf8mb4",
    }

    if DB_SOCKET:
        conn_kwargs["unix_socket"] = DB_SOCKET
        logger.info("Connecting via socket: %s", DB_SOCKET)
    else:
        conn_kwargs["host"] = DB_HOST
        conn_kwargs["port"] = DB_PORT

    pool = await aiomysql.create_pool(**conn_kwargs)

    if DB_SOCKET:
        logger.info("Connected to %s@%s (socket) db=%s", DB_USER, DB_SOCKET, DB_NAME)
    else:
        logger.info("Connected to %s@%s:%s/%s", DB_USER, DB_HOST, DB_PORT, DB_NAME)
    return pool


@asynccontextmanager
async def open_database() -> AsyncIterator[tuple[Database, ApiConfig]]:
    """Open the pool, resolve the table prefix and yield the database with its config.

    Handles startup failures and ensures pool cleanup on shutdown.
    """
    pool = None
    try:
        pool = await create_pool()
        database = Database(pool)

        # Auto-detect prefix if not set
        prefix = TABLE_PREFIX
        if not prefix:
            prefix = await detect_prefix(database)
            logger.info("Auto-detected table prefix: '%s'", prefix)

        yield database, load_api_config(prefix)
    except aiomysql.OperationalError as e:
        logger.error("Failed to connect to database: %s", e)
        raise RuntimeError(f"Database connection failed: {e}") from e
    finally:
        if pool is not None:
            pool.close()
            await pool.wait_closed()
            logger.info("Connection pool closed")


async def detect_prefix(database: Database) -> str:
    """Detect the WordPress table prefix by looking for *_options tables."""
    rows = await database.fetch_all(
        "SELECT TABLE_NAME AS table_name FROM information_schema.TABLES "
        "WHERE TABLE_SCHEMA = %s AND TABLE_NAME LIKE '%%options'",
        (DB_NAME,),
    )
    for row in rows:
        table_name = row["table_name"]
        # e.g. "wp_options" -> prefix "wp_"
        if table_name.endswith("options"):
            return table_name[: -len("options")]
    return "wp_"
