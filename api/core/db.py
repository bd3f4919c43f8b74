"""
Async database access (raw SQL) using asyncpg.

`Database` owns the connection pool. The app lifespan connects it on startup
and closes it on shutdown (see `api/main.py`); request handlers receive it
through the `get_db` dependency instead of reaching for a module global.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
- only values go through placeholders; SQL keywords (sort direction) are
  validated against a closed enum by the caller before formatting.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import asyncpg
from fastapi import Request

from .config import DatabaseSettings, build_ssl_context
from .errors import StoreError

logger = logging.getLogger(__name__)

CLOSE_TIMEOUT_S = 10.0


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings
        self._pool: asyncpg.Pool | None = None

    async def connect(self) -> None:
        if self._pool is not None:
            return None
        s = self.settings
        try:
            self._pool = await asyncpg.create_pool(
                host=s.host,
                port=s.port,
                user=s.user,
                password=s.password,
                database=s.database,
                ssl=build_ssl_context(s),
                min_size=1,
                max_size=s.pool_size,
                command_timeout=s.command_timeout,
            )
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
            raise _to_store_error(exc) from exc
        logger.info("db_pool_ready host=%s database=%s max_size=%s", s.host, s.database, s.pool_size)

    async def close(self) -> None:
        if self._pool is None:
            return None
        pool, self._pool = self._pool, None
        try:
            await asyncio.wait_for(pool.close(), timeout=CLOSE_TIMEOUT_S)
        except asyncio.TimeoutError:
            logger.warning("db_pool_close_timeout timeout_s=%s terminating", CLOSE_TIMEOUT_S)
            pool.terminate()
        logger.info("db_pool_closed")

    async def ping(self) -> None:
        """
        Liveness probe used before the app starts serving traffic.
        """
        await self.fetch_one("SELECT 1 AS ok")

    def pool(self) -> asyncpg.Pool:
        if self._pool is None:
            raise RuntimeError("DB pool is not initialized. Call connect() on startup.")
        return self._pool

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[asyncpg.Connection]:
        # Waits for a free connection when the pool is exhausted.
        try:
            async with self.pool().acquire(timeout=self.settings.acquire_timeout) as conn:
                yield conn
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError) as exc:
            raise _to_store_error(exc) from exc

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self._connection() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self._connection() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return the status tag.
        """
        async with self._connection() as conn:
            return await conn.execute(sql, *args)


def _to_store_error(exc: BaseException) -> StoreError:
    if isinstance(exc, asyncpg.PostgresError):
        return StoreError(str(exc.sqlstate or "UNKNOWN"), str(exc))
    if isinstance(exc, asyncio.TimeoutError):
        return StoreError("TIMEOUT", "Database operation timed out.")
    return StoreError("CONNECTION", str(exc) or exc.__class__.__name__)


def get_db(request: Request) -> Database:
    return request.app.state.db
