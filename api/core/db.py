"""
Async database access helpers (raw SQL) using asyncpg.

The connection pool is created once per process by the FastAPI lifespan
(see `api/main.py`), wrapped in `Database` and kept on `app.state`. Request
handlers receive it through `core.dependencies.get_database`; nothing looks
the pool up globally.

Every query leases one connection for its own duration and gives it back
when it finishes, successfully or not.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import asyncpg

from . import errors
from .settings import Settings

logger = logging.getLogger(__name__)

# Failures that mean "the backend could not serve this call".
_BACKEND_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError)


async def create_pool(settings: Settings) -> asyncpg.Pool:
    return await asyncpg.create_pool(
        dsn=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        command_timeout=settings.command_timeout_s,
    )


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


def rows_affected(status: str | None) -> int:
    """
    Parse the row count out of a command status tag ("DELETE 3" -> 3).
    """
    parts = (status or "").split()
    if not parts or not parts[-1].isdigit():
        return 0
    return int(parts[-1])


class Database:
    """
    Process-wide handle on the pool.

    `lease()` bounds the wait for a free connection and converts backend
    failures into the service error taxonomy:
    - no connection within `acquire_timeout_s` -> PoolExhausted
    - asyncpg / socket errors or statement timeouts -> StoreError
    """

    def __init__(self, pool: asyncpg.Pool, *, acquire_timeout_s: float = 5.0) -> None:
        self.pool = pool
        self.acquire_timeout_s = acquire_timeout_s

    @asynccontextmanager
    async def lease(self) -> AsyncIterator[asyncpg.Connection]:
        try:
            conn = await self.pool.acquire(timeout=self.acquire_timeout_s)
        except asyncio.TimeoutError as exc:
            logger.warning("pool_exhausted acquire_timeout_s=%s", self.acquire_timeout_s)
            raise errors.PoolExhausted() from exc
        except _BACKEND_ERRORS as exc:
            logger.exception("pool_acquire_failed")
            raise errors.StoreError() from exc

        try:
            yield conn
        except asyncio.TimeoutError as exc:
            logger.warning("store_call_timed_out")
            raise errors.StoreError("Storage backend timed out.") from exc
        except _BACKEND_ERRORS as exc:
            logger.exception("store_call_failed")
            raise errors.StoreError() from exc
        finally:
            await self.pool.release(conn)

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        async with self.lease() as conn:
            row = await conn.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        async with self.lease() as conn:
            rows = await conn.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag.
        """
        async with self.lease() as conn:
            return await conn.execute(sql, *args)

    async def close(self) -> None:
        await self.pool.close()
