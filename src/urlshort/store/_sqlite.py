"""Async read-only SQLite access using stdlib sqlite3 + anyio.

Runs every blocking sqlite3 call in a worker thread via
``anyio.to_thread``. The store is opened once at startup, so the thread
hop only matters for not stalling an already running event loop.

``check_same_thread=False`` is required because ``anyio.to_thread``
dispatches to a pool, so different calls may land on different threads.
"""

import sqlite3
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

from anyio import to_thread


def _run_sync(func: Callable[..., Any], *args: Any) -> Any:
    """Run blocking call in anyio worker thread."""
    return to_thread.run_sync(func, *args)


class AsyncConnection:
    """Async wrapper around a read-only ``sqlite3.Connection``."""

    __slots__ = ("_conn",)

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    async def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[Any]:
        return await _run_sync(lambda: self._conn.execute(sql, params).fetchall())

    async def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Any:
        return await _run_sync(lambda: self._conn.execute(sql, params).fetchone())

    async def execute(self, sql: str) -> None:
        await _run_sync(lambda: self._conn.execute(sql))

    @property
    def in_transaction(self) -> bool:
        return self._conn.in_transaction

    async def close(self) -> None:
        await _run_sync(self._conn.close)


async def connect_readonly(path: str | Path) -> AsyncConnection:
    """Open an existing SQLite file read-only.

    Uses a ``file:`` URI with ``mode=ro`` so a missing file is an error
    instead of silently creating an empty database. ``autocommit=True``
    leaves transaction control to explicit ``BEGIN``/``ROLLBACK``.
    """
    uri = f"{Path(path).resolve().as_uri()}?mode=ro"
    conn = await _run_sync(
        lambda: sqlite3.connect(uri, uri=True, autocommit=True, check_same_thread=False)
    )
    return AsyncConnection(conn)
