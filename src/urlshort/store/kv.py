"""Embedded key-value store with named collections.

The store is a single SQLite file. Each collection is a table holding
raw byte keys and values::

    CREATE TABLE urlshort (key BLOB PRIMARY KEY, value BLOB)

Only reading is supported. Usage::

    async with KeyValueStore("links.db") as store:
        async with store.read_transaction() as txn:
            pairs = await txn.items("urlshort")
"""

from __future__ import annotations

import logging
import sqlite3
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from urlshort.errors import FormatError, StoreError
from urlshort.store._sqlite import AsyncConnection, connect_readonly

logger = logging.getLogger("urlshort.store")


def _quote_identifier(name: str) -> str:
    """Quote *name* as an SQL identifier; any name is allowed."""
    escaped = name.replace('"', '""')
    return f'"{escaped}"'


class ReadTransaction:
    """A consistent read-only view of the store.

    Obtained from ``KeyValueStore.read_transaction()``; only valid inside
    that ``async with`` block.
    """

    __slots__ = ("_conn",)

    def __init__(self, conn: AsyncConnection) -> None:
        self._conn = conn

    async def has_collection(self, name: str) -> bool:
        """True if a collection called *name* exists."""
        row = await self._conn.fetchone(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = ?", (name,)
        )
        return row is not None

    async def items(self, name: str) -> list[tuple[bytes, bytes]]:
        """Return every ``(key, value)`` pair of collection *name*, in key order.

        Raises:
            FormatError: If the collection does not exist or holds a cell
                that is neither a blob nor text.
            StoreError: If the underlying read fails.
        """
        try:
            if not await self.has_collection(name):
                msg = f"store missing collection {name!r}"
                raise FormatError(msg)
            rows = await self._conn.fetchall(
                f"SELECT key, value FROM {_quote_identifier(name)} ORDER BY key"
            )
        except sqlite3.Error as exc:
            msg = f"cannot read collection {name!r}: {exc}"
            raise StoreError(msg) from exc
        return [(_as_bytes(key, name), _as_bytes(value, name)) for key, value in rows]


def _as_bytes(value: object, collection: str) -> bytes:
    """Normalize a stored cell to bytes (TEXT cells come back as str)."""
    if value is None:
        return b""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, bytes):
        return value
    msg = f"collection {collection!r} holds a {type(value).__name__} cell: {value!r}"
    raise FormatError(msg)


class KeyValueStore:
    """Read-only handle on a store file.

    ``connect()`` opens the file; it must already exist. The handle is
    owned by whoever opened it. Resolvers built from it copy the data
    out and never touch the store again.
    """

    __slots__ = ("_conn", "path")

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._conn: AsyncConnection | None = None

    async def connect(self) -> None:
        """Open the store file read-only.

        Raises:
            StoreError: If the file is missing or cannot be opened.
        """
        if self._conn is not None:
            return
        try:
            self._conn = await connect_readonly(self.path)
        except sqlite3.Error as exc:
            msg = f"cannot open store {str(self.path)!r}: {exc}"
            raise StoreError(msg) from exc
        logger.debug("opened store %s", self.path)

    async def close(self) -> None:
        """Close the store. Safe to call more than once."""
        if self._conn is None:
            return
        conn, self._conn = self._conn, None
        await conn.close()

    async def __aenter__(self) -> KeyValueStore:
        await self.connect()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()

    @asynccontextmanager
    async def read_transaction(self) -> AsyncIterator[ReadTransaction]:
        """Open a read transaction, rolled back on exit.

        The schema is read while opening, so a corrupt or non-database
        file fails here rather than halfway through a scan.

        Raises:
            StoreError: If the store or the transaction cannot be opened.
        """
        if self._conn is None:
            await self.connect()
        conn = self._conn
        if conn is None:
            msg = f"store {str(self.path)!r} was closed while opening a read transaction"
            raise StoreError(msg)
        try:
            await conn.execute("BEGIN")
            await conn.fetchone("SELECT count(*) FROM sqlite_master")
        except sqlite3.Error as exc:
            if conn.in_transaction:
                await conn.execute("ROLLBACK")
            msg = f"cannot open read transaction on {str(self.path)!r}: {exc}"
            raise StoreError(msg) from exc
        try:
            yield ReadTransaction(conn)
        finally:
            if conn.in_transaction:
                await conn.execute("ROLLBACK")
