"""Shared fixtures: fallback test doubles and seeded store files."""

import sqlite3
from collections.abc import Callable, Mapping
from pathlib import Path

import pytest

from urlshort.fallback import text_responder

YAML_DOC = b"""
- path: /urlshort
  url: https://github.com/gophercises/urlshort
- path: /urlshort-final
  url: https://github.com/gophercises/urlshort/tree/solution
"""

JSON_DOC = b"""[{"path": "/urlshort", "url": "https://github.com/gophercises/urlshort"},
{"path": "/urlshort-final", "url": "https://github.com/gophercises/urlshort/tree/solution"}]"""


@pytest.fixture
def yaml_doc() -> bytes:
    return YAML_DOC


@pytest.fixture
def json_doc() -> bytes:
    return JSON_DOC


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def hello():
    """Fallback that answers every request with 200 "Hello, world!"."""
    return text_responder("Hello, world!")


type StoreFactory = Callable[..., Path]


@pytest.fixture
def make_store(tmp_path: Path) -> StoreFactory:
    """Write a store file holding the given collections.

    Usage::

        path = make_store(urlshort={b"/urlshort": b"https://..."})
    """
    counter = 0

    def factory(**collections: Mapping[bytes | str, object]) -> Path:
        nonlocal counter
        counter += 1
        path = tmp_path / f"store-{counter}.db"
        conn = sqlite3.connect(path)
        try:
            with conn:
                for name, pairs in collections.items():
                    table = '"' + name.replace('"', '""') + '"'
                    conn.execute(f"CREATE TABLE {table} (key BLOB PRIMARY KEY, value BLOB)")
                    conn.executemany(
                        f"INSERT INTO {table} (key, value) VALUES (?, ?)",
                        list(pairs.items()),
                    )
        finally:
            conn.close()
        return path

    return factory
