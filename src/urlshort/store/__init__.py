"""Read-only embedded key-value store.

A store file holds named collections of raw byte key/value pairs. The
resolver builder scans one collection inside a single read transaction::

    from urlshort.store import KeyValueStore

    async with KeyValueStore("links.db") as store:
        resolver = await from_store(store, fallback=not_found)
"""

from urlshort.store.kv import KeyValueStore, ReadTransaction

__all__ = [
    "KeyValueStore",
    "ReadTransaction",
]
