"""Builders — one per redirect source format.

Every builder parses its source into ``PathEntry`` records, folds them
into a ``RedirectTable`` (last write wins, empty URLs dropped) and wraps
that in a ``PathResolver`` with the given fallback. Either a complete
resolver comes back or an exception does; nothing in between.

YAML::

    - path: /urlshort
      url: https://github.com/gophercises/urlshort

JSON::

    [{"path": "/urlshort", "url": "https://github.com/gophercises/urlshort"}]

None of the builders validate URLs.
"""

import logging
from collections.abc import Hashable, Mapping

import yaml
from pydantic import TypeAdapter, ValidationError
from yaml.constructor import ConstructorError

from urlshort.errors import FormatError
from urlshort.fallback import not_found
from urlshort.protocol import Responder
from urlshort.resolver import JSONPathEntry, PathEntry, PathResolver, RedirectTable
from urlshort.store import KeyValueStore

logger = logging.getLogger("urlshort.builders")

DEFAULT_COLLECTION = "urlshort"

_ENTRIES: TypeAdapter[list[PathEntry]] = TypeAdapter(list[PathEntry])
_JSON_ENTRIES: TypeAdapter[list[JSONPathEntry] | None] = TypeAdapter(list[JSONPathEntry] | None)


class _UniqueKeyLoader(yaml.SafeLoader):
    """SafeLoader that rejects a key repeated within one mapping."""

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen = set()
            for key_node, _ in node.value:
                key = self.construct_object(key_node, deep=deep)
                if isinstance(key, Hashable):
                    if key in seen:
                        raise ConstructorError(
                            "while constructing a mapping",
                            node.start_mark,
                            f"found duplicate key {key!r}",
                            key_node.start_mark,
                        )
                    seen.add(key)
        return super().construct_mapping(node, deep=deep)


def from_table(table: Mapping[str, str], fallback: Responder = not_found) -> PathResolver:
    """Build a resolver from an existing ``path -> url`` mapping.

    The mapping is copied, so later changes to *table* don't leak in.
    """
    return PathResolver(RedirectTable(table), fallback)


def from_entries(entries: list[PathEntry], fallback: Responder = not_found) -> PathResolver:
    """Build a resolver from already-parsed records."""
    return PathResolver(RedirectTable.from_entries(entries), fallback)


def from_yaml(data: bytes | str, fallback: Responder = not_found) -> PathResolver:
    """Build a resolver from a YAML sequence of ``{path, url}`` mappings.

    Decoding is strict: unknown keys, keys repeated within one record and
    non-string values are rejected instead of ignored. A missing or null
    ``url`` reads as empty, so that path falls through. An empty document
    yields an empty table.

    Raises:
        FormatError: If the document is not valid YAML or does not match
            the record schema.
    """
    try:
        document = yaml.load(data, Loader=_UniqueKeyLoader)  # noqa: S506
    except yaml.YAMLError as exc:
        msg = f"invalid YAML redirect document: {exc}"
        raise FormatError(msg) from exc
    if document is None:
        document = []
    try:
        entries = _ENTRIES.validate_python(document)
    except ValidationError as exc:
        msg = f"invalid YAML redirect document: {exc}"
        raise FormatError(msg) from exc
    logger.debug("parsed %d YAML redirect entries", len(entries))
    return from_entries(entries, fallback)


def from_json(data: bytes | str, fallback: Responder = not_found) -> PathResolver:
    """Build a resolver from a JSON array of ``{"path", "url"}`` objects.

    Unlike ``from_yaml``, unknown keys are ignored. Missing or null fields
    read as empty and a ``null`` document is an empty table. Values must
    still be strings.

    Raises:
        FormatError: If the document is not valid JSON or does not match
            the record schema.
    """
    try:
        entries = _JSON_ENTRIES.validate_json(data) or []
    except ValidationError as exc:
        msg = f"invalid JSON redirect document: {exc}"
        raise FormatError(msg) from exc
    logger.debug("parsed %d JSON redirect entries", len(entries))
    return from_entries(entries, fallback)


async def from_store(
    store: KeyValueStore,
    fallback: Responder = not_found,
    *,
    collection: str = DEFAULT_COLLECTION,
) -> PathResolver:
    """Build a resolver from every key/value pair of a store collection.

    Keys are paths and values are URLs, both stored as UTF-8 bytes. The
    whole collection is read inside one read transaction.

    Raises:
        StoreError: If the read transaction cannot be opened.
        FormatError: If the collection is missing or holds bytes that
            are not UTF-8.
    """
    async with store.read_transaction() as txn:
        pairs = await txn.items(collection)
    try:
        entries = [
            PathEntry(path=key.decode("utf-8"), url=value.decode("utf-8"))
            for key, value in pairs
        ]
    except UnicodeDecodeError as exc:
        msg = f"collection {collection!r} holds non UTF-8 data: {exc}"
        raise FormatError(msg) from exc
    logger.debug("read %d redirect entries from %s", len(entries), store.path)
    return from_entries(entries, fallback)
