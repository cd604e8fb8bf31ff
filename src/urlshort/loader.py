"""Assemble the resolver chain described by a ShortenerConfig.

Sources are layered so each one's resolver falls back to the previous
one. Innermost to outermost::

    not_found <- config.redirects <- YAML file <- JSON file <- store file

A path known to several sources resolves to the outermost one's URL.
"""

import logging
from pathlib import Path

import anyio

from urlshort.builders import from_json, from_store, from_table, from_yaml
from urlshort.config import ShortenerConfig
from urlshort.errors import ConfigurationError
from urlshort.fallback import not_found
from urlshort.protocol import Responder
from urlshort.store import KeyValueStore

logger = logging.getLogger("urlshort.loader")


async def read_source(path: str | Path) -> bytes:
    """Read a redirect document from disk.

    Raises:
        ConfigurationError: If the file cannot be read.
    """
    try:
        return await anyio.Path(path).read_bytes()
    except OSError as exc:
        msg = f"could not read config file {str(path)!r}: {exc}"
        raise ConfigurationError(msg) from exc


async def load_responder(
    config: ShortenerConfig,
    fallback: Responder = not_found,
) -> Responder:
    """Build the full resolver chain for *config*.

    The store, if any, is opened, scanned once and closed again; the
    returned chain holds its own copy of every table.

    Raises:
        ConfigurationError: If no source is configured or a file is unreadable.
        FormatError: If a source does not decode.
        StoreError: If the store cannot be opened.
    """
    if not config.has_source:
        msg = "Must provide one source for paths (redirects, yaml_path, json_path or db_path)"
        raise ConfigurationError(msg)

    responder = fallback

    if config.redirects:
        resolver = from_table(config.redirects, responder)
        logger.info("loaded %d redirects from config", len(resolver))
        responder = resolver

    if config.yaml_path is not None:
        resolver = from_yaml(await read_source(config.yaml_path), responder)
        logger.info("loaded %d redirects from %s", len(resolver), config.yaml_path)
        responder = resolver

    if config.json_path is not None:
        resolver = from_json(await read_source(config.json_path), responder)
        logger.info("loaded %d redirects from %s", len(resolver), config.json_path)
        responder = resolver

    if config.db_path is not None:
        async with KeyValueStore(config.db_path) as store:
            resolver = await from_store(store, responder, collection=config.collection)
        logger.info(
            "loaded %d redirects from %s (collection %r)",
            len(resolver),
            config.db_path,
            config.collection,
        )
        responder = resolver

    return responder
