"""``urlshort`` — build the redirect chain, then serve it.

Every source is loaded before the server starts. A bad source is fatal:
the error is logged and the process exits with status 1.
"""

import argparse
import logging

import anyio

from urlshort.app import App
from urlshort.config import ShortenerConfig
from urlshort.errors import UrlshortError

logger = logging.getLogger("urlshort.cli")


def config_from_args(args: argparse.Namespace) -> ShortenerConfig:
    """Map parsed CLI flags onto a ShortenerConfig."""
    defaults = ShortenerConfig()
    return ShortenerConfig(
        host=args.host or defaults.host,
        port=args.port or defaults.port,
        yaml_path=args.yaml,
        json_path=args.json,
        db_path=args.db,
        collection=args.collection,
        log_level=args.log_level,
    )


def run_server(args: argparse.Namespace) -> None:
    """Load all configured sources and start the server."""
    config = config_from_args(args)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = App(config=config)
    try:
        anyio.run(app.startup)
    except UrlshortError as exc:
        logger.error("cannot build redirect handler: %s", exc)
        raise SystemExit(1) from exc

    if args.check:
        logger.info("all redirect sources loaded")
        return

    logger.info("starting the server on %s:%d", config.host, config.port)
    app.run()
