"""Shortener configuration.

ShortenerConfig is a frozen dataclass, immutable after creation. It is passed
explicitly to the loader and the App instead of living in module globals.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType


@dataclass(frozen=True, slots=True)
class ShortenerConfig:
    """Shortener configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = ShortenerConfig(yaml_path="redirects.yaml", port=9000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    # Redirect sources, layered innermost (redirects) to outermost (db_path)
    redirects: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    yaml_path: str | Path | None = None
    json_path: str | Path | None = None
    db_path: str | Path | None = None
    collection: str = "urlshort"

    # Logging
    log_level: str = "info"

    @property
    def has_source(self) -> bool:
        """True if at least one redirect source is configured."""
        return bool(self.redirects) or any(
            p is not None for p in (self.yaml_path, self.json_path, self.db_path)
        )
