"""urlshort exception hierarchy.

Builders, the store, the loader and the ASGI handler all raise and catch
the same types. Everything a builder can raise is detected before the
first request is served.
"""

from dataclasses import dataclass


class UrlshortError(Exception):
    """Base for all urlshort-specific errors."""


class ConfigurationError(UrlshortError):
    """Raised when configuration is invalid or a source file is unreadable.

    Typically raised by ``load_responder()`` at startup.
    """


class FormatError(UrlshortError):
    """Raised when a redirect source cannot be decoded.

    Covers invalid YAML/JSON syntax, strict-schema violations (unknown
    keys, non-string values) and a missing store collection.
    """


class StoreError(UrlshortError):
    """Raised when the key-value store file or transaction cannot be opened."""


@dataclass(frozen=True, slots=True)
class HTTPError(UrlshortError):
    """An error that maps directly to an HTTP status code.

    Fallback responders may raise these. The ASGI handler turns them
    into a plain-text response with the given status.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818
    """404: nothing answers the request path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)
