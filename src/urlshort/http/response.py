"""HTTP response with chainable .with_*() transformation API.

Each transformation returns a new Response. ``Redirect`` is the outcome a
resolver produces on a table hit; the server negotiates it into a
``Response`` with a ``Location`` header.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass, replace
from urllib.parse import quote


# Runs of characters a header value cannot carry as-is
_NON_ASCII = re.compile(r"[^\x00-\x7f]+")


def escape_location(url: str) -> str:
    """Percent-encode non-ASCII characters as UTF-8, leaving the rest alone.

    ``https://e.com/café`` becomes ``https://e.com/caf%C3%A9``. Existing
    escapes and reserved characters are kept, so ASCII URLs go out
    byte-for-byte as stored.
    """
    return _NON_ASCII.sub(lambda m: quote(m.group(), safe=""), url)


@dataclass(frozen=True, slots=True)
class Response:
    """An HTTP response built through immutable transformations.

    Construct with a body, then chain ``.with_*()`` calls to set
    status and headers. Each call returns a new ``Response``.
    """

    body: str | bytes = ""
    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Chainable transformations --

    def with_status(self, status: int) -> Response:
        """Return a new Response with a different status code."""
        return replace(self, status=status)

    def with_header(self, name: str, value: str) -> Response:
        """Return a new Response with an additional header."""
        return replace(self, headers=(*self.headers, (name, value)))

    def with_headers(self, headers: Mapping[str, str]) -> Response:
        """Return a new Response with additional headers."""
        return replace(self, headers=(*self.headers, *headers.items()))

    def with_content_type(self, content_type: str) -> Response:
        """Return a new Response with a different content type."""
        return replace(self, content_type=content_type)

    # -- Accessors --

    def header(self, name: str, default: str | None = None) -> str | None:
        """Return the first value of header *name* (case-insensitive)."""
        wanted = name.lower()
        for key, value in self.headers:
            if key.lower() == wanted:
                return value
        return default

    @property
    def location(self) -> str | None:
        """The ``Location`` header, if this is a redirect."""
        return self.header("Location")

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


@dataclass(frozen=True, slots=True)
class Redirect:
    """A redirect outcome: send the client to *url*.

    The URL is kept as stored. Relative or malformed URLs reach the
    ``Location`` header unchanged, except that non-ASCII characters are
    percent-encoded as UTF-8.
    """

    url: str
    status: int = 302
    headers: tuple[tuple[str, str], ...] = ()

    def to_response(self) -> Response:
        """Render as an empty-bodied response with a ``Location`` header."""
        return (
            Response(body="")
            .with_status(self.status)
            .with_header("Location", escape_location(self.url))
            .with_headers(dict(self.headers))
        )
