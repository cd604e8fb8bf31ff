"""Content negotiation — turn whatever a responder returned into a Response.

Dispatch table:

1. ``Response``        -> as-is
2. ``Redirect``        -> status + ``Location`` header, empty body
3. ``str`` / ``bytes`` -> 200 text response
"""

from typing import Any

from urlshort.http.response import Redirect, Response


def negotiate(value: Any) -> Response:
    """Convert a responder's return value to a ``Response``."""
    match value:
        case Response():
            return value
        case Redirect():
            return value.to_response()
        case str() | bytes():
            return Response(body=value)
        case _:
            msg = (
                f"Responder returned {type(value).__name__}, expected "
                "Response, Redirect, str or bytes"
            )
            raise TypeError(msg)
