"""Stock fallback responders.

``not_found`` is the innermost responder of the chain the CLI builds.
``text_responder`` makes fixed-body responders, handy as test doubles
or a catch-all landing page.
"""

from collections.abc import Awaitable, Callable

from urlshort.http.request import Request
from urlshort.http.response import Response

NOT_FOUND_BODY = "Unknown urlshort entry!\n"


async def not_found(request: Request) -> Response:  # noqa: ARG001
    """404 for any path no resolver in the chain knows about."""
    return Response(body=NOT_FOUND_BODY, status=404)


def text_responder(body: str, status: int = 200) -> Callable[[Request], Awaitable[Response]]:
    """Build a responder that always answers with *body* and *status*."""
    response = Response(body=body, status=status)

    async def respond(request: Request) -> Response:  # noqa: ARG001
        return response

    return respond
