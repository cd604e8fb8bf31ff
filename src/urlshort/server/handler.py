"""ASGI handler — translates ASGI scope/messages to urlshort types.

The only component that touches raw ASGI HTTP messages. Converts the
scope dict to a Request, awaits the root responder (normally the
outermost PathResolver) and sends the Response back through send().
"""

from urlshort._internal.asgi import Receive, Scope, Send
from urlshort._internal.invoke import invoke
from urlshort.errors import HTTPError
from urlshort.http.request import Request
from urlshort.protocol import Responder
from urlshort.server.errors import handle_http_error, handle_internal_error
from urlshort.server.negotiation import negotiate
from urlshort.server.sender import send_response


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    responder: Responder,
    debug: bool,
) -> None:
    """Process a single HTTP request through the responder chain."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)

    try:
        response = negotiate(await invoke(responder, request))
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug)

    try:
        await send_response(response, send)
    except UnicodeEncodeError as exc:
        # Headers are encoded before anything is sent, so a 500 can still go out.
        await send_response(handle_internal_error(exc, request, debug), send)
