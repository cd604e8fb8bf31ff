"""The responder shape shared by fallbacks and resolvers.

A responder is any callable matching::

    async def my_responder(request: Request) -> Response: ...

Plain ``def`` responders work too; callers go through ``invoke()``.
No base class required. Fallbacks, resolvers and test doubles all
satisfy the same shape, so resolvers chain by passing one as another's
fallback::

    inner = from_yaml(yaml_bytes, fallback=not_found)
    outer = from_json(json_bytes, fallback=inner)
"""

from collections.abc import Awaitable, Callable

from urlshort.http.request import Request
from urlshort.http.response import Response

# Anything that turns a request into a response, sync or async
type Responder = Callable[[Request], Response | Awaitable[Response]]

