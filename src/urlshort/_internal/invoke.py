"""Invoke helpers — call sync or async responders uniformly.

Fallback responders can be ``def`` or ``async def``. Any code that calls
a user-provided responder goes through this helper so the sync/async
check lives in exactly one place.

Usage::

    from urlshort._internal.invoke import invoke

    response = await invoke(fallback, request)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a responder and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: plain value
        def hello(request):
            return Response("Hello, world!")

        # async: coroutine or awaitable
        async def hello(request):
            return Response("Hello, world!")
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
