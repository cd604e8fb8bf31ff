"""urlshort application class.

An App is an ASGI callable around one root responder, normally the
outermost PathResolver of a chain. The chain is either handed in ready
made or loaded from the config at lifespan startup, before the first
request is served. Once loaded it never changes.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

import anyio

from urlshort._internal.asgi import Receive, Scope, Send
from urlshort.config import ShortenerConfig
from urlshort.protocol import Responder
from urlshort.server.handler import handle_request

logger = logging.getLogger("urlshort.server")


class App:
    """The urlshort application.

    Usage::

        app = App(from_yaml(Path("redirects.yaml").read_bytes()))

        # or let lifespan startup build the chain
        app = App(config=ShortenerConfig(yaml_path="redirects.yaml"))

    Thread safety:
        The responder reference is written once, under a lock, and only
        read afterwards. Resolvers themselves are immutable.
    """

    __slots__ = (
        "_load_lock",
        "_responder",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(
        self,
        responder: Responder | None = None,
        *,
        config: ShortenerConfig | None = None,
    ) -> None:
        self.config = config or ShortenerConfig()
        self._responder = responder
        self._load_lock: anyio.Lock | None = None  # Created lazily on first use
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []

    @property
    def responder(self) -> Responder | None:
        """The root responder, or ``None`` before startup has loaded it."""
        return self._responder

    @property
    def started(self) -> bool:
        return self._responder is not None

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order after the responder chain is
        loaded, during ASGI lifespan startup.
        """
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._shutdown_hooks.append(func)
        return func

    async def startup(self) -> None:
        """Load the responder chain (if needed) and run startup hooks.

        Raises whatever ``load_responder()`` raises; nothing is kept
        from a failed load.
        """
        await self._ensure_responder()
        for hook in self._startup_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def shutdown(self) -> None:
        """Run shutdown hooks."""
        for hook in self._shutdown_hooks:
            result = hook()
            if inspect.isawaitable(result):
                await result

    async def _ensure_responder(self) -> Responder:
        if self._responder is not None:
            return self._responder
        # Lazy-init the lock (can't create in __init__ before an event loop exists).
        if self._load_lock is None:
            self._load_lock = anyio.Lock()
        async with self._load_lock:
            if self._responder is None:
                from urlshort.loader import load_responder

                self._responder = await load_responder(self.config)
        return self._responder

    # -- ASGI --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles lifespan scopes directly, then delegates HTTP scopes to
        the request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        responder = await self._ensure_responder()
        await handle_request(
            scope,
            receive,
            send,
            responder=responder,
            debug=self.config.debug,
        )

    async def _handle_lifespan(
        self,
        scope: Scope,  # noqa: ARG002
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Loads the redirect chain at startup and signals completion (or
        failure, which aborts server startup) back to the server.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                except Exception as exc:
                    logger.error("startup failed: %s", exc)
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app with the pounce development server."""
        from urlshort.server.dev import run_dev_server

        run_dev_server(self, host or self.config.host, port or self.config.port)
