"""Wren application class.

Mutable during setup (route and middleware registration).
Frozen at runtime when app.run() or __call__() is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.config import AppConfig
from wren.extraction import analyze_handler
from wren.middleware.protocol import Middleware
from wren.routing.route import Route
from wren.routing.router import Router, parse_path
from wren.server.handler import Dispatcher, handle_request

logger = logging.getLogger("wren.server")

# Route handler: user-defined function with variable signature
type Handler = Callable[..., Any]


@dataclass(slots=True)
class _PendingRoute:
    """A route waiting to be compiled."""

    path: str
    handler: Handler
    methods: list[str] | None
    name: str | None
    tag: str | None = None
    summary: str | None = None
    include_in_schema: bool = True


class App:
    """The wren application.

    Mutable during setup (route registration, middleware).
    Frozen at runtime when ``app.run()`` or ``__call__()`` is first invoked.

    Thread safety:
        The setup phase is single-threaded (decorators at import time).
        The freeze transition uses a Lock + double-check so exactly one
        thread compiles the route table, even when several server workers
        call ``__call__()`` concurrently on the first request.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_middleware_list",
        "_openapi",
        "_pending_routes",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._middleware_list: list[Middleware] = []
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state, set during _freeze()
        self._router: Router | None = None
        self._dispatcher: Dispatcher | None = None
        self._openapi: dict[str, Any] | None = None

    # -- Route registration --

    def route(
        self,
        path: str,
        *,
        methods: list[str] | None = None,
        name: str | None = None,
        tag: str | None = None,
        summary: str | None = None,
        include_in_schema: bool = True,
    ) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator.

        Args:
            path: URL path pattern. Use ``:param`` (or ``{param}``) for
                path variables.
            methods: HTTP methods. Defaults to ``["GET"]``.
            name: Optional route name.
            tag: API document tag for the route's operations.
            summary: API document summary. Defaults to the first line of
                the handler's docstring.
            include_in_schema: Whether the route appears in the API document.
        """

        def decorator(func: Handler) -> Handler:
            self._check_not_frozen()
            parse_path(path)  # reject malformed patterns at registration
            self._pending_routes.append(
                _PendingRoute(path, func, methods, name, tag, summary, include_in_schema)
            )
            return func

        return decorator

    # -- Middleware --

    def add_middleware(self, middleware: Middleware) -> None:
        """Add a middleware to the pipeline.

        The first middleware added is the outermost: its pre-phase runs
        first and its post-phase runs last.
        """
        self._check_not_frozen()
        self._middleware_list.append(middleware)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator."""
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> list[Route]:
        """The compiled route table (freezes the app)."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router.routes

    @property
    def openapi(self) -> dict[str, Any]:
        """The API document built from the route table (freezes the app)."""
        self._ensure_frozen()
        if self._openapi is None:
            from wren.openapi.document import build_document

            self._openapi = build_document(self._router.routes if self._router else [], self.config)
        return self._openapi

    # -- Server --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Start the server (dev or production based on config.debug).

        Compiles the app (freezing routes and middleware) before the
        listener binds, then serves requests until interrupted.
        """
        from wren.server.runner import serve

        serve(self, host, port)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly, then delegates HTTP scopes
        to the request pipeline.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()
        assert self._dispatcher is not None

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            max_body_size=self.config.max_body_size,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup (before the first HTTP request), then
        runs registered startup/shutdown hooks. A failing startup hook is
        reported as ``lifespan.startup.failed`` so the server exits before
        accepting any request.
        """
        try:
            self._ensure_frozen()
        except Exception as exc:
            await receive()
            await send({"type": "lifespan.startup.failed", "message": str(exc)})
            return

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    for hook in self._startup_hooks:
                        await invoke(hook)
                except Exception as exc:
                    logger.exception("startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                for hook in self._shutdown_hooks:
                    await invoke(hook)
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the app into its frozen runtime state.

        MUST only be called while holding _freeze_lock.
        """
        # 1. Compile route table (signature errors surface here, at startup)
        router = Router()
        for pending in self._pending_routes:
            param_names = tuple(
                seg.param_name or "" for seg in parse_path(pending.path) if seg.is_param
            )
            router.add(
                Route(
                    path=pending.path,
                    handler=pending.handler,
                    methods=frozenset(m.upper() for m in (pending.methods or ["GET"])),
                    name=pending.name,
                    tag=pending.tag,
                    summary=pending.summary,
                    include_in_schema=pending.include_in_schema,
                    signature=analyze_handler(pending.handler, param_names),
                )
            )

        # 2. Documentation routes
        if self.config.docs_enabled:
            from wren.openapi import docs_routes

            for route in docs_routes(self):
                router.add(route)

        router.compile()
        self._router = router

        # 3. Capture middleware as an immutable tuple and build the dispatcher
        self._dispatcher = Dispatcher(router, tuple(self._middleware_list))
        self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.run()."
            )
            raise RuntimeError(msg)
