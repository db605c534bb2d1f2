"""The zyra application object.

Setup is a single-threaded phase: routes, middleware, groups, and
lifecycle hooks are registered in place. The first request (or the ASGI
lifespan startup) freezes everything into read-only runtime state.
"""

import logging
import threading
from collections.abc import Callable, Sequence
from typing import Any, TypeAlias

from zyra._internal.asgi import Receive, Scope, Send
from zyra._internal.invoke import invoke
from zyra._internal.types import Handler, MiddlewareFunc
from zyra.config import AppConfig
from zyra.routing.group import GroupContext, RouteRegistrar, check_middleware, create_group_context
from zyra.routing.route import HttpMethod, Route
from zyra.routing.router import Router
from zyra.server.handler import handle_request

logger = logging.getLogger("zyra.app")

Hook: TypeAlias = Callable[[], Any]


class App(RouteRegistrar):
    """Root registration scope and ASGI callable.

    Usage::

        app = App()
        app.use(cors())

        @app.get("/users/:id")
        async def show_user(req, res):
            res.json({"id": req.params["id"]})

        with app.group("/admin") as admin:
            admin.use(require_admin)
            admin.get("/stats", stats)

        app.run()

    Global middleware registered with ``use()`` is kept apart from group
    stacks and runs ahead of them for every matched route.

    Freezing is guarded by a lock with a double check, so when several
    workers hit ``__call__`` at once only one of them compiles the route
    table.
    """

    __slots__ = (
        "_freeze_lock",
        "_frozen",
        "_global_middleware",
        "_hooks",
        "_pending_middleware",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._router = Router()
        self._pending_middleware: list[MiddlewareFunc] = []
        self._global_middleware: tuple[MiddlewareFunc, ...] = ()
        self._hooks: dict[str, list[Hook]] = {"startup": [], "shutdown": []}
        self._frozen = False
        self._freeze_lock = threading.Lock()

    # -- Registration --

    def _add_route(
        self,
        method: HttpMethod,
        path: str,
        handlers: Sequence[Handler],
        middleware: Sequence[MiddlewareFunc],
    ) -> None:
        self._check_not_frozen()
        self._router.add_route(method, path, handlers, middleware)

    def _open_group(self, prefix: str) -> GroupContext:
        self._check_not_frozen()
        # Global middleware is applied at dispatch, so top-level groups start empty.
        return create_group_context(prefix, (), self._add_route)

    def use(self, middleware: MiddlewareFunc) -> None:
        """Add global middleware. It runs before any group or route middleware."""
        self._check_not_frozen()
        self._pending_middleware.append(check_middleware(middleware))

    def on_startup(self, func: Hook) -> Hook:
        """Decorator: run *func* (sync or async) when the server starts."""
        self._check_not_frozen()
        self._hooks["startup"].append(func)
        return func

    def on_shutdown(self, func: Hook) -> Hook:
        """Decorator: run *func* (sync or async) when the server stops."""
        self._check_not_frozen()
        self._hooks["shutdown"].append(func)
        return func

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes, in match-precedence order."""
        return self._router.routes

    @property
    def router(self) -> Router:
        return self._router

    @property
    def middleware(self) -> tuple[MiddlewareFunc, ...]:
        if self._frozen:
            return self._global_middleware
        return tuple(self._pending_middleware)

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Serving --

    def run(self, host: str | None = None, port: int | None = None) -> None:
        """Serve the app until interrupted. Arguments override ``config``."""
        self._ensure_frozen()

        from zyra.server.dev import run_server

        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            log_level="debug" if self.config.debug else self.config.log_level,
        )

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._lifespan(receive, send)
            return

        self._ensure_frozen()
        await handle_request(
            scope,
            receive,
            send,
            router=self._router,
            middleware=self._global_middleware,
            config=self.config,
        )

    async def _lifespan(self, receive: Receive, send: Send) -> None:
        self._ensure_frozen()
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                try:
                    await self.run_startup_hooks()
                except Exception as exc:
                    logger.exception("Startup hook failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                try:
                    await self.run_shutdown_hooks()
                except Exception as exc:
                    logger.exception("Shutdown hook failed")
                    await send({"type": "lifespan.shutdown.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def run_startup_hooks(self) -> None:
        for hook in self._hooks["startup"]:
            await invoke(hook)

    async def run_shutdown_hooks(self) -> None:
        for hook in self._hooks["shutdown"]:
            await invoke(hook)

    # -- Freezing --

    def _ensure_frozen(self) -> None:
        if self._frozen:
            return
        with self._freeze_lock:
            if not self._frozen:
                self._router.compile()
                self._global_middleware = tuple(self._pending_middleware)
                self._frozen = True

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes and middleware before calling app.run()."
            )
            raise RuntimeError(msg)
