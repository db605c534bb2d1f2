"""Route groups: nested registration scopes.

A group contributes a path prefix and a middleware stack to every route
registered inside it. Both ``App`` and ``GroupContext`` expose the same
``RouteRegistrar`` surface, so groups nest to any depth with identical
semantics at every level.

Middleware attaches to a route at the moment the route is registered:
``use()`` after a route does not reach back to it, and ``use()`` in a
parent after a child group was created does not reach into the child.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Protocol

from zyra._internal.types import Handler, MiddlewareFunc
from zyra.errors import ConfigurationError
from zyra.routing.route import HttpMethod


def normalize_prefix(prefix: str) -> str:
    """Ensure a leading ``/`` and no trailing ``/`` (unless the result is ``/``)."""
    if not prefix.startswith("/"):
        prefix = f"/{prefix}"
    return prefix.rstrip("/") or "/"


def join_prefix(parent: str, child: str) -> str:
    """Stack a child's raw prefix onto an already-normalized parent prefix."""
    if parent == "/":
        return normalize_prefix(child)
    return normalize_prefix(parent + child)


def join_route_path(prefix: str, path: str) -> str:
    """Concatenate a resolved prefix and a route's local path."""
    if prefix == "/":
        return path or "/"
    return prefix + path


def check_middleware(middleware: MiddlewareFunc) -> MiddlewareFunc:
    """Reject middleware that cannot be called.

    Both shapes run through ``invoke``: an ``async def`` middleware awaits
    ``advance()`` itself, a plain ``def`` one continues the chain by
    returning ``advance()``.
    """
    if not callable(middleware):
        msg = f"Middleware must be callable, got {type(middleware).__name__}."
        raise ConfigurationError(msg)
    return middleware


class RegisterRoute(Protocol):
    """Callback that appends one route to the shared route table."""

    def __call__(
        self,
        method: HttpMethod,
        path: str,
        handlers: Sequence[Handler],
        middleware: Sequence[MiddlewareFunc],
    ) -> None: ...


class RouteRegistrar:
    """Registration surface shared by the app and every group context.

    Subclasses provide ``_add_route``, ``use``, and ``_open_group``.
    Every verb method works directly or as a decorator::

        app.get("/health", health)

        @app.post("/users")
        async def create_user(req, res): ...
    """

    __slots__ = ()

    # -- Subclass hooks --

    def _add_route(
        self,
        method: HttpMethod,
        path: str,
        handlers: Sequence[Handler],
        middleware: Sequence[MiddlewareFunc],
    ) -> None:
        raise NotImplementedError

    def _open_group(self, prefix: str) -> GroupContext:
        raise NotImplementedError

    def use(self, middleware: MiddlewareFunc) -> None:
        raise NotImplementedError

    # -- Route registration --

    def route(
        self,
        method: str,
        path: str,
        *handlers: Handler,
        middleware: Iterable[MiddlewareFunc] = (),
    ) -> Any:
        """Register *handlers* for ``method path``.

        With no handlers, returns a decorator that registers the
        decorated function. ``middleware`` runs after the scope's
        middleware and before the handlers, for this route only.
        """
        http_method = HttpMethod.parse(method)
        route_middleware = tuple(check_middleware(mw) for mw in middleware)

        if not handlers:

            def decorator(func: Handler) -> Handler:
                self._add_route(http_method, path, (func,), route_middleware)
                return func

            return decorator

        self._add_route(http_method, path, handlers, route_middleware)
        return None

    def get(self, path: str, *handlers: Handler, middleware: Iterable[MiddlewareFunc] = ()) -> Any:
        """Register a GET route."""
        return self.route("GET", path, *handlers, middleware=middleware)

    def post(self, path: str, *handlers: Handler, middleware: Iterable[MiddlewareFunc] = ()) -> Any:
        """Register a POST route."""
        return self.route("POST", path, *handlers, middleware=middleware)

    def put(self, path: str, *handlers: Handler, middleware: Iterable[MiddlewareFunc] = ()) -> Any:
        """Register a PUT route."""
        return self.route("PUT", path, *handlers, middleware=middleware)

    def patch(
        self, path: str, *handlers: Handler, middleware: Iterable[MiddlewareFunc] = ()
    ) -> Any:
        """Register a PATCH route."""
        return self.route("PATCH", path, *handlers, middleware=middleware)

    def delete(
        self, path: str, *handlers: Handler, middleware: Iterable[MiddlewareFunc] = ()
    ) -> Any:
        """Register a DELETE route."""
        return self.route("DELETE", path, *handlers, middleware=middleware)

    # -- Grouping --

    def group(
        self,
        prefix: str,
        callback: Callable[[GroupContext], Any] | None = None,
    ) -> GroupContext:
        """Open a nested scope under *prefix*.

        The callback receives the scoped context. Without a callback the
        context is returned for direct use, or as a ``with`` block::

            with app.group("/api") as api:
                api.use(auth)
                api.get("/me", me)
        """
        context = self._open_group(prefix)
        if callback is not None:
            callback(context)
        return context


class GroupContext(RouteRegistrar):
    """A registration scope with a resolved prefix and its own middleware stack.

    The stack starts as a copy of the parent's stack at creation time and
    grows with local ``use()`` calls. Routes registered here capture the
    stack as it is at the moment of registration.
    """

    __slots__ = ("_middleware", "_register", "prefix")

    def __init__(
        self,
        prefix: str,
        inherited_middleware: Iterable[MiddlewareFunc],
        register: RegisterRoute,
    ) -> None:
        self.prefix = prefix
        self._middleware: list[MiddlewareFunc] = list(inherited_middleware)
        self._register = register

    @property
    def middleware(self) -> tuple[MiddlewareFunc, ...]:
        """Snapshot of this scope's accumulated middleware."""
        return tuple(self._middleware)

    def use(self, middleware: MiddlewareFunc) -> None:
        """Add middleware for routes registered in this scope from now on."""
        self._middleware.append(check_middleware(middleware))

    def _add_route(
        self,
        method: HttpMethod,
        path: str,
        handlers: Sequence[Handler],
        middleware: Sequence[MiddlewareFunc],
    ) -> None:
        full_path = join_route_path(self.prefix, path)
        self._register(method, full_path, handlers, (*self._middleware, *middleware))

    def _open_group(self, prefix: str) -> GroupContext:
        return GroupContext(join_prefix(self.prefix, prefix), self._middleware, self._register)

    def __enter__(self) -> GroupContext:
        return self

    def __exit__(self, *args: object) -> None:
        return None

    def __repr__(self) -> str:
        return f"GroupContext(prefix={self.prefix!r}, middleware={len(self._middleware)})"


def create_group_context(
    prefix: str,
    inherited_middleware: Iterable[MiddlewareFunc],
    register: RegisterRoute,
) -> GroupContext:
    """Build a top-level group context with a normalized *prefix*."""
    return GroupContext(normalize_prefix(prefix), inherited_middleware, register)
