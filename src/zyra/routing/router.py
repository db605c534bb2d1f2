"""Ordered route table with first-match resolution.

Routes are tried in registration order; the first route whose method
and matcher both accept the request wins. There is no specificity
ranking, so a later duplicate of an earlier (method, pattern) pair is
simply unreachable.
"""

from collections.abc import Iterable, Sequence

from zyra._internal.types import Handler, MiddlewareFunc
from zyra.errors import ConfigurationError
from zyra.routing.matcher import compile_pattern
from zyra.routing.route import HttpMethod, Route, RouteMatch


class Router:
    """Insertion-ordered route table.

    Usage::

        router = Router()
        router.add_route("GET", "/users/:id", [show_user])
        router.compile()
        match = router.match("GET", "/users/42")
        match.params  # {"id": "42"}
    """

    __slots__ = ("_compiled", "_routes")

    def __init__(self) -> None:
        self._routes: list[Route] | tuple[Route, ...] = []
        self._compiled = False

    def add(self, route: Route) -> None:
        """Append a pre-built route. Must be called before compile()."""
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)
        assert isinstance(self._routes, list)
        self._routes.append(route)

    def add_route(
        self,
        method: str,
        pattern: str,
        handlers: Sequence[Handler],
        middleware: Iterable[MiddlewareFunc] = (),
    ) -> Route:
        """Compile *pattern* and append a new route.

        Raises ``PatternError`` for a malformed pattern and
        ``ConfigurationError`` for an empty handler chain.
        """
        if not handlers:
            msg = f"Route {method.upper()} {pattern!r} needs at least one handler."
            raise ConfigurationError(msg)
        route = Route(
            method=HttpMethod.parse(method),
            pattern=pattern,
            matcher=compile_pattern(pattern),
            handlers=tuple(handlers),
            middleware=tuple(middleware),
        )
        self.add(route)
        return route

    @property
    def routes(self) -> tuple[Route, ...]:
        """All registered routes, in match-precedence order."""
        return tuple(self._routes)

    @property
    def compiled(self) -> bool:
        return self._compiled

    def compile(self) -> None:
        """Freeze the table into an immutable snapshot. No more routes can be added."""
        self._routes = tuple(self._routes)
        self._compiled = True

    def match(self, method: str, path: str) -> RouteMatch | None:
        """Resolve a request to the first matching route.

        Returns ``None`` when nothing matches; a miss is a normal outcome
        that the dispatcher turns into a 404.
        """
        normalized = method.upper()
        for route in self._routes:
            if route.method != normalized:
                continue
            captures = route.matcher.match(path)
            if captures is not None:
                params = dict(zip(route.param_names, captures, strict=True))
                return RouteMatch(route=route, params=params)
        return None

    def __len__(self) -> int:
        return len(self._routes)
