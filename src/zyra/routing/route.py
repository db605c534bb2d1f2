"""Route, RouteMatch, and PathSegment frozen dataclasses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from zyra._internal.types import Handler, MiddlewareFunc

if TYPE_CHECKING:
    from zyra.routing.matcher import PathMatcher


class HttpMethod(StrEnum):
    """HTTP methods a route can be registered for.

    ``OPTIONS`` exists for CORS preflight routes.
    """

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method: str) -> HttpMethod:
        """Normalize a method name, raising ``ValueError`` for unknown ones."""
        try:
            return cls(method.upper())
        except ValueError:
            allowed = ", ".join(m.value for m in cls)
            msg = f"Unsupported HTTP method {method!r}. Expected one of: {allowed}"
            raise ValueError(msg) from None


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:  ``users``  (is_param=False)
    Param:    ``:id``    (is_param=True, param_name="id")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None


@dataclass(frozen=True, slots=True)
class Route:
    """A registered endpoint. Immutable once created.

    ``middleware`` is the group stack captured at registration time,
    followed by any route-specific middleware. ``handlers`` run after
    it, in order, until one of them sends a response.
    """

    method: HttpMethod
    pattern: str
    matcher: PathMatcher
    handlers: tuple[Handler, ...]
    middleware: tuple[MiddlewareFunc, ...] = ()

    @property
    def param_names(self) -> tuple[str, ...]:
        """Parameter names in capture order."""
        return self.matcher.param_names


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route match."""

    route: Route
    params: dict[str, str]
