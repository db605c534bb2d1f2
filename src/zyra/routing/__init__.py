"""Routing: path matchers, the ordered route table, and group scopes.

Routes are registered during setup and frozen into an immutable,
insertion-ordered table when the app starts serving.
"""

from zyra.routing.group import GroupContext, RouteRegistrar, create_group_context
from zyra.routing.matcher import PathMatcher, compile_pattern, normalize_path
from zyra.routing.route import HttpMethod, Route, RouteMatch
from zyra.routing.router import Router

__all__ = [
    "GroupContext",
    "HttpMethod",
    "PathMatcher",
    "Route",
    "RouteMatch",
    "RouteRegistrar",
    "Router",
    "compile_pattern",
    "create_group_context",
    "normalize_path",
]
