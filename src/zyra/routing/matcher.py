"""Path pattern compilation.

A pattern like ``/users/:id/posts/:post_id`` compiles once, at
registration time, into a structural matcher: a tuple of literal
segments and named capture slots. Matching a request path is a
segment-by-segment comparison anchored at both ends.
"""

import re

from zyra.errors import PatternError
from zyra.routing.route import PathSegment

_PARAM_NAME = re.compile(r"\w+")


def normalize_path(path: str) -> str:
    """Ensure a leading ``/`` and strip a single trailing slash, except from ``/``.

    Applied to patterns before compilation and to request paths before
    matching, so ``/users/`` and ``/users`` are the same route.
    """
    if not path.startswith("/"):
        path = f"/{path}"
    if len(path) > 1 and path.endswith("/"):
        return path[:-1]
    return path


def parse_pattern(pattern: str) -> list[PathSegment]:
    """Parse a route pattern into segments.

    Examples::

        "/"             -> [PathSegment("")]
        "/users"        -> [PathSegment("users")]
        "/users/:id"    -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]

    Raises ``PatternError`` for an empty pattern, a pattern without a
    leading ``/``, an empty or malformed parameter name, or a parameter
    name used twice.
    """
    if not pattern:
        raise PatternError(pattern, "pattern is empty")
    if not pattern.startswith("/"):
        raise PatternError(pattern, "pattern must start with '/'")

    segments: list[PathSegment] = []
    seen: set[str] = set()
    for part in normalize_path(pattern).split("/")[1:]:
        if not part.startswith(":"):
            segments.append(PathSegment(value=part))
            continue

        name = part[1:]
        if not name:
            raise PatternError(pattern, "empty parameter name")
        if not _PARAM_NAME.fullmatch(name):
            raise PatternError(
                pattern,
                f"parameter name {name!r} may only contain letters, digits, and '_'",
            )
        if name in seen:
            raise PatternError(pattern, f"duplicate parameter name {name!r}")
        seen.add(name)
        segments.append(PathSegment(value=part, is_param=True, param_name=name))
    return segments


class PathMatcher:
    """A compiled, immutable structural matcher for one route pattern.

    Usage::

        matcher = compile_pattern("/users/:id")
        matcher.param_names            # ("id",)
        matcher.match("/users/42")     # ("42",)
        matcher.match("/users")        # None
    """

    __slots__ = ("_segments", "param_names", "pattern")

    def __init__(self, pattern: str, segments: list[PathSegment]) -> None:
        self.pattern = pattern
        self._segments: tuple[PathSegment, ...] = tuple(segments)
        self.param_names: tuple[str, ...] = tuple(
            seg.param_name for seg in segments if seg.param_name is not None
        )

    @property
    def segments(self) -> tuple[PathSegment, ...]:
        return self._segments

    def match(self, path: str) -> tuple[str, ...] | None:
        """Match a request path, returning captured values in order.

        The whole path must match: no prefix matches. Parameters match
        exactly one non-empty segment. Literals compare case-sensitively.
        """
        parts = normalize_path(path).split("/")[1:]
        if len(parts) != len(self._segments):
            return None

        captures: list[str] = []
        for seg, part in zip(self._segments, parts, strict=True):
            if seg.is_param:
                if not part:
                    return None
                captures.append(part)
            elif seg.value != part:
                return None
        return tuple(captures)

    def __repr__(self) -> str:
        return f"PathMatcher({self.pattern!r})"


def compile_pattern(pattern: str) -> PathMatcher:
    """Compile a route pattern. Raises ``PatternError`` if it is malformed."""
    return PathMatcher(pattern, parse_pattern(pattern))
