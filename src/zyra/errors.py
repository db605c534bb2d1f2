"""Zyra exception hierarchy.

Shared across Router, App, the dispatch chain, and the HTTP wrappers so
every module raises and catches the same types.

A route miss is not an exception: ``Router.match`` returns ``None`` and
the dispatcher turns that into a 404.
"""


class ZyraError(Exception):
    """Base for all zyra-specific errors."""


class ConfigurationError(ZyraError):
    """Raised when app configuration is invalid.

    Registration-time faults land here and are never recovered: they
    surface from the registration call itself, before any traffic.
    """


class PatternError(ConfigurationError):
    """A route path pattern could not be compiled.

    Carries the offending pattern so the message points at the exact
    registration that failed.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid route pattern {pattern!r}: {reason}")


class ChainAborted(ZyraError):  # noqa: N818
    """Raised when ``advance(value)`` is called with a non-exception value.

    Exceptions passed to ``advance`` are re-raised as-is; anything else
    (a string, a dict) is wrapped so the dispatcher still sees an error.
    """

    def __init__(self, reason: object) -> None:
        self.reason = reason
        super().__init__(str(reason))


class InvalidBody(ZyraError):  # noqa: N818
    """The request body could not be read or decoded."""
