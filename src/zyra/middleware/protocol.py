"""Middleware and handler protocols, and the chain-step variant.

A middleware is any callable matching::

    async def my_mw(request: Request, response: Response, advance: Advance) -> None: ...

or, synchronously, one that hands back the continuation::

    def my_mw(request, response, advance):
        return advance()

A handler is any sync or async callable matching::

    def my_handler(request: Request, response: Response) -> None: ...

No base class required. The framework checks the shape, not the lineage.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from zyra.http.request import Request
from zyra.http.response import Response


class Advance(Protocol):
    """Continuation handed to each middleware.

    ``await advance()`` runs the rest of the chain. ``await advance(err)``
    aborts it with *err*, exactly as if the middleware had raised.
    """

    async def __call__(self, error: object = None) -> None: ...


class Middleware(Protocol):
    """Protocol for zyra middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def require_token(req, res, advance):
            if req.headers.get("authorization") is None:
                res.status(401).json({"error": "Unauthorized"})
                return
            await advance()

        # Class middleware
        class Timing:
            async def __call__(self, req, res, advance):
                start = time.monotonic()
                await advance()
                log.info("%s took %.3fs", req.path, time.monotonic() - start)
    """

    async def __call__(self, request: Request, response: Response, advance: Advance) -> None: ...


class Handler(Protocol):
    """Protocol for route handlers. ``def`` and ``async def`` both work."""

    def __call__(self, request: Request, response: Response) -> Any: ...


class StepKind(Enum):
    """Which calling convention a chain step uses."""

    MIDDLEWARE = "middleware"
    HANDLER = "handler"


@dataclass(frozen=True, slots=True)
class ChainStep:
    """One entry of a request's execution chain.

    Middleware steps receive an ``advance`` continuation and decide
    whether the chain continues. Handler steps take no continuation; the
    chain moves past them automatically unless they sent a response.
    """

    func: Callable[..., Any]
    kind: StepKind

    @classmethod
    def middleware(cls, func: Callable[..., Any]) -> ChainStep:
        return cls(func, StepKind.MIDDLEWARE)

    @classmethod
    def handler(cls, func: Callable[..., Any]) -> ChainStep:
        return cls(func, StepKind.HANDLER)
