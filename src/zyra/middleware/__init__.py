"""Middleware: Protocol-based, no inheritance required.

A middleware is any async callable matching:
    async def mw(request: Request, response: Response, advance: Advance) -> None

Built-in middleware:
    CORSMiddleware -- Cross-Origin Resource Sharing (``cors()`` factory)
"""

from zyra.middleware.cors import CORSConfig, CORSMiddleware, cors
from zyra.middleware.protocol import Advance, ChainStep, Handler, Middleware, StepKind

__all__ = [
    "Advance",
    "CORSConfig",
    "CORSMiddleware",
    "ChainStep",
    "Handler",
    "Middleware",
    "StepKind",
    "cors",
]
