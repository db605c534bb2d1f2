"""Shared type aliases used across zyra modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route handler: (request, response), sync or async
Handler: TypeAlias = Callable[..., Any]

# Middleware: async (request, response, advance)
MiddlewareFunc: TypeAlias = Callable[..., Any]
