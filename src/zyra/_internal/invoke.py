"""Invoke helpers: call sync or async handlers uniformly.

Zyra handlers can be ``def`` or ``async def``. Any code that calls
a user-provided handler must handle both cases. This module provides
a single helper so the sync/async check lives in exactly one place.

Usage::

    from zyra._internal.invoke import invoke

    await invoke(handler, request, response)
"""

import inspect
from typing import Any


async def invoke(handler: Any, *args: Any, **kwargs: Any) -> Any:
    """Call a handler and await the result if it's awaitable.

    Works with both sync and async callables::

        # sync: returns immediately
        def health(req, res):
            res.json({"ok": True})

        # async: returns a coroutine, awaited here
        async def user(req, res):
            res.json(await load_user(req.params["id"]))
    """
    result = handler(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result

