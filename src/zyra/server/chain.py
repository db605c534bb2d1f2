"""Sequential execution of one request's middleware and handler chain.

The chain is a flat tuple of ``ChainStep`` entries: global middleware,
then the route's captured middleware, then the route's handlers. Each
middleware gets an ``advance`` bound to the index of the step after it.
Handlers advance implicitly.

Invariant: once ``response.sent`` is true, no further step runs. The
check happens before every step, so a middleware that sends and then
calls ``advance()`` anyway cannot reach the next step.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from zyra._internal.invoke import invoke
from zyra._internal.types import MiddlewareFunc
from zyra.errors import ChainAborted
from zyra.http.request import Request
from zyra.http.response import Response
from zyra.middleware.protocol import ChainStep, StepKind
from zyra.routing.route import Route

logger = logging.getLogger("zyra.server")


def build_chain(global_middleware: Sequence[MiddlewareFunc], route: Route) -> tuple[ChainStep, ...]:
    """Assemble the effective chain for a matched route."""
    return (
        *(ChainStep.middleware(mw) for mw in global_middleware),
        *(ChainStep.middleware(mw) for mw in route.middleware),
        *(ChainStep.handler(h) for h in route.handlers),
    )


class _Advance:
    """The ``advance`` continuation for one middleware step.

    Bound to a fixed index; a second call is ignored so downstream steps
    never run twice.
    """

    __slots__ = ("_called", "_chain", "_index")

    def __init__(self, chain: Chain, index: int) -> None:
        self._chain = chain
        self._index = index
        self._called = False

    async def __call__(self, error: object = None) -> None:
        if error is not None:
            if isinstance(error, Exception):
                raise error
            raise ChainAborted(error)
        if self._called:
            logger.debug("advance() called twice before step %d; ignoring", self._index)
            return
        self._called = True
        await self._chain.run_from(self._index)


class Chain:
    """Runs the steps for one request, strictly one at a time.

    Usage::

        chain = Chain(build_chain(global_mw, match.route), request, response)
        await chain.run()
    """

    __slots__ = ("request", "response", "steps")

    def __init__(
        self,
        steps: Sequence[ChainStep],
        request: Request,
        response: Response,
    ) -> None:
        self.steps = tuple(steps)
        self.request = request
        self.response = response

    async def run(self) -> None:
        """Execute the chain from the first step."""
        await self.run_from(0)

    async def run_from(self, index: int) -> None:
        """Execute steps starting at *index*.

        Handler steps run in a loop. A middleware step takes over control:
        whatever follows it runs only through its ``advance``.
        """
        while index < len(self.steps):
            if self.response.sent:
                return
            step = self.steps[index]
            if step.kind is StepKind.MIDDLEWARE:
                await invoke(step.func, self.request, self.response, _Advance(self, index + 1))
                return
            await invoke(step.func, self.request, self.response)
            index += 1
