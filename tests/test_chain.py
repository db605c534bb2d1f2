"""Tests for zyra.server.chain: sequential middleware/handler execution."""

import asyncio

import pytest

from zyra.errors import ChainAborted
from zyra.http.request import Request
from zyra.http.response import Response
from zyra.middleware.protocol import ChainStep, StepKind
from zyra.routing.matcher import compile_pattern
from zyra.routing.route import HttpMethod, Route
from zyra.server.chain import Chain, build_chain


def _chain(*steps: ChainStep) -> Chain:
    return Chain(steps, Request(method="GET", path="/"), Response())


class TestBuildChain:
    def test_order(self) -> None:
        async def g(req, res, advance) -> None: ...

        async def r(req, res, advance) -> None: ...

        def h(req, res) -> None: ...

        route = Route(
            method=HttpMethod.GET,
            pattern="/",
            matcher=compile_pattern("/"),
            handlers=(h,),
            middleware=(r,),
        )
        steps = build_chain([g], route)
        assert [s.func for s in steps] == [g, r, h]
        assert [s.kind for s in steps] == [
            StepKind.MIDDLEWARE,
            StepKind.MIDDLEWARE,
            StepKind.HANDLER,
        ]


class TestChainRun:
    async def test_middleware_then_handler(self) -> None:
        order: list[str] = []

        async def mw(req, res, advance) -> None:
            order.append("mw")
            await advance()
            order.append("mw-after")

        def handler(req, res) -> None:
            order.append("handler")
            res.send("done")

        chain = _chain(ChainStep.middleware(mw), ChainStep.handler(handler))
        await chain.run()
        assert order == ["mw", "handler", "mw-after"]
        assert chain.response.text == "done"

    async def test_handlers_run_until_one_sends(self) -> None:
        calls: list[str] = []

        async def prepare(req, res) -> None:
            calls.append("prepare")
            req.params["prepared"] = "yes"

        def respond(req, res) -> None:
            calls.append("respond")
            res.json(req.params)

        def never(req, res) -> None:
            calls.append("never")

        chain = _chain(
            ChainStep.handler(prepare), ChainStep.handler(respond), ChainStep.handler(never)
        )
        await chain.run()
        assert calls == ["prepare", "respond"]

    async def test_short_circuit(self) -> None:
        reached = False

        async def guard(req, res, advance) -> None:
            res.status(401).json({"error": "Unauthorized"})

        def handler(req, res) -> None:
            nonlocal reached
            reached = True

        chain = _chain(ChainStep.middleware(guard), ChainStep.handler(handler))
        await chain.run()
        assert reached is False
        assert chain.response.status_code == 401

    async def test_send_then_advance_stops(self) -> None:
        reached = False

        async def sloppy(req, res, advance) -> None:
            res.send("early")
            await advance()

        def handler(req, res) -> None:
            nonlocal reached
            reached = True

        chain = _chain(ChainStep.middleware(sloppy), ChainStep.handler(handler))
        await chain.run()
        assert reached is False
        assert chain.response.text == "early"

    async def test_middleware_without_advance_leaves_unsent(self) -> None:
        async def stall(req, res, advance) -> None:
            pass

        chain = _chain(ChainStep.middleware(stall), ChainStep.handler(lambda req, res: None))
        await chain.run()
        assert chain.response.sent is False

    async def test_advance_twice_runs_downstream_once(self) -> None:
        count = 0

        async def twice(req, res, advance) -> None:
            await advance()
            await advance()

        def handler(req, res) -> None:
            nonlocal count
            count += 1

        chain = _chain(ChainStep.middleware(twice), ChainStep.handler(handler))
        await chain.run()
        assert count == 1

    async def test_advance_with_exception_reraises(self) -> None:
        async def failing(req, res, advance) -> None:
            await advance(ValueError("bad input"))

        chain = _chain(ChainStep.middleware(failing))
        with pytest.raises(ValueError, match="bad input"):
            await chain.run()

    async def test_advance_with_value_aborts(self) -> None:
        async def failing(req, res, advance) -> None:
            await advance("nope")

        chain = _chain(ChainStep.middleware(failing))
        with pytest.raises(ChainAborted) as exc_info:
            await chain.run()
        assert exc_info.value.reason == "nope"

    async def test_handler_exception_propagates(self) -> None:
        def boom(req, res) -> None:
            raise RuntimeError("boom")

        chain = _chain(ChainStep.handler(boom))
        with pytest.raises(RuntimeError, match="boom"):
            await chain.run()

    async def test_empty_chain(self) -> None:
        chain = _chain()
        await chain.run()
        assert chain.response.sent is False

    async def test_sync_middleware_returning_advance(self) -> None:
        order: list[str] = []

        def tag(req, res, advance):
            order.append("tag")
            return advance()

        def handler(req, res) -> None:
            order.append("handler")
            res.send("ok")

        chain = _chain(ChainStep.middleware(tag), ChainStep.handler(handler))
        await chain.run()
        assert order == ["tag", "handler"]
        assert chain.response.text == "ok"

    async def test_sync_middleware_short_circuit(self) -> None:
        def deny(req, res, advance) -> None:
            res.status(403).send("no")

        chain = _chain(ChainStep.middleware(deny), ChainStep.handler(lambda req, res: None))
        await chain.run()
        assert chain.response.status_code == 403


class TestSuspension:
    async def test_steps_complete_in_order(self) -> None:
        events: list[str] = []

        async def slow_mw(req, res, advance) -> None:
            events.append("mw:start")
            await asyncio.sleep(0.01)
            events.append("mw:advance")
            await advance()
            events.append("mw:after")

        async def slow_prepare(req, res) -> None:
            await asyncio.sleep(0.01)
            events.append("prepare")

        async def respond(req, res) -> None:
            events.append("respond")
            res.send("ok")

        chain = _chain(
            ChainStep.middleware(slow_mw),
            ChainStep.handler(slow_prepare),
            ChainStep.handler(respond),
        )
        await chain.run()
        assert events == ["mw:start", "mw:advance", "prepare", "respond", "mw:after"]

    async def test_concurrent_chains_keep_their_own_order(self) -> None:
        events: list[tuple[str, str]] = []

        def make_steps(delay: float) -> tuple[ChainStep, ...]:
            async def mw(req, res, advance) -> None:
                events.append((req.path, "mw"))
                await asyncio.sleep(delay)
                await advance()

            async def first(req, res) -> None:
                await asyncio.sleep(delay)
                events.append((req.path, "first"))

            async def second(req, res) -> None:
                events.append((req.path, "second"))
                res.send(req.path)

            return (ChainStep.middleware(mw), ChainStep.handler(first), ChainStep.handler(second))

        slow = Chain(make_steps(0.02), Request(method="GET", path="/slow"), Response())
        fast = Chain(make_steps(0.001), Request(method="GET", path="/fast"), Response())
        await asyncio.gather(slow.run(), fast.run())

        for path in ("/slow", "/fast"):
            assert [step for p, step in events if p == path] == ["mw", "first", "second"]
        # The fast chain finished while the slow one was still suspended
        assert events.index(("/fast", "second")) < events.index(("/slow", "first"))
        assert slow.response.text == "/slow"
        assert fast.response.text == "/fast"
