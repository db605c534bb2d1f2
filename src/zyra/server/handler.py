"""ASGI handler: the request dispatcher.

The only component that touches raw ASGI scopes directly. Builds the
``Request``/``Response`` pair, resolves the route, runs the chain, and
sends whatever response the chain (or the error path) committed.

Per request::

    MATCHING -> miss -> 404
             -> hit  -> chain (global mw, route mw, handlers) -> done
    any fault        -> 500 (or log only, if a response already went out)
"""

import logging
from collections.abc import Sequence

from zyra._internal.asgi import Receive, Scope, Send
from zyra._internal.types import MiddlewareFunc
from zyra.config import AppConfig
from zyra.http.request import Request
from zyra.http.response import Response
from zyra.routing.router import Router
from zyra.server.chain import Chain, build_chain
from zyra.server.errors import respond_internal_error, respond_not_found
from zyra.server.sender import send_response

logger = logging.getLogger("zyra.server")


async def dispatch(
    request: Request,
    response: Response,
    *,
    router: Router,
    middleware: Sequence[MiddlewareFunc],
    expose_error_messages: bool = True,
) -> None:
    """Run one request through routing and its chain.

    Never raises for user-code faults: they are caught here, at the one
    boundary, and turned into a 500 (or only logged if already sent).
    """
    try:
        await request.parse_body()

        match = router.match(request.method, request.path)
        if match is None:
            respond_not_found(request, response)
            return

        request.params.update(match.params)
        chain = Chain(build_chain(middleware, match.route), request, response)
        await chain.run()

        if not response.sent:
            # A middleware neither advanced nor sent; that is the caller's bug.
            logger.warning(
                "No response sent for %s %s (route %s %s)",
                request.method,
                request.path,
                match.route.method,
                match.route.pattern,
            )
    except Exception as exc:
        respond_internal_error(exc, request, response, expose_message=expose_error_messages)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    router: Router,
    middleware: Sequence[MiddlewareFunc],
    config: AppConfig,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive, max_body_size=config.max_body_size)
    response = Response()

    await dispatch(
        request,
        response,
        router=router,
        middleware=middleware,
        expose_error_messages=config.expose_error_messages,
    )

    if response.sent:
        await send_response(response, send)
