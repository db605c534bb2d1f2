"""Incoming request wrapper.

Method, path, headers, and query are fixed when the request is built.
``params`` stays a plain mutable dict: the dispatcher merges matched path
parameters into it before the chain runs, so every step sees the same
values. The body is pulled from the server once and then cached.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import Any

from zyra._internal.asgi import Receive, Scope
from zyra.errors import InvalidBody
from zyra.http.headers import Headers
from zyra.http.query import QueryParams

_DEFAULT_MAX_BODY = 1024 * 1024


@dataclass(slots=True)
class Request:
    """What middleware and handlers see of the incoming request.

    ``path`` is the decoded pathname without the query string; it is the
    only thing routing matches against. ``body`` is ``None`` until
    ``parse_body()`` has run (the dispatcher does that before matching).
    """

    method: str
    path: str
    headers: Headers = field(default_factory=Headers)
    query: QueryParams = field(default_factory=QueryParams)
    params: dict[str, str] = field(default_factory=dict)
    body: Any = None
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _max_body_size: int = field(default=_DEFAULT_MAX_BODY, repr=False, compare=False)
    _raw_body: bytes | None = field(default=None, repr=False, compare=False)
    _body_parsed: bool = field(default=False, repr=False, compare=False)

    @classmethod
    def from_asgi(
        cls,
        scope: Scope,
        receive: Receive | None = None,
        *,
        max_body_size: int = _DEFAULT_MAX_BODY,
    ) -> Request:
        """Wrap an ASGI ``http`` scope."""
        server, client = scope.get("server"), scope.get("client")
        return cls(
            method=scope["method"].upper(),
            path=scope["path"] or "/",
            headers=Headers(scope.get("headers", ())),
            query=QueryParams(scope.get("query_string", b"")),
            http_version=scope.get("http_version", "1.1"),
            server=(server[0], server[1]) if server else None,
            client=(client[0], client[1]) if client else None,
            _receive=receive,
            _max_body_size=max_body_size,
        )

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    @property
    def url(self) -> str:
        """Path plus query string, as the client sent it."""
        if not self.query.raw:
            return self.path
        return f"{self.path}?{self.query.raw.decode('latin-1')}"

    # -- Body --

    async def stream(self) -> AsyncIterator[bytes]:
        """Yield raw body chunks as the server delivers them."""
        receive = self._receive
        if receive is None:
            return
        more = True
        while more:
            message = await receive()
            more = message.get("more_body", False)
            if chunk := message.get("body", b""):
                yield chunk

    async def read(self) -> bytes:
        """The whole body as bytes.

        Raises ``InvalidBody`` once the body grows past the size limit.
        """
        if self._raw_body is not None:
            return self._raw_body
        buffer = bytearray()
        async for chunk in self.stream():
            buffer += chunk
            if len(buffer) > self._max_body_size:
                msg = f"Request body exceeds {self._max_body_size} bytes"
                raise InvalidBody(msg)
        self._raw_body = bytes(buffer)
        return self._raw_body

    async def text(self) -> str:
        return (await self.read()).decode("utf-8")

    async def json(self) -> Any:
        """Decode the body as JSON."""
        try:
            return json.loads(await self.read())
        except ValueError as exc:
            msg = "Invalid JSON in request body"
            raise InvalidBody(msg) from exc

    async def parse_body(self) -> Any:
        """Fill ``body`` from the payload and return it.

        An empty payload gives ``None``. A JSON content type is decoded;
        anything else is kept as text.
        """
        if self._body_parsed:
            return self.body
        raw = await self.read()
        if raw and "application/json" in (self.content_type or ""):
            self.body = await self.json()
        elif raw:
            self.body = raw.decode("utf-8", errors="replace")
        self._body_parsed = True
        return self.body
