"""HTTP response writer.

One ``Response`` belongs to one request. Middleware and handlers set a
status and headers, then commit exactly once with ``json()``,
``send()``, or ``end()``. The ``sent`` flag is what the dispatch chain
checks before every step; the commit methods check it too, so a second
write is dropped no matter who attempts it.
"""

from __future__ import annotations

import json
import logging
from typing import Any

logger = logging.getLogger("zyra.http")

JSON_CONTENT_TYPE = "application/json"
HTML_CONTENT_TYPE = "text/html; charset=utf-8"


def _check_latin1(what: str, text: str) -> None:
    """Header bytes go out as latin-1; anything else fails here, inside the chain."""
    try:
        text.encode("latin-1")
    except UnicodeEncodeError as exc:
        msg = f"{what} must be latin-1 encodable, got {text!r}"
        raise ValueError(msg) from exc


class Response:
    """A mutable response that can be committed once.

    Usage::

        async def create_user(req, res):
            user = await users.create(req.body)
            res.status(201).set_header("Location", f"/users/{user.id}").json(user)
    """

    __slots__ = ("_body", "_headers", "_sent", "_status")

    def __init__(self) -> None:
        self._status = 200
        self._headers: list[tuple[str, str]] = []
        self._body = b""
        self._sent = False

    # -- State --

    @property
    def sent(self) -> bool:
        """True once the response has been committed."""
        return self._sent

    @property
    def status_code(self) -> int:
        return self._status

    @property
    def headers(self) -> tuple[tuple[str, str], ...]:
        """Headers in the order they were first set."""
        return tuple(self._headers)

    @property
    def content_type(self) -> str | None:
        return self.get_header("Content-Type")

    @property
    def body_bytes(self) -> bytes:
        return self._body

    @property
    def text(self) -> str:
        return self._body.decode("utf-8")

    # -- Chainable setters --

    def status(self, code: int) -> Response:
        """Set the status code. Ignored once the response is sent."""
        if self._sent:
            logger.warning("Response already sent; ignoring status(%d)", code)
            return self
        self._status = code
        return self

    def set_header(self, name: str, value: str | int | list[str]) -> Response:
        """Set a header, replacing any earlier value for the same name.

        Lists are joined with ``", "``. Ignored once the response is sent.
        """
        if self._sent:
            logger.warning("Response already sent; ignoring header %r", name)
            return self
        text = ", ".join(value) if isinstance(value, list) else str(value)
        _check_latin1("header name", name)
        _check_latin1(f"value of header {name!r}", text)
        lowered = name.lower()
        for i, (existing, _) in enumerate(self._headers):
            if existing.lower() == lowered:
                self._headers[i] = (name, text)
                return self
        self._headers.append((name, text))
        return self

    def get_header(self, name: str) -> str | None:
        """Case-insensitive header lookup."""
        lowered = name.lower()
        for existing, value in self._headers:
            if existing.lower() == lowered:
                return value
        return None

    # -- Commit --

    def json(self, data: Any) -> None:
        """Send *data* serialized as compact JSON."""
        if self._guard("json"):
            return
        body = json.dumps(data, separators=(",", ":")).encode("utf-8")
        self.set_header("Content-Type", JSON_CONTENT_TYPE)
        self._commit(body)

    def send(self, data: str | bytes) -> None:
        """Send text or HTML. Keeps a Content-Type the caller already set."""
        if self._guard("send"):
            return
        if isinstance(data, str):
            body = data.encode("utf-8")
        elif isinstance(data, (bytes, bytearray, memoryview)):
            body = bytes(data)
        else:
            msg = f"send() expects str or bytes, got {type(data).__name__}; use json() for data"
            raise TypeError(msg)
        if self.get_header("Content-Type") is None:
            self.set_header("Content-Type", HTML_CONTENT_TYPE)
        self._commit(body)

    def end(self) -> None:
        """Send the response with whatever body it has (usually none)."""
        if self._guard("end"):
            return
        self._commit(self._body)

    def _guard(self, operation: str) -> bool:
        if self._sent:
            logger.warning("Response already sent; ignoring %s()", operation)
            return True
        return False

    def _commit(self, body: bytes) -> None:
        self._body = body
        self._sent = True

    def __repr__(self) -> str:
        state = "sent" if self._sent else "pending"
        return f"<Response {self._status} {state}>"
