"""Emit a committed ``Response`` to the ASGI server.

The dispatcher calls this once per request, after the chain (or the
fault path) has committed a response. Nothing is streamed: one start
message, one body message.
"""

from zyra._internal.asgi import Send
from zyra.http.response import Response

# Statuses that never carry a message body.
_BODYLESS = frozenset({204, 304})


def _encode_headers(response: Response, content_length: int) -> list[tuple[bytes, bytes]]:
    encoded = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in response.headers
        if name.lower() != "content-length"
    ]
    encoded.append((b"content-length", str(content_length).encode("latin-1")))
    return encoded


async def send_response(response: Response, send: Send) -> None:
    """Send *response* as ``http.response.start`` plus a single body message."""
    status = response.status_code
    body = b"" if status < 200 or status in _BODYLESS else response.body_bytes

    await send(
        {
            "type": "http.response.start",
            "status": status,
            "headers": _encode_headers(response, len(body)),
        }
    )
    await send({"type": "http.response.body", "body": body})
