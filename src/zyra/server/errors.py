"""Error responses for the dispatch pipeline.

Route misses become 404s. Faults raised by middleware or handlers are
logged with their traceback and become 500s, unless a response already
went out, in which case they are only logged.
"""

import logging
from typing import Any

from zyra.http.request import Request
from zyra.http.response import Response

logger = logging.getLogger("zyra.server")

NOT_FOUND = "Not Found"
INTERNAL_SERVER_ERROR = "Internal Server Error"


def error_payload(error: str, message: str, request: Request) -> dict[str, Any]:
    """The JSON body shared by 404 and 500 responses."""
    return {
        "error": error,
        "message": message,
        "path": request.path,
        "method": request.method,
    }


def respond_not_found(request: Request, response: Response) -> None:
    """Send the 404 for a request no route matched."""
    logger.debug("404 %s %s", request.method, request.path)
    message = f"Cannot {request.method} {request.path}"
    response.status(404).json(error_payload(NOT_FOUND, message, request))


def respond_internal_error(
    exc: Exception,
    request: Request,
    response: Response,
    *,
    expose_message: bool = True,
) -> None:
    """Log a fault and send a 500 if nothing was sent yet.

    The client never sees a traceback; with *expose_message* it sees the
    exception's message, otherwise the generic status phrase.
    """
    if response.sent:
        logger.error(
            "Error after response was sent: %s %s",
            request.method,
            request.path,
            exc_info=exc,
        )
        return

    logger.exception("500 %s %s", request.method, request.path, exc_info=exc)
    message = str(exc) if expose_message and str(exc) else INTERNAL_SERVER_ERROR
    response.status(500).json(error_payload(INTERNAL_SERVER_ERROR, message, request))
