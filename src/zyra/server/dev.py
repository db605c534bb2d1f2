"""Server lifecycle: serve an app with uvicorn.

Socket binding, keep-alive, and HTTP parsing belong to the server; the
app is handed over as a plain ASGI callable.
"""

import logging
from typing import Any

logger = logging.getLogger("zyra.app")


def run_server(app: Any, host: str, port: int, *, log_level: str = "info") -> None:
    """Start a uvicorn server for *app* and block until it stops.

    Args:
        app: ASGI callable (zyra App instance).
        host: Bind host address.
        port: Bind port number.
        log_level: Level name for both zyra's and uvicorn's loggers.
    """
    import uvicorn

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, lifespan="on")
    server = uvicorn.Server(config)
    logger.info("Server listening on http://%s:%d", host, port)
    server.run()
