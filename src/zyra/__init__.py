"""Zyra: a minimal async HTTP routing and middleware framework.

Routes with ``:param`` segments, a sequential middleware chain with
short-circuiting, nested route groups, and built-in 404/500 handling.

Basic usage::

    from zyra import App

    app = App()

    @app.get("/users/:id")
    async def show_user(req, res):
        res.json({"id": req.params["id"]})

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "Advance",
    "App",
    "AppConfig",
    "CORSConfig",
    "CORSMiddleware",
    "ChainAborted",
    "ConfigurationError",
    "GroupContext",
    "HttpMethod",
    "InvalidBody",
    "Middleware",
    "PatternError",
    "Request",
    "Response",
    "ZyraError",
    "cors",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import zyra`` fast while providing a clean top-level API.
    """
    if name == "App":
        from zyra.app import App

        return App

    if name == "AppConfig":
        from zyra.config import AppConfig

        return AppConfig

    if name in ("Request", "Response"):
        from zyra import http as _http

        return getattr(_http, name)

    if name in ("GroupContext", "HttpMethod"):
        from zyra import routing as _routing

        return getattr(_routing, name)

    if name in ("Advance", "Middleware"):
        from zyra.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in ("CORSConfig", "CORSMiddleware", "cors"):
        from zyra.middleware import cors as _cors

        return getattr(_cors, name)

    if name in ("ZyraError", "ConfigurationError", "PatternError", "ChainAborted", "InvalidBody"):
        from zyra import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
