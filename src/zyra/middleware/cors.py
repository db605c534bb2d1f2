"""CORS middleware.

Handles preflight requests and adds the CORS response headers to
actual requests. Requests without an ``Origin`` header, or from an
origin that is not allowed, pass through untouched.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import TypeAlias

from zyra.errors import ConfigurationError
from zyra.http.request import Request
from zyra.http.response import Response
from zyra.middleware.protocol import Advance

CORSOrigin: TypeAlias = bool | str | Sequence[str] | Callable[[str], bool]

DEFAULT_METHODS: tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "PATCH", "OPTIONS")


def _join(value: str | Sequence[str]) -> str:
    return value if isinstance(value, str) else ",".join(value)


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    ``origin`` accepts:

    - ``True`` to allow any origin, ``False`` to allow none
    - ``"*"`` (any origin) or one exact origin string
    - a sequence of allowed origins
    - a predicate ``(origin) -> bool``

    ``allowed_headers=None`` reflects the preflight's
    ``Access-Control-Request-Headers`` back to the client.
    """

    origin: CORSOrigin = True
    methods: str | Sequence[str] = DEFAULT_METHODS
    allowed_headers: str | Sequence[str] | None = None
    exposed_headers: str | Sequence[str] | None = None
    credentials: bool = False
    max_age: int | None = None
    options_success_status: int = 204

    def __post_init__(self) -> None:
        origin = self.origin
        if not (
            isinstance(origin, (bool, str))
            or callable(origin)
            or (isinstance(origin, Sequence) and all(isinstance(o, str) for o in origin))
        ):
            msg = "origin must be a string, sequence of strings, callable, or boolean"
            raise ConfigurationError(msg)
        if self.max_age is not None and (
            isinstance(self.max_age, bool) or not isinstance(self.max_age, int)
        ):
            msg = "max_age must be an integer number of seconds"
            raise ConfigurationError(msg)

    @property
    def allows_any_origin(self) -> bool:
        return self.origin is True or self.origin == "*"


def is_origin_allowed(request_origin: str, origin: CORSOrigin) -> bool:
    """Check *request_origin* against the configured origin setting."""
    if isinstance(origin, bool):
        return origin
    if isinstance(origin, str):
        return origin == "*" or origin == request_origin
    if callable(origin):
        return bool(origin(request_origin))
    return request_origin in origin


def is_preflight(request: Request) -> bool:
    """An OPTIONS request announcing the method it wants to use."""
    return request.method == "OPTIONS" and bool(
        request.headers.get("access-control-request-method")
    )


class CORSMiddleware:
    """Cross-Origin Resource Sharing middleware.

    Usage::

        app.use(CORSMiddleware(CORSConfig(
            origin=["https://example.com"],
            credentials=True,
            max_age=600,
        )))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _set_origin(self, request_origin: str, response: Response) -> None:
        cfg = self.config
        if cfg.allows_any_origin and not cfg.credentials:
            response.set_header("Access-Control-Allow-Origin", "*")
        else:
            # Credentials forbid the wildcard, so echo the caller's origin.
            response.set_header("Access-Control-Allow-Origin", request_origin)
            response.set_header("Vary", "Origin")

    def _set_credentials(self, response: Response) -> None:
        if self.config.credentials:
            response.set_header("Access-Control-Allow-Credentials", "true")

    def _preflight(self, request: Request, response: Response, request_origin: str) -> None:
        cfg = self.config
        self._set_origin(request_origin, response)
        response.set_header("Access-Control-Allow-Methods", _join(cfg.methods))

        if cfg.allowed_headers:
            allowed: str | None = _join(cfg.allowed_headers)
        else:
            allowed = request.headers.get("access-control-request-headers")
        if allowed:
            response.set_header("Access-Control-Allow-Headers", allowed)

        self._set_credentials(response)
        if cfg.max_age is not None:
            response.set_header("Access-Control-Max-Age", str(cfg.max_age))

        response.status(cfg.options_success_status).end()

    async def __call__(self, request: Request, response: Response, advance: Advance) -> None:
        """Apply CORS handling, then continue unless this was a preflight."""
        request_origin = request.headers.get("origin")

        # No Origin header: not a CORS request
        if not request_origin:
            await advance()
            return

        if not is_origin_allowed(request_origin, self.config.origin):
            await advance()
            return

        if is_preflight(request):
            self._preflight(request, response, request_origin)
            return

        self._set_origin(request_origin, response)
        self._set_credentials(response)
        if self.config.exposed_headers:
            response.set_header(
                "Access-Control-Expose-Headers", _join(self.config.exposed_headers)
            )
        await advance()


def cors(config: CORSConfig | None = None, **options: object) -> CORSMiddleware:
    """Build a CORS middleware from a config or keyword options.

    ``cors(origin=["https://a.example"], credentials=True)`` is shorthand
    for ``CORSMiddleware(CORSConfig(...))``.
    """
    if config is not None and options:
        msg = "Pass either a CORSConfig or keyword options, not both."
        raise ConfigurationError(msg)
    return CORSMiddleware(config or CORSConfig(**options))  # type: ignore[arg-type]
