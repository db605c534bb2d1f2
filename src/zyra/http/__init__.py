"""Request and response wrappers consumed by the dispatch core."""

from zyra.http.headers import Headers
from zyra.http.query import QueryParams
from zyra.http.request import Request
from zyra.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
