"""Parsed query string."""

from collections.abc import Iterator, Mapping
from urllib.parse import parse_qsl


class QueryParams(Mapping[str, str]):
    """Read-only view of ``?a=1&b=2&b=3``.

    Indexing gives the first value for a key and ``get_list`` gives all
    of them. Blank values (``?flag=``) are kept as empty strings.
    """

    __slots__ = ("_data", "_raw")

    def __init__(self, query_string: bytes = b"") -> None:
        self._raw = query_string
        self._data: dict[str, list[str]] = {}
        pairs = parse_qsl(query_string.decode("latin-1"), keep_blank_values=True)
        for key, value in pairs:
            self._data.setdefault(key, []).append(value)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"QueryParams({self.to_dict()!r})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        values = self._data.get(key)
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        return list(self._data.get(key, ()))

    def to_dict(self) -> dict[str, str | list[str]]:
        """Plain dict: a key sent once maps to a string, a repeated key to a list."""
        return {k: v[0] if len(v) == 1 else list(v) for k, v in self._data.items()}

    @property
    def raw(self) -> bytes:
        return self._raw
