"""Tests for zyra.routing.route: HttpMethod and the route dataclasses."""

import dataclasses

import pytest

from zyra.routing.matcher import compile_pattern
from zyra.routing.route import HttpMethod, Route


def _handler(req, res) -> None:
    res.send("ok")


class TestHttpMethod:
    def test_parse_normalizes_case(self) -> None:
        assert HttpMethod.parse("get") is HttpMethod.GET
        assert HttpMethod.parse("Patch") is HttpMethod.PATCH

    def test_parse_rejects_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unsupported HTTP method 'TRACE'"):
            HttpMethod.parse("TRACE")

    def test_compares_equal_to_string(self) -> None:
        assert HttpMethod.DELETE == "DELETE"


class TestRoute:
    def test_param_names_come_from_matcher(self) -> None:
        route = Route(
            method=HttpMethod.GET,
            pattern="/users/:id",
            matcher=compile_pattern("/users/:id"),
            handlers=(_handler,),
        )
        assert route.param_names == ("id",)
        assert route.middleware == ()

    def test_frozen(self) -> None:
        route = Route(
            method=HttpMethod.GET,
            pattern="/",
            matcher=compile_pattern("/"),
            handlers=(_handler,),
        )
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.pattern = "/other"  # type: ignore[misc]
