"""Tests for zyra.http.response: chainable setters and the single commit."""

import logging

import pytest

from zyra.http.response import Response


class TestSetters:
    def test_defaults(self) -> None:
        response = Response()
        assert response.status_code == 200
        assert response.headers == ()
        assert response.sent is False

    def test_chainable(self) -> None:
        response = Response()
        assert response.status(201).set_header("X-Id", 7) is response
        assert response.status_code == 201
        assert response.get_header("x-id") == "7"

    def test_set_header_replaces(self) -> None:
        response = Response()
        response.set_header("X-Thing", "a").set_header("x-thing", "b")
        assert response.headers == (("x-thing", "b"),)

    def test_set_header_list(self) -> None:
        response = Response()
        response.set_header("Vary", ["Origin", "Accept"])
        assert response.get_header("vary") == "Origin, Accept"


class TestCommit:
    def test_json(self) -> None:
        response = Response()
        response.json({"a": 1, "b": [1, 2]})
        assert response.sent
        assert response.body_bytes == b'{"a":1,"b":[1,2]}'
        assert response.content_type == "application/json"

    def test_json_overrides_content_type(self) -> None:
        response = Response()
        response.set_header("Content-Type", "text/plain")
        response.json([])
        assert response.content_type == "application/json"

    def test_send_text(self) -> None:
        response = Response()
        response.send("<p>hi</p>")
        assert response.text == "<p>hi</p>"
        assert response.content_type == "text/html; charset=utf-8"

    def test_send_keeps_content_type(self) -> None:
        response = Response()
        response.set_header("Content-Type", "text/plain").send("plain")
        assert response.content_type == "text/plain"

    def test_send_bytes(self) -> None:
        response = Response()
        response.send(b"\x00\x01")
        assert response.body_bytes == b"\x00\x01"

    def test_end(self) -> None:
        response = Response()
        response.status(204).end()
        assert response.sent
        assert response.body_bytes == b""

    def test_second_commit_ignored(self, caplog: pytest.LogCaptureFixture) -> None:
        response = Response()
        response.send("first")
        with caplog.at_level(logging.WARNING, logger="zyra.http"):
            response.json({"second": True})
        assert response.text == "first"
        assert "already sent" in caplog.text

    def test_setters_ignored_after_send(self) -> None:
        response = Response()
        response.send("done")
        response.status(500).set_header("X-Late", "1")
        assert response.status_code == 200
        assert response.get_header("X-Late") is None

    def test_repr(self) -> None:
        response = Response()
        assert repr(response) == "<Response 200 pending>"
        response.end()
        assert repr(response) == "<Response 200 sent>"


class TestInvalidValues:
    def test_send_rejects_non_text(self) -> None:
        response = Response()
        with pytest.raises(TypeError, match="send\\(\\) expects str or bytes, got int"):
            response.send(123)  # type: ignore[arg-type]
        assert response.sent is False

    def test_send_rejects_none(self) -> None:
        response = Response()
        with pytest.raises(TypeError):
            response.send(None)  # type: ignore[arg-type]
        assert response.sent is False
        assert response.content_type is None

    def test_send_accepts_bytearray(self) -> None:
        response = Response()
        response.send(bytearray(b"ok"))
        assert response.body_bytes == b"ok"

    def test_header_value_must_be_latin1(self) -> None:
        response = Response()
        with pytest.raises(ValueError, match="latin-1"):
            response.set_header("X-Name", "café☃")
        assert response.get_header("X-Name") is None

    def test_latin1_header_value_allowed(self) -> None:
        response = Response()
        response.set_header("X-Name", "café")
        assert response.get_header("x-name") == "café"
