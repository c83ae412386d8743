"""Tests for wren.http.response — chainable immutable responses."""

import pytest

from wren.http.response import JSON_CONTENT_TYPE, TEXT_CONTENT_TYPE, Response


class TestResponse:
    def test_defaults(self) -> None:
        r = Response()
        assert r.status == 200
        assert r.content_type == TEXT_CONTENT_TYPE
        assert r.body_bytes == b""
        assert r.headers == ()

    def test_text_body(self) -> None:
        r = Response("pong")
        assert r.text == "pong"
        assert r.body_bytes == b"pong"

    def test_bytes_body(self) -> None:
        r = Response(b"\xc3\xa9")
        assert r.text == "é"

    def test_json_body_is_compact(self) -> None:
        r = Response.json_body({"message": "hi"}, status=201)
        assert r.body == '{"message":"hi"}'
        assert r.status == 201
        assert r.content_type == JSON_CONTENT_TYPE
        assert r.json == {"message": "hi"}

    def test_with_status_returns_new(self) -> None:
        r = Response("x")
        r2 = r.with_status(404)
        assert r.status == 200
        assert r2.status == 404

    def test_with_header_appends(self) -> None:
        r = Response().with_header("X-A", "1").with_header("X-A", "2")
        assert r.headers == (("X-A", "1"), ("X-A", "2"))

    def test_with_headers(self) -> None:
        r = Response().with_headers({"X-A": "1", "X-B": "2"})
        assert r.header("x-b") == "2"

    def test_with_content_type(self) -> None:
        assert Response().with_content_type("text/csv").content_type == "text/csv"

    def test_header_lookup_missing(self) -> None:
        assert Response().header("x-missing") is None

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            Response().status = 500  # type: ignore[misc]
