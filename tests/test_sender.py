"""Tests for wren.server.sender — Response to ASGI messages."""

from typing import Any

from wren.http.response import Response
from wren.server.sender import send_response


async def _send(response: Response) -> list[dict[str, Any]]:
    messages: list[dict[str, Any]] = []

    async def send(message: dict[str, Any]) -> None:
        messages.append(message)

    await send_response(response, send)
    return messages


class TestSendResponse:
    async def test_two_messages(self) -> None:
        messages = await _send(Response("pong"))
        assert [m["type"] for m in messages] == ["http.response.start", "http.response.body"]

    async def test_status_and_body(self) -> None:
        start, body = await _send(Response("pong", status=201))
        assert start["status"] == 201
        assert body["body"] == b"pong"

    async def test_headers_lowercased_with_length(self) -> None:
        start, _ = await _send(Response("pong").with_header("X-Custom", "v"))
        headers = dict(start["headers"])
        assert headers[b"content-type"] == b"text/plain; charset=utf-8"
        assert headers[b"x-custom"] == b"v"
        assert headers[b"content-length"] == b"4"

    async def test_utf8_length_in_bytes(self) -> None:
        start, body = await _send(Response("é"))
        assert dict(start["headers"])[b"content-length"] == b"2"
        assert body["body"] == "é".encode()

    async def test_no_body_for_204(self) -> None:
        start, body = await _send(Response("ignored", status=204))
        headers = dict(start["headers"])
        assert b"content-type" not in headers
        assert headers[b"content-length"] == b"0"
        assert body["body"] == b""
