"""Immutable HTTP request.

Frozen metadata plus the body as an owned byte buffer. The buffer is
filled once at pipeline entry (see ``wren.http.body``) and every stage
that inspects the body reads the same ``bytes`` object.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field, replace
from typing import Any

from wren._internal.asgi import Scope
from wren.http.headers import Headers
from wren.http.query import QueryParams


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request.

    Exclusively owned by the pipeline invocation that created it; never
    shared across concurrent requests.
    """

    method: str
    path: str
    headers: Headers
    query: QueryParams
    body: bytes = b""
    path_params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    server: tuple[str, int] | None = None
    client: tuple[str, int] | None = None

    # -- Computed properties --

    @property
    def content_type(self) -> str | None:
        """The Content-Type header value."""
        return self.headers.get("content-type")

    @property
    def content_length(self) -> int | None:
        """The Content-Length header as int, or None if absent or malformed."""
        value = self.headers.get("content-length")
        if value is None:
            return None
        try:
            return int(value)
        except ValueError:
            return None

    @property
    def url(self) -> str:
        """Request URI (path + query string)."""
        qs = self.query.raw
        if qs:
            return f"{self.path}?{qs.decode('latin-1')}"
        return self.path

    # -- Body access --

    def json(self) -> Any:
        """Parse the buffered body as JSON."""
        return json_module.loads(self.body)

    def text(self) -> str:
        """Decode the buffered body as UTF-8."""
        return self.body.decode("utf-8")

    # -- Derivation --

    def with_path_params(self, path_params: dict[str, str]) -> Request:
        """Return a copy carrying the router's captured path parameters.

        The body buffer is shared, not copied.
        """
        return replace(self, path_params=path_params)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, body: bytes = b"") -> Request:
        """Create a Request from an ASGI scope and an already-read body."""
        server = scope.get("server")
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query=QueryParams(scope.get("query_string", b"")),
            body=body,
            http_version=scope.get("http_version", "1.1"),
            server=tuple(server) if server else None,
            client=tuple(client) if client else None,
        )
