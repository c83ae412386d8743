"""Request/response access logging middleware.

Logs the inbound request (method, URI, headers, body) before the wrapped
stages run and the outbound response (status, headers, body) after they
return. Observes only: the request and response pass through unchanged.

Bodies are logged from the buffers the pipeline already holds. Nothing
re-reads the transport; the ``Exchange`` record keeps references to the
request and response, never copies of their bodies.
"""

import logging
import time
from dataclasses import dataclass, field

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next

logger = logging.getLogger("wren.access")


@dataclass(slots=True)
class Exchange:
    """Per-request record spanning the pre- and post-phase."""

    request: Request
    started: float = field(default_factory=time.monotonic)
    response: Response | None = None

    @property
    def elapsed_ms(self) -> float:
        return (time.monotonic() - self.started) * 1000


def render_body(body: bytes, limit: int) -> str:
    """A printable view of *body*, truncated to *limit* bytes."""
    if not body:
        return "<empty>"
    view = memoryview(body)[:limit].tobytes().decode("utf-8", errors="replace")
    if len(body) > limit:
        return f"{view}… ({len(body)} bytes)"
    return view


class AccessLog:
    """Log every request and response passing through the chain.

    Usage::

        app.add_middleware(AccessLog())
        app.add_middleware(AccessLog(level=logging.INFO, body_limit=256))
    """

    __slots__ = ("body_limit", "level")

    def __init__(self, *, level: int = logging.DEBUG, body_limit: int = 1024) -> None:
        self.level = level
        self.body_limit = body_limit

    async def __call__(self, request: Request, next: Next) -> Response:
        exchange = Exchange(request)
        if logger.isEnabledFor(self.level):
            logger.log(
                self.level,
                "--> %s %s headers=%s body=%s",
                request.method,
                request.url,
                request.headers.multi_items(),
                render_body(request.body, self.body_limit),
            )

        exchange.response = await next(request)

        if logger.isEnabledFor(self.level):
            response = exchange.response
            logger.log(
                self.level,
                "<-- %d %s %s (%.1fms) headers=%s body=%s",
                response.status,
                request.method,
                request.url,
                exchange.elapsed_ms,
                [("content-type", response.content_type), *response.headers],
                render_body(response.body_bytes, self.body_limit),
            )
        return exchange.response
