"""Middleware protocol and Next type alias.

A middleware is any callable matching::

    async def my_mw(request: Request, next: Next) -> Response: ...

No base class required. The framework checks the shape, not the lineage.
Code before ``await next(request)`` is the pre-phase, code after it is
the post-phase. Returning without calling ``next`` short-circuits the
rest of the chain, handler included.
"""

from collections.abc import Awaitable, Callable
from typing import Protocol

from wren.http.request import Request
from wren.http.response import Response

# The next stage in the middleware chain
type Next = Callable[[Request], Awaitable[Response]]


class Middleware(Protocol):
    """Protocol for wren middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(request: Request, next: Next) -> Response:
            start = time.monotonic()
            response = await next(request)
            elapsed = time.monotonic() - start
            return response.with_header("X-Time", f"{elapsed:.3f}")

        # Class middleware
        class RequireToken:
            async def __call__(self, request: Request, next: Next) -> Response:
                if "authorization" not in request.headers:
                    return Response("Unauthorized", status=401)
                return await next(request)
    """

    async def __call__(self, request: Request, next: Next) -> Response: ...
