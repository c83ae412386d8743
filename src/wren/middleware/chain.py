"""Middleware composition.

``compose`` nests middleware around an endpoint so that, for
``[A, B]``, execution is ``A.pre, B.pre, endpoint, B.post, A.post``:
the first-registered middleware is the outermost scope.
"""

from collections.abc import Sequence

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Middleware, Next


def compose(middleware: Sequence[Middleware], endpoint: Next) -> Next:
    """Wrap *endpoint* in *middleware*, first element outermost."""
    handler = endpoint
    for mw in reversed(middleware):
        handler = _bind(mw, handler)
    return handler


def _bind(mw: Middleware, next_stage: Next) -> Next:
    async def stage(request: Request) -> Response:
        return await mw(request, next_stage)

    return stage
