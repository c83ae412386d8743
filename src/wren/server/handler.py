"""ASGI handler and dispatcher: the request pipeline.

``handle_request`` is the only component that touches raw ASGI. It reads
the request body exactly once, builds an immutable ``Request``, hands it
to the ``Dispatcher`` and sends the resulting ``Response``.

The ``Dispatcher`` composes the middleware chain around an endpoint
stage that resolves the route, decodes the handler's declared inputs,
calls the handler and maps failures through the error mapper. Because
failures become responses inside the endpoint stage, every middleware
post-phase sees the final response, error responses included.

Policy: middleware runs for every request, including requests that
match no route (404) and requests whose body is over the size limit
(413). Neither reaches a handler. A rejected body is never buffered;
the middleware sees the request with an empty body.
"""

import logging
from collections.abc import Sequence
from dataclasses import replace
from functools import cache

from wren._internal.asgi import Receive, Scope, Send
from wren._internal.invoke import invoke
from wren.errors import HTTPError, NotFound
from wren.extraction import HandlerSignature, analyze_handler, build_kwargs
from wren.http.body import ClientDisconnect, read_body
from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.chain import compose
from wren.middleware.protocol import Middleware, Next
from wren.routing.route import RouteMatch
from wren.routing.router import Router
from wren.server.errors import handle_http_error, handle_internal_error
from wren.server.negotiation import negotiate
from wren.server.sender import send_response

logger = logging.getLogger("wren.server")


class Dispatcher:
    """Turns a ``Request`` into a ``Response``. Never raises.

    Holds a compiled ``Router`` and the middleware tuple by reference;
    both are read-only once the dispatcher exists, so one dispatcher
    serves any number of concurrent requests.

    Usage::

        dispatcher = Dispatcher(router, middleware=(AccessLog(),))
        response = await dispatcher.dispatch(request)
    """

    __slots__ = ("_pipeline", "middleware", "router")

    def __init__(self, router: Router, middleware: Sequence[Middleware] = ()) -> None:
        self.router = router
        self.middleware = tuple(middleware)
        self._pipeline: Next = compose(self.middleware, self._endpoint)

    async def dispatch(self, request: Request) -> Response:
        """Run *request* through the middleware chain and the matched handler."""
        try:
            return await self._pipeline(request)
        except HTTPError as exc:
            # Raised by a middleware rather than the endpoint
            return handle_http_error(exc, request.method, request.path)
        except Exception as exc:
            return handle_internal_error(exc, request.method, request.path)

    async def reject(self, request: Request, error: HTTPError) -> Response:
        """Run *request* through the middleware chain, answering with *error*.

        Used for requests refused before routing (an oversized body). The
        middleware pre- and post-phases run as usual, so cross-origin and
        access-log headers still apply; no handler is called.
        """

        async def refuse(req: Request) -> Response:
            return handle_http_error(error, req.method, req.path)

        try:
            return await compose(self.middleware, refuse)(request)
        except HTTPError as exc:
            return handle_http_error(exc, request.method, request.path)
        except Exception as exc:
            return handle_internal_error(exc, request.method, request.path)

    async def _endpoint(self, request: Request) -> Response:
        """Innermost stage: resolve, decode, invoke, map errors."""
        try:
            match = self.router.resolve(request.method, request.path)
            if match is None:
                raise NotFound(f"No route matches {request.method} {request.path}")
            return await _invoke_handler(match, request)
        except HTTPError as exc:
            return handle_http_error(exc, request.method, request.path)
        except Exception as exc:
            return handle_internal_error(exc, request.method, request.path)


async def _invoke_handler(match: RouteMatch, request: Request) -> Response:
    """Call the matched route handler with its decoded inputs."""
    route = match.route
    signature = route.signature or _signature_of(route.handler, tuple(match.path_params))

    # Carry the captured path params; the body buffer is shared, not copied
    request = request.with_path_params(match.path_params)

    kwargs = build_kwargs(signature, request)
    result = await invoke(route.handler, **kwargs)
    return negotiate(result)


@cache
def _signature_of(handler: object, path_params: tuple[str, ...]) -> HandlerSignature:
    """Signature analysis for routes registered without one."""
    return analyze_handler(handler, path_params)  # type: ignore[arg-type]


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    max_body_size: int,
) -> None:
    """Process a single HTTP request through the full pipeline."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope)

    try:
        body = await read_body(
            receive,
            limit=max_body_size,
            declared_length=request.content_length,
        )
    except HTTPError as exc:
        await send_response(await dispatcher.reject(request, exc), send)
        return
    except ClientDisconnect:
        logger.debug("client disconnected during %s %s", request.method, request.path)
        return

    response = await dispatcher.dispatch(replace(request, body=body))
    await send_response(response, send)
