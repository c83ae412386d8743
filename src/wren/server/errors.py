"""Error mapping for wren requests.

Maps ``HTTPError`` exceptions and unexpected failures to ``Response``
objects with a ``{"message": ...}`` JSON body. The mapping is total:
every exception becomes a response. Messages for unexpected failures
are generic; diagnostics go to the ``wren.server`` logger only.
"""

import logging

from wren.errors import DEFAULT_MESSAGES, STATUS_BY_KIND, ErrorKind, HTTPError
from wren.http.response import Response

logger = logging.getLogger("wren.server")


def error_body(kind: ErrorKind, message: str) -> dict[str, str]:
    """The serialized error schema advertised in the API document."""
    return {"message": message or DEFAULT_MESSAGES[kind]}


def error_response(exc: BaseException) -> Response:
    """Map any exception to a well-formed error response.

    ``HTTPError`` keeps its kind and client-facing message. Anything else
    is an internal failure: 500 with a generic message.
    """
    if isinstance(exc, HTTPError):
        kind, message = exc.kind, exc.detail
    else:
        kind, message = ErrorKind.INTERNAL, DEFAULT_MESSAGES[ErrorKind.INTERNAL]
    return Response.json_body(error_body(kind, message), status=STATUS_BY_KIND[kind])


def handle_http_error(exc: HTTPError, method: str, path: str) -> Response:
    """Log an expected request failure and map it to a response."""
    logger.debug("%d %s %s: %s", exc.status, method, path, exc.detail)
    return error_response(exc)


def handle_internal_error(exc: Exception, method: str, path: str) -> Response:
    """Log an unexpected failure with its traceback and map it to a 500."""
    logger.exception("500 %s %s", method, path, exc_info=exc)
    return error_response(exc)
