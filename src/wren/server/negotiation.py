"""Content negotiation — maps handler return values to Response objects.

isinstance-based dispatch, no magic, fully predictable.
"""

import dataclasses
from typing import Any

from wren.errors import ConfigurationError
from wren.http.response import Response


def negotiate(value: Any) -> Response:
    """Convert a route handler's return value to a Response.

    Dispatch order:

    1. ``Response``            -> pass through
    2. ``None``                -> 200, empty body
    3. ``str``                 -> 200, text/plain
    4. ``bytes``               -> 200, application/octet-stream
    5. ``dict`` / ``list``     -> 200, application/json
    6. dataclass instance      -> 200, application/json of its fields
    7. ``(value, int)``        -> negotiate value, override status
    8. ``(value, int, dict)``  -> negotiate value, override status + headers
    """
    match value:
        case Response():
            return value
        case None:
            return Response(body=b"")
        case str():
            return Response(body=value)
        case bytes():
            return Response(body=value, content_type="application/octet-stream")
        case dict() | list():
            return Response.json_body(value)
        case (inner, int() as status):
            return negotiate(inner).with_status(status)
        case (inner, int() as status, dict() as headers):
            return negotiate(inner).with_status(status).with_headers(headers)
        case _ if dataclasses.is_dataclass(value) and not isinstance(value, type):
            return Response.json_body(dataclasses.asdict(value))

    msg = (
        f"Cannot convert {type(value).__name__} to a response. Return a Response, "
        "str, bytes, dict, list, dataclass instance, None, or a (value, status) tuple."
    )
    raise ConfigurationError(msg)
