"""Single-pass request body reading.

The ASGI ``receive`` callable is a single-consumption stream: once the
final ``http.request`` message (``more_body=False``) has arrived, it
must not be called again for the body. ``read_body`` drains it exactly
once into one ``bytes`` buffer, enforcing the size limit as it goes so
an oversized body is rejected before it is fully buffered.
"""

from wren._internal.asgi import Receive
from wren.errors import PayloadTooLarge


class ClientDisconnect(Exception):  # noqa: N818
    """The client went away before the request body was complete."""


async def read_body(
    receive: Receive,
    *,
    limit: int,
    declared_length: int | None = None,
) -> bytes:
    """Drain *receive* once and return the complete body.

    Raises ``PayloadTooLarge`` without reading anything when
    *declared_length* (the ``Content-Length`` header) already exceeds
    *limit*, or as soon as the received chunks exceed it.
    Raises ``ClientDisconnect`` on ``http.disconnect``.
    """
    if declared_length is not None and declared_length > limit:
        raise PayloadTooLarge(f"Request body exceeds the {limit} byte limit")

    chunks: list[bytes] = []
    received = 0
    while True:
        message = await receive()
        if message["type"] == "http.disconnect":
            raise ClientDisconnect
        chunk = message.get("body", b"")
        if chunk:
            received += len(chunk)
            if received > limit:
                raise PayloadTooLarge(f"Request body exceeds the {limit} byte limit")
            chunks.append(chunk)
        if not message.get("more_body", False):
            break

    if len(chunks) == 1:
        return chunks[0]
    return b"".join(chunks)
