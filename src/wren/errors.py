"""Wren exception hierarchy.

Shared across Router, App, dispatcher, and middleware so every module
raises and catches the same types.

Request failures form a closed set of kinds. Each kind maps to exactly
one HTTP status code through ``STATUS_BY_KIND``.
"""

from dataclasses import dataclass
from enum import StrEnum


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when app configuration is invalid.

    Typically raised at registration time or during ``App._freeze()``.
    """


class DuplicateRoute(ConfigurationError):  # noqa: N818
    """Two routes claim the same method for an equivalent path pattern."""

    def __init__(self, method: str, path: str, existing: str) -> None:
        self.method = method
        self.path = path
        self.existing = existing
        super().__init__(
            f"Route {method} {path!r} conflicts with already registered {method} {existing!r}"
        )


class ErrorKind(StrEnum):
    """The closed set of request failure kinds."""

    BAD_REQUEST = "bad_request"
    NOT_FOUND = "not_found"
    PAYLOAD_TOO_LARGE = "payload_too_large"
    INTERNAL = "internal"


STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PAYLOAD_TOO_LARGE: 413,
    ErrorKind.INTERNAL: 500,
}

DEFAULT_MESSAGES: dict[ErrorKind, str] = {
    ErrorKind.BAD_REQUEST: "Bad Request",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.PAYLOAD_TOO_LARGE: "Payload Too Large",
    ErrorKind.INTERNAL: "Internal Server Error",
}


@dataclass(frozen=True, slots=True)
class HTTPError(WrenError):
    """A request failure of a known kind.

    Raised by the router, extraction, or handlers. The dispatcher catches
    these and hands them to the error mapper. ``message`` is sent to the
    client verbatim, so it must be safe for external disclosure.
    """

    kind: ErrorKind
    message: str = ""

    @property
    def status(self) -> int:
        return STATUS_BY_KIND[self.kind]

    @property
    def detail(self) -> str:
        """The client-facing message, falling back to the kind's default."""
        return self.message or DEFAULT_MESSAGES[self.kind]

    def __str__(self) -> str:
        return f"{self.status}: {self.detail}"


class BadRequest(HTTPError):  # noqa: N818
    """400 — malformed path parameter, query parameter, or body."""

    def __init__(self, message: str = "Bad Request") -> None:
        super().__init__(kind=ErrorKind.BAD_REQUEST, message=message)


class NotFound(HTTPError):  # noqa: N818
    """404 — no route matched the request method and path."""

    def __init__(self, message: str = "Not Found") -> None:
        super().__init__(kind=ErrorKind.NOT_FOUND, message=message)


class PayloadTooLarge(HTTPError):  # noqa: N818
    """413 — request body exceeds the configured maximum size."""

    def __init__(self, message: str = "Payload Too Large") -> None:
        super().__init__(kind=ErrorKind.PAYLOAD_TOO_LARGE, message=message)


class InternalError(HTTPError):
    """500 — a failure the handler chose to report explicitly."""

    def __init__(self, message: str = "Internal Server Error") -> None:
        super().__init__(kind=ErrorKind.INTERNAL, message=message)
