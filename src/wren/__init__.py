"""Wren: a small ASGI request pipeline.

Typed route handlers, onion middleware, one error taxonomy, and an API
document generated from the same route declarations.

Basic usage::

    from wren import App

    app = App()

    @app.route("/")
    def ping() -> str:
        return "pong"

    app.run()
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "BadRequest",
    "ConfigurationError",
    "DuplicateRoute",
    "ErrorKind",
    "HTTPError",
    "InternalError",
    "Middleware",
    "Next",
    "NotFound",
    "PayloadTooLarge",
    "Request",
    "Response",
    "WrenError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name == "App":
        from wren.app import App

        return App

    if name == "AppConfig":
        from wren.config import AppConfig

        return AppConfig

    if name == "Request":
        from wren.http.request import Request

        return Request

    if name == "Response":
        from wren.http.response import Response

        return Response

    if name in ("Middleware", "Next"):
        from wren.middleware import protocol as _mw

        return getattr(_mw, name)

    if name in (
        "BadRequest",
        "ConfigurationError",
        "DuplicateRoute",
        "ErrorKind",
        "HTTPError",
        "InternalError",
        "NotFound",
        "PayloadTooLarge",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
