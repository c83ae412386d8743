"""Built-in middleware: CORS.

Handles preflight requests and adds the appropriate headers to all
responses of cross-origin requests.
"""

from __future__ import annotations

from dataclasses import dataclass

from wren.http.request import Request
from wren.http.response import Response
from wren.middleware.protocol import Next


@dataclass(frozen=True, slots=True)
class CORSConfig:
    """CORS middleware configuration.

    All fields have secure defaults (nothing is allowed).
    Override what you need::

        CORSConfig(
            allow_origins=("https://example.com",),
            allow_methods=("GET", "POST"),
        )
    """

    allow_origins: tuple[str, ...] = ()
    allow_methods: tuple[str, ...] = ("GET", "HEAD", "OPTIONS")
    allow_headers: tuple[str, ...] = ()
    expose_headers: tuple[str, ...] = ()
    allow_credentials: bool = False
    max_age: int = 600  # 10 minutes

    @classmethod
    def permissive(cls) -> CORSConfig:
        """Any origin; the common write methods; bearer-token API headers."""
        return cls(
            allow_origins=("*",),
            allow_methods=("GET", "POST", "PUT", "PATCH", "DELETE"),
            allow_headers=("Authorization", "Content-Type"),
            expose_headers=("Content-Disposition",),
        )


class CORSMiddleware:
    """CORS middleware.

    - Preflight ``OPTIONS`` requests return 204 with CORS headers and never
      reach the route table.
    - Actual requests from an allowed origin get ``Access-Control-Allow-Origin``
      (and ``Access-Control-Expose-Headers`` when configured).
    - Requests without ``Origin`` or from other origins pass through untouched.

    Usage::

        app.add_middleware(CORSMiddleware(CORSConfig.permissive()))
    """

    __slots__ = ("config",)

    def __init__(self, config: CORSConfig | None = None) -> None:
        self.config = config or CORSConfig()

    def _is_allowed_origin(self, origin: str) -> bool:
        if "*" in self.config.allow_origins:
            return True
        return origin in self.config.allow_origins

    def _add_cors_headers(self, response: Response, origin: str) -> Response:
        cfg = self.config

        if "*" in cfg.allow_origins and not cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Origin", "*")
        else:
            response = response.with_header("Access-Control-Allow-Origin", origin)
            response = response.with_header("Vary", "Origin")

        if cfg.allow_credentials:
            response = response.with_header("Access-Control-Allow-Credentials", "true")

        if cfg.expose_headers:
            response = response.with_header(
                "Access-Control-Expose-Headers",
                ", ".join(cfg.expose_headers),
            )
        return response

    def _preflight_response(self, origin: str) -> Response:
        cfg = self.config
        response = self._add_cors_headers(Response(body=b"", status=204), origin)
        response = response.with_header("Access-Control-Allow-Methods", ", ".join(cfg.allow_methods))
        if cfg.allow_headers:
            response = response.with_header(
                "Access-Control-Allow-Headers",
                ", ".join(cfg.allow_headers),
            )
        return response.with_header("Access-Control-Max-Age", str(cfg.max_age))

    async def __call__(self, request: Request, next: Next) -> Response:
        origin = request.headers.get("origin")

        if origin is None or not self._is_allowed_origin(origin):
            return await next(request)

        if request.method == "OPTIONS" and "access-control-request-method" in request.headers:
            return self._preflight_response(origin)

        response = await next(request)
        return self._add_cors_headers(response, origin)
