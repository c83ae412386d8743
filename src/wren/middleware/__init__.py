"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(request: Request, next: Next) -> Response

Built-in middleware:
    AccessLog -- Log requests and responses, bodies included
    CORSMiddleware -- Cross-Origin Resource Sharing
"""

from wren.middleware.access_log import AccessLog
from wren.middleware.builtin import CORSConfig, CORSMiddleware
from wren.middleware.chain import compose
from wren.middleware.protocol import Middleware, Next

__all__ = [
    "AccessLog",
    "CORSConfig",
    "CORSMiddleware",
    "Middleware",
    "Next",
    "compose",
]
