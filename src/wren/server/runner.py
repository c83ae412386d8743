"""Server bootstrap.

Hands a compiled wren ``App`` to pounce. Pounce owns the listening
socket, worker processes, keep-alive and per-request timeouts; wren
supplies the ASGI callable and a ``ServerConfig`` derived from its own
``AppConfig``.

Two modes:

- development (``debug=True``): a single worker that reloads on file
  changes, re-importing the app from ``app_path`` when one is known
- production: ``workers`` processes (0 = one per CPU)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pounce.config import ServerConfig

    from wren.app import App
    from wren.config import AppConfig

logger = logging.getLogger("wren.server")

# Production connection limits
MAX_CONNECTIONS = 1000
BACKLOG = 2048
KEEP_ALIVE_TIMEOUT = 5.0
REQUEST_TIMEOUT = 30.0


def server_config(
    config: AppConfig,
    host: str | None = None,
    port: int | None = None,
    *,
    production: bool = False,
    workers: int | None = None,
) -> ServerConfig:
    """Build the pounce ``ServerConfig`` for *config*.

    *host*, *port* and *workers* override the app config when given.
    Development mode applies when ``config.debug`` is set and
    *production* is not.
    """
    from pounce.config import ServerConfig

    bind_host = host or config.host
    bind_port = port or config.port

    if config.debug and not production:
        return ServerConfig(
            host=bind_host,
            port=bind_port,
            workers=1,
            reload=True,
            reload_include=config.reload_include,
            reload_dirs=config.reload_dirs,
        )

    return ServerConfig(
        host=bind_host,
        port=bind_port,
        workers=workers if workers is not None else config.workers,
        log_format=config.log_format,
        log_level=config.log_level,
        max_connections=MAX_CONNECTIONS,
        backlog=BACKLOG,
        keep_alive_timeout=KEEP_ALIVE_TIMEOUT,
        request_timeout=REQUEST_TIMEOUT,
    )


def serve(
    app: App,
    host: str | None = None,
    port: int | None = None,
    *,
    production: bool = False,
    workers: int | None = None,
    app_path: str | None = None,
) -> None:
    """Serve *app* until interrupted.

    The app is compiled before the listener binds, so a handler whose
    signature cannot be served stops startup here.

    Args:
        app: Wren App instance.
        host: Bind address override (default: ``app.config.host``).
        port: Bind port override (default: ``app.config.port``).
        production: Force production mode even when ``debug`` is set.
        workers: Worker count override for production mode.
        app_path: ``"module:attribute"`` import string. In development
            mode pounce re-imports the app from it on each reload.

    Example:
        >>> from wren.service import app
        >>> from wren.server.runner import serve
        >>> serve(app, workers=4)
    """
    from pounce.server import Server

    app._ensure_frozen()
    config = server_config(app.config, host, port, production=production, workers=workers)

    mode = "development" if config.reload else "production"
    logger.info("wren %s server listening on http://%s:%d", mode, config.host, config.port)
    if app.config.docs_enabled:
        logger.info("API docs at http://%s:%d%s", config.host, config.port, app.config.docs_path)

    server = Server(config, app, app_path=app_path if config.reload else None)
    server.run()
