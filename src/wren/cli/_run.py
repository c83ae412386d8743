"""``wren run``: development or production server command."""

import argparse
import sys

from wren.cli._resolve import resolve_app
from wren.errors import ConfigurationError


def run_server(args: argparse.Namespace) -> None:
    """Start the wren server (dev or production mode).

    Resolves ``args.app`` to a wren App and compiles it before binding,
    so an unusable app exits with status 1 before any request is
    accepted. The app runs in development mode when its config has
    ``debug`` set, unless ``--production`` is given.

    ``--host``, ``--port`` and ``--workers`` override the app config.
    """
    try:
        app = resolve_app(args.app)
        app._ensure_frozen()
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    from wren.server.runner import serve

    serve(
        app,
        args.host,
        args.port,
        production=args.production,
        workers=args.workers,
        app_path=args.app,
    )
