"""Wren CLI: serve an app or list its routes.

Entry point registered as ``wren`` in ``pyproject.toml``::

    [project.scripts]
    wren = "wren.cli:main"
"""

import argparse
import sys

DEFAULT_APP = "wren.service:app"


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``wren`` command."""
    parser = argparse.ArgumentParser(
        prog="wren",
        description="Wren: a small ASGI request pipeline with typed routes.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- wren run ---------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start dev or production server")
    run_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode (multi-worker) even when the app is in debug",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )

    # -- wren routes ------------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List registered routes")
    routes_parser.add_argument(
        "app",
        nargs="?",
        default=DEFAULT_APP,
        help=f"Import string (default: {DEFAULT_APP})",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from wren.cli._run import run_server

        run_server(args)
    elif args.command == "routes":
        from wren.cli._routes import run_routes

        run_routes(args)
