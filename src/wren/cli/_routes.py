"""``wren routes``: list registered routes."""

import argparse
import sys

from wren.cli._resolve import resolve_app
from wren.errors import ConfigurationError


def run_routes(args: argparse.Namespace) -> None:
    """List registered routes for a wren app.

    Resolves ``args.app`` to an App instance, freezes it, and prints
    a table of METHOD, PATH, and handler name.
    """
    try:
        app = resolve_app(args.app)
        routes = app.routes
    except (ModuleNotFoundError, AttributeError, TypeError, ConfigurationError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    if not routes:
        print("No routes registered.")
        return

    # Build rows: (methods_str, path, handler_name)
    rows: list[tuple[str, str, str]] = []
    for route in routes:
        methods_str = ", ".join(sorted(route.methods))
        handler_name = getattr(route.handler, "__name__", str(route.handler))
        if route.name:
            handler_name = f"{handler_name} ({route.name})"
        rows.append((methods_str, route.path, handler_name))

    max_methods = max(max(len(r[0]) for r in rows), 6)  # "METHOD" header
    max_path = max(max(len(r[1]) for r in rows), 4)  # "PATH" header

    fmt = f"{{:<{max_methods}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLER"))
    sep_len = max_methods + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for methods_str, path, handler_name in rows:
        print(fmt.format(methods_str, path, handler_name))
