"""Command line interface.

Copyright (c) 2024-2026 BlackRoad OS, Inc. All rights reserved.

Usage:
    python -m fotoroute_core serve --config config.json --port 8000
    python -m fotoroute_core routes
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional, TextIO

from fotoroute_core.app.bootstrap import create_app
from fotoroute_core.app.server import Application
from fotoroute_core.routing.matcher import HandlerResolutionError
from fotoroute_core.utils.config import load_config
from fotoroute_core.utils.logging import configure_logging

logger = logging.getLogger(__name__)


def format_routes(app: Application) -> List[str]:
    """Table of METHOD, PATH, HANDLER and whether the handler resolves."""
    rows = []
    for route in app.routes.all_routes():
        found = app.registry.lookup(route.handler)
        status = found.reason if isinstance(found, HandlerResolutionError) else "ok"
        rows.append((route.method, route.pattern, route.handler, status))

    if not rows:
        return []

    headers = ("METHOD", "PATH", "HANDLER", "STATUS")
    widths = [max(len(r[i]) for r in rows + [headers]) for i in range(3)]
    fmt = f"{{:<{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
    return [fmt.format(*headers)] + [fmt.format(*row) for row in rows]


def run_routes(app: Application, out: Optional[TextIO] = None) -> int:
    """Print the route table. Returns 1 if any handler does not resolve."""
    if out is None:
        out = sys.stdout
    lines = format_routes(app)
    if not lines:
        print("No routes registered.", file=out)
        return 0
    for line in lines:
        print(line, file=out)
    unresolved = [
        route for route in app.routes.all_routes()
        if isinstance(app.registry.lookup(route.handler), HandlerResolutionError)
    ]
    return 1 if unresolved else 0


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="fotoroute",
        description="Photo service router.",
    )
    parser.add_argument("--config", default=None, help="JSON or YAML config file")

    # Also accepted after the command; SUPPRESS keeps a top-level value
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=argparse.SUPPRESS, help="JSON or YAML config file")

    subparsers = parser.add_subparsers(dest="command")

    serve_parser = subparsers.add_parser("serve", parents=[common], help="Start the HTTP server")
    serve_parser.add_argument("--host", default=None, help="Bind host address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    subparsers.add_parser("routes", parents=[common], help="List registered routes")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 2

    config = load_config(args.config)
    configure_logging(config.log_level, config.log_format)

    app = create_app(config)
    if args.command == "routes":
        try:
            return run_routes(app)
        finally:
            app.close()

    app.run(host=args.host, port=args.port)
    return 0


__all__ = [
    "format_routes",
    "main",
    "run_routes",
]
