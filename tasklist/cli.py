"""
Task List CLI — Command-Line Interface
=======================================
Entry point for running the Task List API.

Usage:
    # Start the server (PORT / HOST from the environment, default 0.0.0.0:3000)
    python -m tasklist.cli start
    python -m tasklist.cli start --port 8080 --log-level debug

    # Show the route table
    python -m tasklist.cli routes
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from tasklist.config import load_settings
from tasklist.logging_setup import setup_logging

logger = logging.getLogger(__name__)


# ─────────────────────────────────────────────────────────────
#  Commands
# ─────────────────────────────────────────────────────────────

def cmd_start(args):
    """Launch the HTTP server."""
    settings = load_settings()
    overrides = {}
    if args.host:
        overrides["host"] = args.host
    if args.port is not None:
        overrides["port"] = args.port
    if args.log_level:
        overrides["log_level"] = args.log_level.upper()
    settings = replace(settings, **overrides)

    setup_logging(settings.log_level, settings.log_file)

    from tasklist.server import run_server
    run_server(settings)
    return 0


def cmd_routes(args):
    """Print the route table."""
    from tasklist.server import ROUTES

    print("\n─── Task List API Routes ───")
    for method, path, description in ROUTES:
        print(f"  {method:7s}{path:14s}{description}")
    return 0


# ─────────────────────────────────────────────────────────────
#  Main
# ─────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasklist",
        description="Task List — in-memory task REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  tasklist start\n"
            "  tasklist start --port 8080\n"
            "  tasklist routes\n"
        ),
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # start
    p_start = subparsers.add_parser("start", help="Run the API server")
    p_start.add_argument("--host", default=None, help="Bind address (default: $HOST or 0.0.0.0)")
    p_start.add_argument("--port", default=None, type=int, help="Port number (default: $PORT or 3000)")
    p_start.add_argument("--log-level", default=None,
                         help="Logging level (default: $TASKLIST_LOG_LEVEL or INFO)")

    # routes
    subparsers.add_parser("routes", help="Show the route table")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    commands = {
        "start": cmd_start,
        "routes": cmd_routes,
    }

    if args.command in commands:
        return commands[args.command](args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
