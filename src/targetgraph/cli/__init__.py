"""
CLI for targetgraph.

Usage:
    targetgraph export <model> [options]
"""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from targetgraph import __version__
from targetgraph.cli.export import export_command, handle_export_command, register_export_parser
from targetgraph.cli.ux import error
from targetgraph.config import get_settings
from targetgraph.core.errors import ExitCode, main_with_error_handling
from targetgraph.logging import configure_logging

__all__ = [
    "build_parser",
    "export_command",
    "main",
    "run",
]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="targetgraph",
        description="Export build target dependency graphs",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        help="Log level (default: WARNING, or TARGETGRAPH_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    register_export_parser(subparsers)
    return parser


@main_with_error_handling()
def run(argv: Sequence[str] | None = None) -> int:
    """Parse arguments and dispatch, returning an exit code."""
    app_settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(
        level=(args.log_level or app_settings.log_level).upper(),
        json_output=app_settings.log_json,
    )

    if args.command == "export":
        return handle_export_command(args, app_settings)

    parser.print_help()
    error("A command is required")
    return ExitCode.CONFIG_ERROR


def main(argv: Sequence[str] | None = None) -> None:
    sys.exit(run(argv))
