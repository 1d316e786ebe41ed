"""
Server CLI argument parser construction.

This module owns server-specific argument-parser definition so runtime code
remains focused on execution behavior rather than CLI schema setup.
"""

from __future__ import annotations

import argparse
from typing import Sequence

from airpad import __version__
from airpad.input.factory import SUPPORTED_BACKENDS

__all__ = [
    "arguments_parse",
    "parser_create",
]


def arguments_parse(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """
    Parse server command-line arguments.

    Args:
        argv: Argument list, None for sys.argv.

    Returns:
        Parsed argparse namespace for server startup.
    """
    parser: argparse.ArgumentParser = parser_create()
    return parser.parse_args(argv)


def parser_create() -> argparse.ArgumentParser:
    """
    Create fully populated server argument parser.

    Returns:
        Configured argument parser.
    """
    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="airpad server - replays handheld trackpad events as host pointer input"
    )
    parser.add_argument("--version", action="version", version=f"airpad {__version__}")
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to config file (default: search standard locations, else built-in defaults)",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Host address to bind to (overrides config)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to listen on, 0 for any free port (overrides config)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=list(SUPPORTED_BACKENDS),
        default=None,
        help="Host pointer backend (overrides config, default x11)",
    )
    parser.add_argument(
        "--display",
        type=str,
        default=None,
        help="X11 display name (overrides config)",
    )
    parser.add_argument(
        "--no-advertise",
        action="store_false",
        dest="advertise",
        default=None,
        help="Do not advertise the service over mDNS",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        dest="log_level",
        help="Logging level, e.g. DEBUG (overrides config)",
    )
    return parser
