from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path

from connkit.cli.connect import configure_parser as configure_connect
from connkit.cli.connections import configure_parser as configure_connections
from connkit.cli.transfer import configure_parser as configure_transfer
from connkit.errors import (
    AmbiguousConnectionError,
    ConnectionNotFoundError,
    ExportFailedError,
    ImportFailedError,
    LaunchError,
)

EXIT_ERROR = 1
EXIT_NOT_FOUND = 2
EXIT_INTERRUPTED = 130


def build_parser() -> argparse.ArgumentParser:
    from connkit import __version__

    parser = argparse.ArgumentParser(
        prog="connkit",
        description="connkit CLI (connection profiles, import/export, launch)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Print version and exit",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print full traceback on errors (or set CONNKIT_TRACE=1)",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", type=Path, help="Path to connkit.toml")
    parser.add_argument("--store", type=Path, help="Path to the connection store (JSON)")
    subparsers = parser.add_subparsers(dest="command")

    configure_connections(subparsers)
    configure_connect(subparsers)
    configure_transfer(subparsers)

    return parser


def _configure_logging(level: str) -> None:
    from rich.logging import RichHandler

    from connkit.cli.ui import error_console

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=error_console, rich_tracebacks=False, markup=False)],
        force=True,
    )


def _tip_for(exc: Exception) -> str:
    if isinstance(exc, ConnectionNotFoundError):
        return "run `connkit list` to see stored connections."
    if isinstance(exc, AmbiguousConnectionError):
        return "use the full connection name or its id."
    if isinstance(exc, ImportFailedError):
        return "check the file path and that --format matches the file."
    if isinstance(exc, ExportFailedError):
        return "check that the output location is writable."
    if isinstance(exc, LaunchError):
        return f"install '{exc.program}' or add it to PATH."
    return "re-run with --trace to see the full traceback."


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 2

    want_trace = bool(getattr(args, "trace", False)) or os.environ.get("CONNKIT_TRACE") in {
        "1",
        "true",
        "TRUE",
        "yes",
        "YES",
    }
    try:
        from connkit.cli.common import load_cli_settings

        args.settings = load_cli_settings(args)
        _configure_logging(args.settings.log_level.value)
        return int(args.func(args))
    except KeyboardInterrupt:
        # Keep Ctrl-C quiet by default.
        return EXIT_INTERRUPTED
    except Exception as exc:
        if want_trace:
            from connkit.cli.ui import error_console

            error_console.print_exception()
        else:
            from connkit.cli.ui import print_error

            print_error(type(exc).__name__, str(exc), tip=_tip_for(exc))
        if isinstance(exc, ConnectionNotFoundError | AmbiguousConnectionError):
            return EXIT_NOT_FOUND
        return EXIT_ERROR

