from __future__ import annotations

import argparse
import logging

from connkit.cli.common import open_store
from connkit.config.settings import ExecMode
from connkit.executor import execute
from connkit.models.connection import utc_now
from connkit.resolver import resolve_with_detection
from connkit.store import find_connection

logger = logging.getLogger(__name__)


def configure_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = subparsers.add_parser("connect", help="Launch the client for a connection")
    parser.set_defaults(func=run_connect)
    parser.add_argument("name", help="Connection name, id or unique name prefix")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the resolved command instead of running it",
    )
    parser.add_argument(
        "--exec-mode",
        choices=[m.value for m in ExecMode],
        help="replace this process (default) or spawn the client and wait",
    )


def run_connect(args: argparse.Namespace) -> int:
    from connkit.cli.ui import console

    store = open_store(args.settings)
    connection = find_connection(store.list_connections(), args.name)
    command, resolved = resolve_with_detection(connection)

    if args.dry_run:
        console.print(command.command_line(), markup=False)
        return 0

    console.print(
        f"Connecting to '{connection.name}' "
        f"({connection.protocol.value} {connection.host}:{connection.port})...",
        markup=False,
    )
    resolved.last_connected = utc_now()
    store.update_connection(resolved)
    return execute(command, args.settings.exec_mode)
