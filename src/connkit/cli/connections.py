"""``list``, ``show``, ``add`` and ``delete`` subcommands."""

from __future__ import annotations

import argparse
import csv
import json
import sys
from pathlib import Path

from rich.table import Table

from connkit.cli.common import open_store
from connkit.models.connection import Connection
from connkit.models.protocol import (
    ProtocolType,
    RdpConfig,
    SshConfig,
    ZeroTrustConfig,
    default_config_for,
)
from connkit.resolver import resolve
from connkit.store import find_connection

OUTPUT_FORMATS = ("table", "json", "csv")


def configure_parser(subparsers: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    list_parser = subparsers.add_parser("list", help="List stored connections")
    list_parser.set_defaults(func=run_list)
    list_parser.add_argument(
        "--format", dest="output_format", choices=OUTPUT_FORMATS, default="table"
    )
    list_parser.add_argument("--protocol", help="Only show connections of this protocol")

    show_parser = subparsers.add_parser("show", help="Show a connection's details")
    show_parser.set_defaults(func=run_show)
    show_parser.add_argument("name", help="Connection name, id or unique name prefix")

    add_parser = subparsers.add_parser("add", help="Add a connection")
    add_parser.set_defaults(func=run_add)
    add_parser.add_argument("name", help="Connection name")
    add_parser.add_argument("host", help="Hostname or address")
    add_parser.add_argument("--port", type=int, help="Port (defaults to the protocol's port)")
    add_parser.add_argument("--protocol", default="ssh", help="ssh, rdp, vnc or spice")
    add_parser.add_argument("--user", help="Username")
    add_parser.add_argument("--domain", help="Domain (RDP)")
    add_parser.add_argument("--key", type=Path, help="SSH private key file")

    delete_parser = subparsers.add_parser("delete", help="Delete a connection")
    delete_parser.set_defaults(func=run_delete)
    delete_parser.add_argument("name", help="Connection name, id or unique name prefix")


def _row(connection: Connection) -> dict[str, str | int]:
    return {
        "id": str(connection.id),
        "name": connection.name,
        "host": connection.host,
        "port": connection.port,
        "protocol": connection.protocol.value,
        "username": connection.username or "",
    }


def run_list(args: argparse.Namespace) -> int:
    from connkit.cli.ui import console

    connections = list(open_store(args.settings).list_connections())
    if args.protocol:
        wanted = ProtocolType.parse(args.protocol)
        connections = [c for c in connections if c.protocol is wanted]

    if args.output_format == "json":
        sys.stdout.write(json.dumps([_row(c) for c in connections], indent=2) + "\n")
        return 0

    if args.output_format == "csv":
        writer = csv.writer(sys.stdout, lineterminator="\n")
        writer.writerow(["name", "host", "port", "protocol"])
        for connection in connections:
            writer.writerow(
                [connection.name, connection.host, connection.port, connection.protocol.value]
            )
        return 0

    if not connections:
        console.print("No connections found.")
        return 0

    table = Table(box=None, padding=(0, 2), header_style="heading")
    for column in ("NAME", "HOST", "PORT", "PROTOCOL"):
        table.add_column(column, no_wrap=True)
    for connection in connections:
        table.add_row(
            connection.name, connection.host, str(connection.port), connection.protocol.value
        )
    console.print(table)
    return 0


def run_show(args: argparse.Namespace) -> int:
    from connkit.cli.ui import console, details_table

    connection = find_connection(open_store(args.settings).list_connections(), args.name)
    config = connection.protocol_config

    table = details_table()
    table.add_row("ID", str(connection.id))
    table.add_row("Name", connection.name)
    table.add_row("Host", connection.host or "-")
    table.add_row("Port", str(connection.port))
    table.add_row("Protocol", connection.protocol.value)
    if connection.username:
        table.add_row("Username", connection.username)
    if connection.description:
        table.add_row("Description", connection.description)
    if connection.tags:
        table.add_row("Tags", ", ".join(connection.tags))

    if isinstance(config, SshConfig):
        if config.key_path is not None:
            table.add_row("Key Path", str(config.key_path))
        if config.proxy_jump:
            table.add_row("Proxy Jump", config.proxy_jump)
    elif isinstance(config, RdpConfig):
        if connection.domain:
            table.add_row("Domain", connection.domain)
        if config.resolution is not None:
            table.add_row("Resolution", str(config.resolution))
    elif isinstance(config, ZeroTrustConfig):
        table.add_row("Provider", config.provider.display_name)

    table.add_row("Command", resolve(connection).command_line())

    console.print("[heading]Connection Details:[/heading]")
    console.print(table)
    return 0


def run_add(args: argparse.Namespace) -> int:
    from connkit.cli.ui import print_success

    protocol = ProtocolType.parse(args.protocol)
    config = default_config_for(protocol)
    if args.key is not None:
        if not isinstance(config, SshConfig):
            raise ValueError("--key only applies to SSH connections")
        config.use_key_file(args.key.expanduser())

    connection = Connection(
        name=args.name,
        host=args.host,
        port=args.port if args.port is not None else protocol.default_port,
        protocol_config=config,
        username=args.user,
        domain=args.domain,
    )
    open_store(args.settings).add_connection(connection)
    print_success(f"Added connection '{connection.name}' (ID: {connection.id})")
    return 0


def run_delete(args: argparse.Namespace) -> int:
    from connkit.cli.ui import print_success

    store = open_store(args.settings)
    connection = find_connection(store.list_connections(), args.name)
    store.delete_connection(connection.id)
    print_success(f"Deleted connection '{connection.name}' (ID: {connection.id})")
    return 0
