"""Asbru-CM exporter: a single YAML file keyed by UUID."""

from __future__ import annotations

import shlex
from typing import Any, ClassVar, Final

import yaml

from connkit.exporters.base import (
    BaseExporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.models.connection import Connection
from connkit.models.protocol import RdpConfig, SshAuthMethod, SshConfig, VncConfig

_AUTH_TYPES: Final[dict[SshAuthMethod, str]] = {
    SshAuthMethod.password: "userpass",
    SshAuthMethod.public_key: "publickey",
    SshAuthMethod.keyboard_interactive: "keyboard-interactive",
    SshAuthMethod.agent: "agent",
}


def ssh_options(custom_options: dict[str, str]) -> str:
    return " ".join(f"-o {shlex.quote(f'{k}={v}')}" for k, v in custom_options.items())


def connection_entry(connection: Connection) -> dict[str, Any] | None:
    config = connection.protocol_config
    entry: dict[str, Any] = {
        "_is_group": 0,
        "name": connection.name,
        "ip": connection.host,
        "port": connection.port,
    }
    if connection.username:
        entry["user"] = connection.username
    if connection.description:
        entry["description"] = connection.description

    if isinstance(config, SshConfig):
        entry["method"] = "SSH"
        entry["auth_type"] = _AUTH_TYPES[config.auth_method]
        if config.key_path is not None:
            entry["public key"] = str(config.key_path)
        if config.custom_options:
            entry["options"] = ssh_options(config.custom_options)
    elif isinstance(config, RdpConfig):
        entry["method"] = "RDP (xfreerdp)"
    elif isinstance(config, VncConfig):
        entry["method"] = "VNC"
    else:
        return None
    return entry


class AsbruExporter(BaseExporter):
    format: ClassVar[ExportFormat] = ExportFormat.asbru

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        document: dict[str, Any] = {}
        group_ids: set[str] = set()

        if options.include_groups:
            for group in source.groups:
                key = str(group.id)
                group_ids.add(key)
                document[key] = {"_is_group": 1, "name": group.name}
            for group in source.groups:
                if group.parent_id is not None and str(group.parent_id) in group_ids:
                    document[str(group.id)]["parent"] = str(group.parent_id)

        for connection in source.connections:
            entry = connection_entry(connection)
            if entry is None:
                result.skip(
                    f"Skipped unsupported connection '{connection.name}' "
                    f"(protocol: {connection.protocol.value})"
                )
                continue
            if connection.group_id is not None and str(connection.group_id) in group_ids:
                entry["parent"] = str(connection.group_id)
            document[str(connection.id)] = entry
            result.exported_count += 1

        return yaml.safe_dump(
            document, sort_keys=False, default_flow_style=False, allow_unicode=True
        )
