"""OpenSSH client config exporter: one ``Host`` block per SSH connection."""

from __future__ import annotations

from typing import ClassVar, Final

from connkit.exporters.base import (
    BaseExporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.models.connection import Connection
from connkit.models.protocol import SshConfig

_NEEDS_QUOTING: Final[frozenset[str]] = frozenset('"#=\\')


def escape_value(value: str) -> str:
    """Quote a directive value when ssh(1) would otherwise split or misread it."""
    if value and not any(ch.isspace() or ch in _NEEDS_QUOTING for ch in value):
        return value
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def host_block(connection: Connection, config: SshConfig) -> list[str]:
    lines = [f"Host {connection.name}", f"    HostName {escape_value(connection.host)}"]
    if connection.port != 22:
        lines.append(f"    Port {connection.port}")
    if connection.username:
        lines.append(f"    User {escape_value(connection.username)}")
    if config.key_path is not None:
        lines.append(f"    IdentityFile {escape_value(str(config.key_path))}")
    if config.identities_only:
        lines.append("    IdentitiesOnly yes")
    if config.proxy_jump:
        lines.append(f"    ProxyJump {escape_value(config.proxy_jump)}")
    if config.use_control_master:
        lines.append("    ControlMaster auto")
        lines.append("    ControlPersist 10m")
    if config.agent_forwarding:
        lines.append("    ForwardAgent yes")
    for key, value in config.custom_options.items():
        lines.append(f"    {key} {escape_value(value)}")
    return lines


class SshConfigExporter(BaseExporter):
    format: ClassVar[ExportFormat] = ExportFormat.ssh_config

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        lines = ["# SSH config generated by connkit", ""]
        for connection in sorted(source.connections, key=lambda c: c.name):
            config = connection.protocol_config
            if not isinstance(config, SshConfig):
                result.skip(
                    f"Skipped non-SSH connection '{connection.name}' "
                    f"(protocol: {connection.protocol.value})"
                )
                continue
            if any(ch.isspace() for ch in connection.name) or " " in connection.host:
                result.skip(
                    f"Skipped connection '{connection.name}': "
                    "host alias cannot contain whitespace"
                )
                continue
            lines.extend(host_block(connection, config))
            lines.append("")
            result.exported_count += 1
        return "\n".join(lines).rstrip("\n") + "\n"
