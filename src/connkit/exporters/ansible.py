"""Ansible inventory exporter (INI by default, YAML for ``.yml``/``.yaml`` targets)."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any, ClassVar, Final
from uuid import UUID

import yaml

from connkit.exporters.base import (
    BaseExporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.models.connection import Connection
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import ProtocolType, SshConfig

_INVALID_GROUP_CHARS: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9_]")
_YAML_SUFFIXES: Final[frozenset[str]] = frozenset({".yml", ".yaml"})


def group_name(name: str) -> str:
    """Ansible group names may only contain letters, digits and underscores."""
    cleaned = _INVALID_GROUP_CHARS.sub("_", name.strip())
    if not cleaned:
        return "ungrouped"
    return f"_{cleaned}" if cleaned[0].isdigit() else cleaned


def inventory_name(name: str) -> str:
    return "_".join(name.split())


def host_vars(connection: Connection) -> dict[str, str]:
    variables = {"ansible_host": connection.host}
    if connection.port != 22:
        variables["ansible_port"] = str(connection.port)
    if connection.username:
        variables["ansible_user"] = connection.username
    config = connection.protocol_config
    if isinstance(config, SshConfig) and config.key_path is not None:
        variables["ansible_ssh_private_key_file"] = str(config.key_path)
    return variables


def _ini_value(value: str) -> str:
    if any(ch.isspace() for ch in value) or '"' in value:
        return '"' + value.replace('"', '\\"') + '"'
    return value


class AnsibleInventoryExporter(BaseExporter):
    format: ClassVar[ExportFormat] = ExportFormat.ansible

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        hosts: list[Connection] = []
        for connection in source.connections:
            if connection.protocol is not ProtocolType.ssh:
                result.skip(
                    f"Skipped non-SSH connection '{connection.name}' "
                    f"(protocol: {connection.protocol.value})"
                )
                continue
            hosts.append(connection)
        result.exported_count = len(hosts)

        groups = list(source.groups) if options.include_groups else []
        if options.output_path.suffix.lower() in _YAML_SUFFIXES:
            return self.render_yaml(hosts, groups)
        return self.render_ini(hosts, groups)

    def render_ini(self, hosts: Sequence[Connection], groups: Sequence[ConnectionGroup]) -> str:
        known = {g.id: g for g in groups}
        members: dict[UUID | None, list[Connection]] = {}
        for connection in hosts:
            key = connection.group_id if connection.group_id in known else None
            members.setdefault(key, []).append(connection)

        lines = ["# Ansible inventory generated by connkit", ""]

        def host_line(connection: Connection) -> str:
            pairs = " ".join(f"{k}={_ini_value(v)}" for k, v in host_vars(connection).items())
            return f"{inventory_name(connection.name)} {pairs}"

        for connection in members.get(None, []):
            lines.append(host_line(connection))
        if members.get(None):
            lines.append("")

        for group in groups:
            lines.append(f"[{group_name(group.name)}]")
            lines.extend(host_line(c) for c in members.get(group.id, []))
            lines.append("")

        for group in groups:
            children = [g for g in groups if g.parent_id == group.id]
            if children:
                lines.append(f"[{group_name(group.name)}:children]")
                lines.extend(group_name(child.name) for child in children)
                lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def render_yaml(self, hosts: Sequence[Connection], groups: Sequence[ConnectionGroup]) -> str:
        known = {g.id for g in groups}

        def hosts_of(group_id: UUID | None) -> dict[str, Any]:
            return {
                inventory_name(c.name): host_vars(c)
                for c in hosts
                if (c.group_id if c.group_id in known else None) == group_id
            }

        def subtree(group: ConnectionGroup) -> dict[str, Any]:
            node: dict[str, Any] = {}
            group_hosts = hosts_of(group.id)
            if group_hosts:
                node["hosts"] = group_hosts
            children = {
                group_name(child.name): subtree(child)
                for child in groups
                if child.parent_id == group.id
            }
            if children:
                node["children"] = children
            return node

        root: dict[str, Any] = {}
        top_hosts = hosts_of(None)
        if top_hosts:
            root["hosts"] = top_hosts
        top_groups = {
            group_name(g.name): subtree(g)
            for g in groups
            if g.parent_id is None or g.parent_id not in known
        }
        if top_groups:
            root["children"] = top_groups

        return "---\n" + yaml.safe_dump({"all": root}, sort_keys=False, default_flow_style=False)
