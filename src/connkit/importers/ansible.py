"""Ansible inventory importer (INI and YAML flavours)."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, ClassVar, Final
from uuid import UUID

import yaml

from connkit.errors import ImportFailedError
from connkit.importers.base import BaseImporter, ImportResult, expand_home
from connkit.models.connection import Connection
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import RdpConfig, SshConfig

logger = logging.getLogger(__name__)

_HOST_RANGE: Final[re.Pattern[str]] = re.compile(r"\[[^\]]*:[^\]]*\]")

# Connection plugins that indicate a Windows host reached over RDP instead of SSH.
_WINDOWS_CONNECTIONS: Final[frozenset[str]] = frozenset({"winrm", "psrp"})

# Sections that do not describe a real inventory group.
_IMPLICIT_GROUPS: Final[frozenset[str]] = frozenset({"all", "ungrouped"})


@dataclass
class _HostEntry:
    name: str
    variables: dict[str, str]
    group: str | None


def looks_like_yaml(content: str) -> bool:
    return content.lstrip().startswith("---") or "hosts:" in content


def _parse_assignment(token: str) -> tuple[str, str] | None:
    key, sep, value = token.partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip().strip("'\"")


def _split_host_line(line: str) -> list[str]:
    # Values may be quoted and contain spaces: web1 ansible_host="10.0.0.1"
    tokens: list[str] = []
    current: list[str] = []
    quote: str | None = None
    for char in line:
        if quote:
            current.append(char)
            if char == quote:
                quote = None
        elif char in "'\"":
            quote = char
            current.append(char)
        elif char.isspace():
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)
    if current:
        tokens.append("".join(current))
    return tokens


def _port(value: object, default: int) -> int:
    try:
        port = int(str(value))
    except (TypeError, ValueError):
        return default
    return port if 0 < port <= 65535 else default


def build_host_connection(
    name: str, variables: dict[str, str], group_id: UUID | None
) -> Connection:
    """Map Ansible host variables onto an SSH (or, for WinRM hosts, RDP) connection."""
    hostname = variables.get("ansible_host") or name
    username = variables.get("ansible_user") or variables.get("ansible_ssh_user")
    connection_type = variables.get("ansible_connection", "").lower()

    if connection_type in _WINDOWS_CONNECTIONS:
        # ansible_port is the WinRM port here, not a desktop port.
        connection = Connection.new_rdp(name, hostname)
    else:
        port = _port(variables.get("ansible_port") or variables.get("ansible_ssh_port"), 22)
        ssh = SshConfig()
        key_file = variables.get("ansible_ssh_private_key_file") or variables.get(
            "ansible_private_key_file"
        )
        if key_file:
            ssh.use_key_file(expand_home(key_file))
        connection = Connection(name=name, host=hostname, port=port, protocol_config=ssh)

    connection.username = username or None
    connection.group_id = group_id
    return connection


class AnsibleInventoryImporter(BaseImporter):
    format_id: ClassVar[str] = "ansible"
    display_name: ClassVar[str] = "Ansible Inventory"

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        if looks_like_yaml(text):
            return self.parse_yaml(text, source)
        return self.parse_ini(text, source)

    # --- INI ---------------------------------------------------------------

    def parse_ini(self, text: str, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        groups: dict[str, ConnectionGroup] = {}
        group_vars: dict[str, dict[str, str]] = {}
        hosts: list[_HostEntry] = []

        section: str | None = None
        mode = "hosts"

        for line_num, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith(("#", ";")):
                continue

            if line.startswith("[") and line.endswith("]"):
                name, _, suffix = line[1:-1].strip().partition(":")
                if suffix == "vars":
                    mode = "vars"
                    section = name
                elif suffix == "children":
                    # Child membership is not modelled; the children are their own sections.
                    mode = "children"
                    section = name
                elif suffix:
                    result.skip(line, f"Unknown section type ':{suffix}'", f"{source}:{line_num}")
                    mode = "ignore"
                else:
                    mode = "hosts"
                    section = None if name in _IMPLICIT_GROUPS else name
                    if section is not None and section not in groups:
                        groups[section] = ConnectionGroup(name=section)
                continue

            if mode == "vars":
                assignment = _parse_assignment(line)
                if assignment is None:
                    result.skip(line, "Invalid variable assignment", f"{source}:{line_num}")
                    continue
                group_vars.setdefault(section or "all", {})[assignment[0]] = assignment[1]
                continue
            if mode in ("children", "ignore"):
                continue

            tokens = _split_host_line(line)
            host_name = tokens[0]
            if _HOST_RANGE.search(host_name):
                result.skip(host_name, "Host ranges are not supported", f"{source}:{line_num}")
                continue
            if "*" in host_name or "?" in host_name:
                result.skip(
                    host_name, "Wildcard patterns are not supported", f"{source}:{line_num}"
                )
                continue

            variables: dict[str, str] = {}
            for token in tokens[1:]:
                assignment = _parse_assignment(token)
                if assignment is None:
                    result.add_error(
                        f"{source}:{line_num}: ignoring malformed variable '{token}' "
                        f"for host {host_name}"
                    )
                    continue
                variables[assignment[0]] = assignment[1]
            hosts.append(_HostEntry(host_name, variables, section))

        result.groups.extend(groups.values())
        for entry in hosts:
            merged = dict(group_vars.get("all", {}))
            if entry.group is not None:
                merged.update(group_vars.get(entry.group, {}))
            merged.update(entry.variables)
            group_id = groups[entry.group].id if entry.group is not None else None
            result.connections.append(build_host_connection(entry.name, merged, group_id))

        return result

    # --- YAML --------------------------------------------------------------

    def parse_yaml(self, text: str, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ImportFailedError(source, f"Failed to parse YAML: {e}") from e

        if data is None:
            return result
        if not isinstance(data, dict):
            raise ImportFailedError(source, "Inventory root must be a mapping")

        for name, value in data.items():
            if str(name) == "all":
                if not isinstance(value, dict):
                    continue
                inherited = _string_vars(value.get("vars"))
                self._yaml_hosts(value.get("hosts"), None, inherited, source, result)
                children = value.get("children")
                if isinstance(children, dict):
                    for child_name, child_value in children.items():
                        self._yaml_group(
                            str(child_name), child_value, None, inherited, source, result
                        )
            else:
                self._yaml_group(str(name), value, None, {}, source, result)

        return result

    def _yaml_group(
        self,
        name: str,
        value: Any,
        parent_id: UUID | None,
        inherited: dict[str, str],
        source: str,
        result: ImportResult,
    ) -> None:
        group = ConnectionGroup(name=name, parent_id=parent_id)
        result.groups.append(group)
        if not isinstance(value, dict):
            return

        variables = {**inherited, **_string_vars(value.get("vars"))}
        self._yaml_hosts(value.get("hosts"), group.id, variables, source, result)

        children = value.get("children")
        if isinstance(children, dict):
            for child_name, child_value in children.items():
                self._yaml_group(str(child_name), child_value, group.id, variables, source, result)

    def _yaml_hosts(
        self,
        hosts: Any,
        group_id: UUID | None,
        inherited: dict[str, str],
        source: str,
        result: ImportResult,
    ) -> None:
        if hosts is None:
            return
        if not isinstance(hosts, dict):
            result.add_error(f"{source}: 'hosts' must be a mapping")
            return

        for raw_name, host_vars in hosts.items():
            name = str(raw_name)
            if any(ch in name for ch in "*?["):
                result.skip(name, "Patterns are not supported", source)
                continue
            if host_vars is not None and not isinstance(host_vars, dict):
                result.skip(name, "Host variables must be a mapping", source)
                continue
            variables = {**inherited, **_string_vars(host_vars)}
            result.connections.append(build_host_connection(name, variables, group_id))


def _string_vars(value: Any) -> dict[str, str]:
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items() if v is not None}
