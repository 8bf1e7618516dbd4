"""Asbru-CM (and PAC Manager) YAML importer.

Entries are keyed by UUID. Groups carry ``_is_group: 1``; membership comes from the
``parent`` key or from nesting under a group's ``children`` mapping.
"""

from __future__ import annotations

import shlex
from typing import Any, ClassVar, Final
from uuid import UUID

import yaml

from connkit.errors import ImportFailedError
from connkit.importers.base import BaseImporter, ImportResult, expand_home
from connkit.models.connection import Connection
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import ProtocolType, RdpConfig, SshAuthMethod, SshConfig, VncConfig

_RESERVED_KEYS: Final[frozenset[str]] = frozenset({"defaults", "environments"})

_SSH_METHODS: Final[frozenset[str]] = frozenset({"ssh", "sftp", "scp"})
_RDP_METHODS: Final[frozenset[str]] = frozenset({"rdp", "rdesktop", "xfreerdp"})
_VNC_METHODS: Final[frozenset[str]] = frozenset({"vnc", "vncviewer"})

_AUTH_TYPES: Final[dict[str, SshAuthMethod]] = {
    "publickey": SshAuthMethod.public_key,
    "key": SshAuthMethod.public_key,
    "keyboard-interactive": SshAuthMethod.keyboard_interactive,
    "agent": SshAuthMethod.agent,
}


def _text(entry: dict[str, Any], *keys: str) -> str | None:
    for key in keys:
        value = entry.get(key)
        if value is not None and str(value).strip():
            return str(value).strip()
    return None


def _is_group(entry: dict[str, Any]) -> bool:
    return str(entry.get("_is_group", "0")) == "1"


def parse_ssh_options(options: str) -> dict[str, str]:
    """Extract ``-o Key=Value`` pairs from an Asbru options string."""
    try:
        tokens = shlex.split(options)
    except ValueError:
        tokens = options.split()

    parsed: dict[str, str] = {}
    pending_o = False
    for token in tokens:
        if token == "-o":
            pending_o = True
            continue
        if token.startswith("-o") and len(token) > 2:
            token = token[2:]
        elif not pending_o:
            continue
        pending_o = False
        key, sep, value = token.partition("=")
        if sep and key:
            parsed[key] = value
    return parsed


class AsbruImporter(BaseImporter):
    format_id: ClassVar[str] = "asbru"
    display_name: ClassVar[str] = "Asbru-CM"

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ImportFailedError(source, f"Failed to parse YAML: {e}") from e

        if data is None:
            return result
        if not isinstance(data, dict):
            raise ImportFailedError(source, "Asbru-CM config root must be a mapping")

        entries: dict[str, dict[str, Any]] = {}
        nested_parent: dict[str, str] = {}
        self._collect(data, None, entries, nested_parent, source, result)

        group_ids: dict[str, UUID] = {}
        groups: dict[str, ConnectionGroup] = {}
        for key, entry in entries.items():
            if _is_group(entry):
                group = ConnectionGroup(name=_text(entry, "name", "title") or key)
                group_ids[key] = group.id
                groups[key] = group

        for key, group in groups.items():
            parent_key = nested_parent.get(key) or _text(entries[key], "parent")
            if parent_key in group_ids and parent_key != key:
                group.parent_id = group_ids[parent_key]
        result.groups.extend(groups.values())

        for key, entry in entries.items():
            if _is_group(entry):
                continue
            connection = self._convert(key, entry, source, result)
            if connection is None:
                continue
            parent_key = nested_parent.get(key) or _text(entry, "parent")
            if parent_key is not None:
                connection.group_id = group_ids.get(parent_key)
            result.connections.append(connection)

        return result

    def _collect(
        self,
        mapping: dict[Any, Any],
        parent_key: str | None,
        entries: dict[str, dict[str, Any]],
        nested_parent: dict[str, str],
        source: str,
        result: ImportResult,
    ) -> None:
        for raw_key, value in mapping.items():
            key = str(raw_key)
            if key.startswith("__") or key in _RESERVED_KEYS:
                continue
            if not isinstance(value, dict):
                result.skip(key, "Entry is not a mapping", source)
                continue
            entries[key] = value
            if parent_key is not None:
                nested_parent[key] = parent_key
            children = value.get("children")
            if isinstance(children, dict):
                self._collect(children, key, entries, nested_parent, source, result)

    def _convert(
        self, key: str, entry: dict[str, Any], source: str, result: ImportResult
    ) -> Connection | None:
        name = _text(entry, "name", "title") or key
        host = _text(entry, "ip", "host")
        if host is None:
            result.skip(name, "No hostname specified", source)
            return None

        # Asbru labels methods like "RDP (xfreerdp)"; the first word selects the protocol.
        method = (_text(entry, "type", "method") or "ssh").lower().split()[0]
        config: SshConfig | RdpConfig | VncConfig
        if method in _SSH_METHODS:
            protocol = ProtocolType.ssh
            config = SshConfig(
                auth_method=_AUTH_TYPES.get(
                    (_text(entry, "auth_type") or "").lower(), SshAuthMethod.password
                ),
                custom_options=parse_ssh_options(_text(entry, "options") or ""),
            )
            key_file = _text(entry, "public key")
            if key_file:
                config.use_key_file(expand_home(key_file))
        elif method in _RDP_METHODS:
            protocol = ProtocolType.rdp
            config = RdpConfig()
        elif method in _VNC_METHODS:
            protocol = ProtocolType.vnc
            config = VncConfig()
        else:
            result.skip(name, f"Unsupported protocol: {method}", source)
            return None

        port_text = _text(entry, "port")
        port = int(port_text) if port_text and port_text.isdigit() else protocol.default_port
        if not 0 < port <= 65535:
            result.skip(name, f"Invalid port: {port_text}", source)
            return None

        connection = Connection(
            name=name,
            host=host,
            port=port,
            protocol_config=config,
            username=_text(entry, "user"),
        )
        description = _text(entry, "description")
        if description:
            connection.add_tag(f"desc:{description}")
        return connection
