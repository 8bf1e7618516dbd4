"""Royal TS XML document importer.

Folders and connections are linked either by ``<ParentID>`` or by element nesting.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import ClassVar, Final
from uuid import UUID

from connkit.errors import ImportFailedError
from connkit.importers.base import BaseImporter, ImportResult, expand_home
from connkit.models.connection import Connection, PasswordSource
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import (
    ProtocolType,
    RdpConfig,
    RdpGateway,
    Resolution,
    SshConfig,
    VncConfig,
)

_CONNECTION_TAGS: Final[dict[str, ProtocolType]] = {
    "RoyalSSHConnection": ProtocolType.ssh,
    "RoyalRDPConnection": ProtocolType.rdp,
    "RoyalVNCConnection": ProtocolType.vnc,
}
_FOLDER_TAG: Final[str] = "RoyalFolder"
_CREDENTIAL_TAG: Final[str] = "RoyalCredential"
_TRASH_TAG: Final[str] = "RoyalTrash"


@dataclass
class _Record:
    tag: str
    fields: dict[str, str]
    parent: str | None
    in_trash: bool = False


@dataclass
class _Document:
    folders: list[_Record] = field(default_factory=list)
    connections: list[_Record] = field(default_factory=list)
    credentials: dict[str, dict[str, str]] = field(default_factory=dict)
    trash_ids: set[str] = field(default_factory=set)


def _fields(element: ET.Element) -> dict[str, str]:
    return {
        child.tag: (child.text or "").strip()
        for child in element
        if len(child) == 0 and (child.text or "").strip()
    }


def _int(value: str | None) -> int | None:
    if value is None or not value.isdigit():
        return None
    return int(value)


def _is_true(value: str | None) -> bool:
    return value is not None and value.lower() in ("true", "1", "yes")


class RoyalTsImporter(BaseImporter):
    format_id: ClassVar[str] = "royalts"
    display_name: ClassVar[str] = "Royal TS"

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        try:
            root = ET.fromstring(text.lstrip("\ufeff"))
        except ET.ParseError as e:
            raise ImportFailedError(source, f"XML parse error: {e}") from e

        doc = _Document()
        self._walk(root, None, False, doc)

        group_ids: dict[str, UUID] = {}
        groups: list[tuple[_Record, ConnectionGroup]] = []
        for folder in doc.folders:
            folder_id = folder.fields.get("ID", "")
            name = folder.fields.get("Name", "")
            if not folder_id or not name or folder.in_trash:
                continue
            group = ConnectionGroup(name=name)
            group_ids[folder_id] = group.id
            groups.append((folder, group))

        for folder, group in groups:
            parent = folder.fields.get("ParentID") or folder.parent
            if parent is not None and parent in group_ids and parent != folder.fields["ID"]:
                group.parent_id = group_ids[parent]
            result.groups.append(group)

        for record in doc.connections:
            parent = record.fields.get("ParentID") or record.parent
            name = record.fields.get("Name") or record.fields.get("ID") or record.tag
            if record.in_trash or (parent is not None and parent in doc.trash_ids):
                result.skip(name, "Connection is in the Royal TS trash", source)
                continue
            port_text = self._port_text(record)
            if port_text is not None and not 0 < int(port_text) <= 65535:
                result.skip(name, f"Invalid port: {port_text}", source)
                continue
            connection = self._convert(record, doc.credentials)
            if connection is None:
                result.skip(name, "Missing host", source)
                continue
            if parent is not None:
                connection.group_id = group_ids.get(parent)
            result.connections.append(connection)

        return result

    def _walk(
        self, element: ET.Element, parent: str | None, in_trash: bool, doc: _Document
    ) -> None:
        for child in element:
            if child.tag == _TRASH_TAG:
                trash_id = _fields(child).get("ID")
                if trash_id:
                    doc.trash_ids.add(trash_id)
                self._walk(child, trash_id, True, doc)
            elif child.tag == _FOLDER_TAG:
                record = _Record(child.tag, _fields(child), parent, in_trash)
                doc.folders.append(record)
                self._walk(child, record.fields.get("ID", parent), in_trash, doc)
            elif child.tag in _CONNECTION_TAGS:
                doc.connections.append(_Record(child.tag, _fields(child), parent, in_trash))
            elif child.tag == _CREDENTIAL_TAG:
                cred = _fields(child)
                if "ID" in cred:
                    doc.credentials[cred["ID"]] = cred
            elif len(child):
                self._walk(child, parent, in_trash, doc)

    @staticmethod
    def _port_text(record: _Record) -> str | None:
        """The record's numeric port field, or None when absent or not a number."""
        port_field = "VNCPort" if record.tag == "RoyalVNCConnection" else "Port"
        value = record.fields.get(port_field) or record.fields.get("Port")
        return value if value is not None and value.isdigit() else None

    def _convert(
        self, record: _Record, credentials: dict[str, dict[str, str]]
    ) -> Connection | None:
        fields = record.fields
        host = fields.get("URI")
        if not host:
            return None

        protocol = _CONNECTION_TAGS[record.tag]
        port = _int(self._port_text(record)) or protocol.default_port

        config: SshConfig | RdpConfig | VncConfig
        if protocol is ProtocolType.ssh:
            config = SshConfig()
            if fields.get("PrivateKeyFile"):
                config.use_key_file(expand_home(fields["PrivateKeyFile"]))
        elif protocol is ProtocolType.rdp:
            width = _int(fields.get("DesktopWidth"))
            height = _int(fields.get("DesktopHeight"))
            config = RdpConfig(
                resolution=Resolution(width=width, height=height) if width and height else None
            )
            if fields.get("RDGatewayHost"):
                config.gateway = RdpGateway(hostname=fields["RDGatewayHost"])
        else:
            config = VncConfig(view_only=_is_true(fields.get("ViewOnly")))

        connection = Connection(
            name=fields.get("Name") or host,
            host=host,
            port=port,
            protocol_config=config,
            username=fields.get("CredentialUsername"),
            domain=fields.get("CredentialDomain") if protocol is ProtocolType.rdp else None,
        )

        credential = credentials.get(fields.get("CredentialId", ""))
        if credential is not None:
            connection.username = credential.get("UserName") or connection.username
            if protocol is ProtocolType.rdp:
                connection.domain = credential.get("Domain") or connection.domain
            connection.password_source = PasswordSource.prompt
        return connection
