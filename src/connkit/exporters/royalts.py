"""Royal TS exporter: one XML document with nested folders and connections."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import ClassVar, Final

from connkit.exporters.base import (
    BaseExporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.models.connection import Connection
from connkit.models.protocol import RdpConfig, SshConfig, VncConfig

XML_DECLARATION: Final[str] = '<?xml version="1.0" encoding="utf-8"?>'


def _child(parent: ET.Element, tag: str, value: object) -> None:
    ET.SubElement(parent, tag).text = str(value)


def connection_element(connection: Connection) -> ET.Element | None:
    config = connection.protocol_config
    if isinstance(config, SshConfig):
        element = ET.Element("RoyalSSHConnection")
    elif isinstance(config, RdpConfig):
        element = ET.Element("RoyalRDPConnection")
    elif isinstance(config, VncConfig):
        element = ET.Element("RoyalVNCConnection")
    else:
        return None

    _child(element, "ID", connection.id)
    _child(element, "Name", connection.name)
    if connection.description:
        _child(element, "Description", connection.description)
    _child(element, "URI", connection.host)
    if connection.group_id is not None:
        _child(element, "ParentID", connection.group_id)
    if connection.username:
        _child(element, "CredentialUsername", connection.username)

    if isinstance(config, SshConfig):
        _child(element, "Port", connection.port)
        if config.key_path is not None:
            _child(element, "PrivateKeyFile", config.key_path)
    elif isinstance(config, RdpConfig):
        _child(element, "Port", connection.port)
        if connection.domain:
            _child(element, "CredentialDomain", connection.domain)
        if config.resolution is not None:
            _child(element, "DesktopWidth", config.resolution.width)
            _child(element, "DesktopHeight", config.resolution.height)
        if config.gateway is not None:
            _child(element, "RDGatewayHost", config.gateway.hostname)
    else:
        _child(element, "VNCPort", connection.port)
        _child(element, "ViewOnly", "true" if config.view_only else "false")
    return element


class RoyalTsExporter(BaseExporter):
    format: ClassVar[ExportFormat] = ExportFormat.royalts

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        root = ET.Element("RoyalDocument")
        containers: dict[str, ET.Element] = {}

        if options.include_groups:
            folders: dict[str, ET.Element] = {}
            for group in source.groups:
                folder = ET.Element("RoyalFolder")
                _child(folder, "ID", group.id)
                _child(folder, "Name", group.name)
                if group.parent_id is not None:
                    _child(folder, "ParentID", group.parent_id)
                folders[str(group.id)] = folder
            for group in source.groups:
                parent = folders.get(str(group.parent_id)) if group.parent_id else None
                (parent if parent is not None else root).append(folders[str(group.id)])
            containers = folders

        for connection in source.connections:
            element = connection_element(connection)
            if element is None:
                result.skip(
                    f"Skipped unsupported connection '{connection.name}' "
                    f"(protocol: {connection.protocol.value})"
                )
                continue
            container = containers.get(str(connection.group_id)) if connection.group_id else None
            (container if container is not None else root).append(element)
            result.exported_count += 1

        ET.indent(root)
        return XML_DECLARATION + "\n" + ET.tostring(root, encoding="unicode") + "\n"
