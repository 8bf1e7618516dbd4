"""Remmina ``.remmina`` profile importer (one file per connection)."""

from __future__ import annotations

import configparser
import logging
from pathlib import Path
from typing import ClassVar

from connkit.errors import ImportFailedError
from connkit.importers.base import BaseImporter, ImportResult, expand_home, read_source
from connkit.models.connection import Connection
from connkit.models.protocol import (
    ProtocolType,
    RdpConfig,
    Resolution,
    SshAuthMethod,
    SshConfig,
    VncConfig,
)

logger = logging.getLogger(__name__)

REMMINA_SECTION = "remmina"

_SSH_AUTH: dict[str, SshAuthMethod] = {
    "0": SshAuthMethod.password,
    "password": SshAuthMethod.password,
    "2": SshAuthMethod.public_key,
    "publickey": SshAuthMethod.public_key,
    "3": SshAuthMethod.agent,
    "agent": SshAuthMethod.agent,
    "4": SshAuthMethod.keyboard_interactive,
}


def split_server(server: str, default_port: int) -> tuple[str, int]:
    """Split ``host[:port]``; bracketed IPv6 literals are supported."""
    if server.startswith("["):
        host, _, rest = server[1:].partition("]")
        port_text = rest.lstrip(":")
        return host, int(port_text) if port_text.isdigit() else default_port

    host, sep, port_text = server.rpartition(":")
    if sep and port_text.isdigit() and ":" not in host:
        return host, int(port_text)
    return server, default_port


def _int_or_none(value: str | None) -> int | None:
    if value is None or not value.strip().lstrip("-").isdigit():
        return None
    return int(value)


class RemminaImporter(BaseImporter):
    format_id: ClassVar[str] = "remmina"
    display_name: ClassVar[str] = "Remmina"

    def import_path(self, path: Path) -> ImportResult:
        if path.is_dir():
            result = ImportResult()
            for profile in sorted(path.glob("*.remmina")):
                try:
                    result.merge(self.import_text(read_source(profile), source=str(profile)))
                except ImportFailedError as e:
                    result.add_error(str(e))
            logger.info("Remmina import of %s: %s", path, result.summary())
            return result
        if not path.exists():
            raise ImportFailedError.file_not_found(path)
        return super().import_path(path)

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        result = ImportResult()
        parser = configparser.ConfigParser(interpolation=None, strict=False)
        try:
            parser.read_string(text, source=source)
        except configparser.Error as e:
            raise ImportFailedError(source, f"Failed to parse Remmina profile: {e}") from e

        if not parser.has_section(REMMINA_SECTION):
            result.skip(source, "No [remmina] section found", source)
            return result

        connection = self._convert(dict(parser[REMMINA_SECTION]), source, result)
        if connection is not None:
            result.connections.append(connection)
        return result

    def _convert(
        self, fields: dict[str, str], source: str, result: ImportResult
    ) -> Connection | None:
        server = fields.get("server") or fields.get("ssh_server") or ""
        if not server.strip():
            result.skip(fields.get("name") or source, "No server specified", source)
            return None

        protocol_name = fields.get("protocol", "").strip().upper()
        name = fields.get("name", "").strip()

        config: SshConfig | RdpConfig | VncConfig
        match protocol_name:
            case "SSH" | "SFTP":
                protocol = ProtocolType.ssh
                config = SshConfig(
                    auth_method=_SSH_AUTH.get(fields.get("ssh_auth", ""), SshAuthMethod.password)
                )
                key_file = fields.get("ssh_privatekey", "").strip()
                if key_file:
                    config.use_key_file(expand_home(key_file))
            case "RDP":
                protocol = ProtocolType.rdp
                config = RdpConfig(
                    resolution=Resolution.parse(fields.get("resolution", "")),
                    color_depth=_int_or_none(fields.get("colordepth")),
                    audio_redirect=fields.get("sound", "off") not in ("", "off"),
                )
            case "VNC":
                protocol = ProtocolType.vnc
                config = VncConfig(
                    view_only=fields.get("viewonly") == "1",
                    quality=_clamp_quality(fields.get("quality")),
                )
            case "":
                result.skip(name or source, "No protocol specified", source)
                return None
            case _:
                result.skip(name or source, f"Unsupported protocol: {protocol_name}", source)
                return None

        host, port = split_server(server.strip(), protocol.default_port)
        if "ssh_server_port" in fields and ":" not in server:
            port = _int_or_none(fields["ssh_server_port"]) or port
        if not 0 < port <= 65535:
            result.skip(name or host, f"Invalid port: {port}", source)
            return None

        connection = Connection(
            name=name or host,
            host=host,
            port=port,
            protocol_config=config,
            username=fields.get("username") or fields.get("ssh_username") or None,
            domain=fields.get("domain") or None,
        )
        group = fields.get("group", "").strip()
        if group:
            connection.add_tag(f"remmina:{group}")
        return connection


def _clamp_quality(value: str | None) -> int | None:
    # Remmina stores quality as 0 (poor) .. 9 (best); anything else is dropped.
    number = _int_or_none(value)
    if number is None or not 0 <= number <= 9:
        return None
    return number
