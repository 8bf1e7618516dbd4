"""Remmina exporter: one ``.remmina`` profile per connection in the target directory."""

from __future__ import annotations

import configparser
import io
import logging
import re
from pathlib import Path
from typing import ClassVar, Final

from connkit.errors import ExportFailedError
from connkit.exporters.base import (
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
    group_paths,
    write_text,
)
from connkit.importers.remmina import REMMINA_SECTION
from connkit.models.connection import Connection
from connkit.models.protocol import RdpConfig, SshAuthMethod, SshConfig, VncConfig

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME: Final[re.Pattern[str]] = re.compile(r"[^A-Za-z0-9._-]+")

_AUTH_CODES: Final[dict[SshAuthMethod, str]] = {
    SshAuthMethod.password: "0",
    SshAuthMethod.public_key: "2",
    SshAuthMethod.agent: "3",
    SshAuthMethod.keyboard_interactive: "4",
}


def server_field(host: str, port: int) -> str:
    if ":" in host:
        return f"[{host}]:{port}"
    return f"{host}:{port}"


def profile_filename(connection: Connection, taken: set[str]) -> str:
    stem = _UNSAFE_FILENAME.sub("_", connection.name).strip("._") or "connection"
    filename = f"{stem}.remmina"
    if filename in taken:
        filename = f"{stem}-{connection.id.hex[:8]}.remmina"
    taken.add(filename)
    return filename


def profile_fields(connection: Connection, group: str | None) -> dict[str, str] | None:
    """Remmina keys for a connection, or None when the protocol has no Remmina plugin."""
    config = connection.protocol_config
    fields = {
        "name": connection.name,
        "server": server_field(connection.host, connection.port),
    }
    if connection.username:
        fields["username"] = connection.username
    if group:
        fields["group"] = group

    if isinstance(config, SshConfig):
        fields["protocol"] = "SSH"
        fields["ssh_auth"] = _AUTH_CODES[config.auth_method]
        if config.key_path is not None:
            fields["ssh_privatekey"] = str(config.key_path)
    elif isinstance(config, RdpConfig):
        fields["protocol"] = "RDP"
        if connection.domain:
            fields["domain"] = connection.domain
        if config.resolution is not None:
            fields["resolution"] = str(config.resolution)
        if config.color_depth is not None:
            fields["colordepth"] = str(config.color_depth)
        fields["sound"] = "local" if config.audio_redirect else "off"
    elif isinstance(config, VncConfig):
        fields["protocol"] = "VNC"
        fields["viewonly"] = "1" if config.view_only else "0"
        if config.quality is not None:
            fields["quality"] = str(config.quality)
    else:
        return None
    return fields


def render_profile(fields: dict[str, str]) -> str:
    parser = configparser.ConfigParser(interpolation=None)
    parser[REMMINA_SECTION] = fields
    buffer = io.StringIO()
    parser.write(buffer, space_around_delimiters=False)
    return buffer.getvalue()


class RemminaExporter:
    format: ClassVar[ExportFormat] = ExportFormat.remmina

    def export(self, source: ExportSource, options: ExportOptions) -> ExportResult:
        directory = options.output_path
        if directory.exists() and not directory.is_dir():
            raise ExportFailedError("Remmina export target must be a directory", path=directory)

        result = ExportResult()
        paths = group_paths(source.groups) if options.include_groups else {}
        taken: set[str] = set()
        for connection in source.connections:
            group = paths.get(str(connection.group_id)) if connection.group_id else None
            fields = profile_fields(connection, group)
            if fields is None:
                result.skip(
                    f"Skipped unsupported connection '{connection.name}' "
                    f"(protocol: {connection.protocol.value})"
                )
                continue
            path: Path = directory / profile_filename(connection, taken)
            write_text(path, render_profile(fields))
            result.output_files.append(path)
            result.exported_count += 1

        logger.info("Remmina export to %s: %s", directory, result.summary())
        return result

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        raise ExportFailedError("Remmina exports one file per connection; use export()")
