"""Exporter registry for selecting an exporter by format."""

from __future__ import annotations

from connkit.errors import ExportFailedError
from connkit.exporters.ansible import AnsibleInventoryExporter
from connkit.exporters.asbru import AsbruExporter
from connkit.exporters.base import Exporter, ExportFormat
from connkit.exporters.native import NativeExporter
from connkit.exporters.remmina import RemminaExporter
from connkit.exporters.royalts import RoyalTsExporter
from connkit.exporters.ssh_config import SshConfigExporter

_EXPORTERS: dict[ExportFormat, type[Exporter]] = {
    ExportFormat.ansible: AnsibleInventoryExporter,
    ExportFormat.ssh_config: SshConfigExporter,
    ExportFormat.remmina: RemminaExporter,
    ExportFormat.asbru: AsbruExporter,
    ExportFormat.native: NativeExporter,
    ExportFormat.royalts: RoyalTsExporter,
}

# Singleton instances (exporters are stateless)
_exporter_instances: dict[ExportFormat, Exporter] = {}


def parse_format(name: str) -> ExportFormat:
    normalized = name.lower().strip().replace("_", "-")
    try:
        return ExportFormat(normalized)
    except ValueError:
        supported = ", ".join(f.value for f in ExportFormat)
        raise ExportFailedError(
            f"Unsupported export format: {name}. Supported formats: {supported}"
        ) from None


def get_exporter(export_format: ExportFormat | str) -> Exporter:
    fmt = export_format if isinstance(export_format, ExportFormat) else parse_format(export_format)
    if fmt not in _exporter_instances:
        _exporter_instances[fmt] = _EXPORTERS[fmt]()
    return _exporter_instances[fmt]


def list_exporters() -> list[str]:
    return sorted(f.value for f in _EXPORTERS)
