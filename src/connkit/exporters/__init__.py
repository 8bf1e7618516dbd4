"""Format exporters: canonical store -> external files."""

from connkit.exporters.ansible import AnsibleInventoryExporter
from connkit.exporters.asbru import AsbruExporter
from connkit.exporters.base import (
    BaseExporter,
    Exporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.exporters.native import NativeExporter
from connkit.exporters.registry import get_exporter, list_exporters, parse_format
from connkit.exporters.remmina import RemminaExporter
from connkit.exporters.royalts import RoyalTsExporter
from connkit.exporters.ssh_config import SshConfigExporter

__all__ = [
    "AnsibleInventoryExporter",
    "AsbruExporter",
    "BaseExporter",
    "ExportFormat",
    "ExportOptions",
    "ExportResult",
    "ExportSource",
    "Exporter",
    "NativeExporter",
    "RemminaExporter",
    "RoyalTsExporter",
    "SshConfigExporter",
    "get_exporter",
    "list_exporters",
    "parse_format",
]
