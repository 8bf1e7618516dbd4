"""Exporter contract, format table and result types."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import ClassVar, Protocol

from connkit.errors import ExportFailedError
from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection
from connkit.models.document import NativeDocument
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    ansible = "ansible"
    ssh_config = "ssh-config"
    remmina = "remmina"
    asbru = "asbru"
    native = "native"
    royalts = "royalts"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def file_extension(self) -> str:
        return _EXTENSIONS[self]

    @property
    def exports_to_directory(self) -> bool:
        return self is ExportFormat.remmina


_DISPLAY_NAMES: dict[ExportFormat, str] = {
    ExportFormat.ansible: "Ansible Inventory",
    ExportFormat.ssh_config: "SSH Config",
    ExportFormat.remmina: "Remmina",
    ExportFormat.asbru: "Asbru-CM",
    ExportFormat.native: "connkit Native",
    ExportFormat.royalts: "Royal TS",
}

_EXTENSIONS: dict[ExportFormat, str] = {
    ExportFormat.ansible: "ini",
    ExportFormat.ssh_config: "config",
    ExportFormat.remmina: "remmina",
    ExportFormat.asbru: "yml",
    ExportFormat.native: "rcn",
    ExportFormat.royalts: "rtsz",
}


@dataclass
class ExportOptions:
    format: ExportFormat
    output_path: Path
    include_passwords: bool = False
    include_groups: bool = True


@dataclass
class ExportResult:
    exported_count: int = 0
    skipped_count: int = 0
    warnings: list[str] = field(default_factory=list)
    output_files: list[Path] = field(default_factory=list)

    def summary(self) -> str:
        return (
            f"Exported: {self.exported_count}, Skipped: {self.skipped_count}, "
            f"Warnings: {len(self.warnings)}"
        )

    def skip(self, warning: str) -> None:
        logger.debug(warning)
        self.skipped_count += 1
        self.warnings.append(warning)


@dataclass
class ExportSource:
    """Everything an exporter may read. Only the native exporter uses the extras."""

    connections: Sequence[Connection]
    groups: Sequence[ConnectionGroup] = ()
    templates: Sequence[ConnectionTemplate] = ()
    clusters: Sequence[Cluster] = ()
    variables: Sequence[Variable] = ()

    @classmethod
    def from_document(cls, document: NativeDocument) -> ExportSource:
        return cls(
            connections=document.connections,
            groups=document.groups,
            templates=document.templates,
            clusters=document.clusters,
            variables=document.variables,
        )


class Exporter(Protocol):
    """Protocol for format exporters."""

    format: ClassVar[ExportFormat]

    def export(self, source: ExportSource, options: ExportOptions) -> ExportResult:
        """Write ``source`` to ``options.output_path``.

        Raises:
            ExportFailedError: If the target cannot be written or the data cannot be serialized.
        """
        ...

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        """Serialize to text without touching the filesystem (single-file formats)."""
        ...


class BaseExporter:
    """Single-file export; subclasses implement ``render``."""

    format: ClassVar[ExportFormat]

    def export(self, source: ExportSource, options: ExportOptions) -> ExportResult:
        result = ExportResult()
        content = self.render(source, options, result)
        write_text(options.output_path, content)
        result.output_files.append(options.output_path)
        logger.info(
            "%s export to %s: %s", self.format.display_name, options.output_path, result.summary()
        )
        return result

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        raise NotImplementedError


def write_text(path: Path, content: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise ExportFailedError(f"Failed to write file: {e}", path=path) from e


def group_paths(groups: Sequence[ConnectionGroup]) -> dict[str, str]:
    """Map each group id (as a string) to its ``/``-joined path from the root."""
    by_id = {str(g.id): g for g in groups}
    paths: dict[str, str] = {}
    for group_id in by_id:
        parts: list[str] = []
        seen: set[str] = set()
        current: str | None = group_id
        while current is not None and current in by_id and current not in seen:
            seen.add(current)
            group = by_id[current]
            parts.append(group.name)
            current = str(group.parent_id) if group.parent_id is not None else None
        paths[group_id] = "/".join(reversed(parts))
    return paths
