"""Native exporter: the complete store as a ``.rcn`` JSON document."""

from __future__ import annotations

from typing import ClassVar

from pydantic import ValidationError

from connkit.errors import ExportFailedError
from connkit.exporters.base import (
    BaseExporter,
    ExportFormat,
    ExportOptions,
    ExportResult,
    ExportSource,
)
from connkit.models.document import NativeDocument


class NativeExporter(BaseExporter):
    format: ClassVar[ExportFormat] = ExportFormat.native

    def render(
        self, source: ExportSource, options: ExportOptions, result: ExportResult
    ) -> str:
        try:
            document = NativeDocument(
                connections=list(source.connections),
                groups=list(source.groups),
                templates=list(source.templates),
                clusters=list(source.clusters),
                variables=list(source.variables),
            )
            content = document.to_json()
        except (ValidationError, TypeError, ValueError) as e:
            raise ExportFailedError(f"Serialization failed: {e}", path=options.output_path) from e
        result.exported_count = len(document.connections)
        return content
