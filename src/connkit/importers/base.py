"""Importer contract and result types.

Importers isolate failures per record: a bad entry lands in ``skipped`` or ``errors``
and parsing continues. Only an unreadable container raises ImportFailedError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, Protocol

from connkit.errors import ImportFailedError
from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SkippedEntry:
    identifier: str
    reason: str
    location: str | None = None

    def __str__(self) -> str:
        if self.location:
            return f"{self.identifier} ({self.location}): {self.reason}"
        return f"{self.identifier}: {self.reason}"


@dataclass
class ImportResult:
    connections: list[Connection] = field(default_factory=list)
    groups: list[ConnectionGroup] = field(default_factory=list)
    skipped: list[SkippedEntry] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    # Only the native format carries these.
    templates: list[ConnectionTemplate] = field(default_factory=list)
    clusters: list[Cluster] = field(default_factory=list)
    variables: list[Variable] = field(default_factory=list)

    @property
    def total_processed(self) -> int:
        return len(self.connections) + len(self.skipped) + len(self.errors)

    @property
    def has_issues(self) -> bool:
        return bool(self.skipped or self.errors)

    def summary(self) -> str:
        return (
            f"Imported: {len(self.connections)}, Groups: {len(self.groups)}, "
            f"Skipped: {len(self.skipped)}, Errors: {len(self.errors)}"
        )

    def skip(self, identifier: str, reason: str, location: str | None = None) -> None:
        logger.debug("Skipping %s: %s", identifier, reason)
        self.skipped.append(SkippedEntry(identifier, reason, location))

    def add_error(self, message: str) -> None:
        logger.debug("Import error: %s", message)
        self.errors.append(message)

    def merge(self, other: ImportResult) -> None:
        """Append everything from another result (e.g. one file of a directory import)."""
        self.connections.extend(other.connections)
        self.groups.extend(other.groups)
        self.skipped.extend(other.skipped)
        self.errors.extend(other.errors)
        self.templates.extend(other.templates)
        self.clusters.extend(other.clusters)
        self.variables.extend(other.variables)


class Importer(Protocol):
    """Protocol for format importers."""

    format_id: ClassVar[str]
    display_name: ClassVar[str]

    def import_path(self, path: Path) -> ImportResult:
        """Import from a file (or directory, where the format allows it).

        Raises:
            ImportFailedError: If the path is missing or cannot be decoded.
        """
        ...

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        """Import from already-loaded content; ``source`` is used in skip locations."""
        ...


class BaseImporter:
    """Shared file handling; subclasses implement ``import_text``."""

    format_id: ClassVar[str] = "base"
    display_name: ClassVar[str] = "Base"

    def import_path(self, path: Path) -> ImportResult:
        text = read_source(path)
        result = self.import_text(text, source=str(path))
        logger.info("%s import of %s: %s", self.display_name, path, result.summary())
        return result

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        raise NotImplementedError


def read_source(path: Path) -> str:
    if not path.is_file():
        raise ImportFailedError.file_not_found(path)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ImportFailedError(str(path), f"File is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ImportFailedError(str(path), f"Failed to read file: {e}") from e


def expand_home(value: str) -> Path:
    return Path(value).expanduser()
