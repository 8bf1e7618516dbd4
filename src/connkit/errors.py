"""Error taxonomy shared by the resolver, importers, exporters and CLI."""

from __future__ import annotations

from pathlib import Path


class ConnkitError(Exception):
    """Base class for all connkit errors."""


class ConfigError(ConnkitError):
    """Invalid field value or unknown protocol string.

    Aborts the single operation that raised it.
    """

    def __init__(self, field: str, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Validation error for field '{field}': {reason}")


class ImportFailedError(ConnkitError):
    """The whole import was aborted; no partial result is returned."""

    def __init__(self, source_name: str, reason: str) -> None:
        self.source_name = source_name
        self.reason = reason
        super().__init__(f"Failed to import from {source_name}: {reason}")

    @classmethod
    def file_not_found(cls, path: Path) -> ImportFailedError:
        return cls(str(path), f"File not found: {path}")

    @classmethod
    def unsupported_format(cls, name: str) -> ImportFailedError:
        return cls(name, f"Unsupported import format: {name}")


class ExportFailedError(ConnkitError):
    """Export was aborted (target unwritable, unsupported data, serialization failure)."""

    def __init__(self, reason: str, *, path: Path | None = None) -> None:
        self.reason = reason
        self.path = path
        if path is not None:
            super().__init__(f"Failed to export to {path}: {reason}")
        else:
            super().__init__(f"Export failed: {reason}")

    @classmethod
    def unsupported_protocol(cls, protocol: str, format_name: str) -> ExportFailedError:
        return cls(f"Protocol '{protocol}' is not supported by {format_name}")


class ConnectionNotFoundError(ConnkitError):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"Connection not found: {query}")


class AmbiguousConnectionError(ConnkitError):
    def __init__(self, query: str, matches: list[str]) -> None:
        self.query = query
        self.matches = matches
        super().__init__(
            f"Ambiguous connection name '{query}'. Matches: {', '.join(matches)}"
        )


class StoreCorruptError(ConnkitError):
    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Connection store at {path} is unreadable: {reason}")


class LaunchError(ConnkitError):
    """The resolved client program could not be started."""

    def __init__(self, program: str, reason: str) -> None:
        self.program = program
        self.reason = reason
        super().__init__(f"Failed to launch '{program}': {reason}")
