"""Importer for connkit's own ``.rcn`` JSON document."""

from __future__ import annotations

import json
import logging
from typing import Any, ClassVar, TypeVar

from pydantic import BaseModel, ValidationError

from connkit.errors import ImportFailedError
from connkit.importers.base import BaseImporter, ImportResult
from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection
from connkit.models.document import FORMAT_VERSION
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate

logger = logging.getLogger(__name__)

_M = TypeVar("_M", bound=BaseModel)


def _records(
    data: dict[str, Any], key: str, model: type[_M], source: str, result: ImportResult
) -> list[_M]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        result.add_error(f"{source}: '{key}' must be a list")
        return []

    parsed: list[_M] = []
    for index, item in enumerate(raw):
        try:
            parsed.append(model.model_validate(item))
        except ValidationError as e:
            label = item.get("name") if isinstance(item, dict) else None
            result.add_error(
                f"{source}: invalid {key[:-1]} #{index}"
                + (f" ({label})" if label else "")
                + f": {e.error_count()} validation error(s)"
            )
            logger.debug("Rejected %s #%d from %s: %s", key, index, source, e)
    return parsed


class NativeImporter(BaseImporter):
    format_id: ClassVar[str] = "native"
    display_name: ClassVar[str] = "connkit Native"

    def import_text(self, text: str, *, source: str = "<string>") -> ImportResult:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ImportFailedError(source, f"Invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise ImportFailedError(source, "Native document root must be an object")

        version = data.get("format_version", FORMAT_VERSION)
        if not isinstance(version, int) or version > FORMAT_VERSION:
            raise ImportFailedError(
                source,
                f"Unsupported format version {version!r} (this build reads up to {FORMAT_VERSION})",
            )

        result = ImportResult()
        result.connections = _records(data, "connections", Connection, source, result)
        result.groups = _records(data, "groups", ConnectionGroup, source, result)
        result.templates = _records(data, "templates", ConnectionTemplate, source, result)
        result.clusters = _records(data, "clusters", Cluster, source, result)
        result.variables = _records(data, "variables", Variable, source, result)
        return result
