"""Native document: the complete canonical store as one serializable value."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection, utc_now
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate

FORMAT_VERSION = 1
NATIVE_EXTENSION = "rcn"


class NativeDocument(BaseModel):
    format_version: int = FORMAT_VERSION
    exported_at: datetime = Field(default_factory=utc_now)
    connections: list[Connection] = Field(default_factory=list)
    groups: list[ConnectionGroup] = Field(default_factory=list)
    templates: list[ConnectionTemplate] = Field(default_factory=list)
    clusters: list[Cluster] = Field(default_factory=list)
    variables: list[Variable] = Field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self) -> str:
        # Deterministic output: stable key ordering.
        return json.dumps(self.to_payload(), ensure_ascii=False, sort_keys=True, indent=2) + "\n"
