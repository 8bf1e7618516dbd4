from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class Cluster(BaseModel):
    """Named set of connections opened together."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    connection_ids: list[UUID] = Field(default_factory=list)
    broadcast_enabled: bool = False

    def add_connection(self, connection_id: UUID) -> None:
        if connection_id not in self.connection_ids:
            self.connection_ids.append(connection_id)

    def remove_connection(self, connection_id: UUID) -> bool:
        if connection_id in self.connection_ids:
            self.connection_ids.remove(connection_id)
            return True
        return False


class Variable(BaseModel):
    """Global variable usable in connection fields as ``${name}``."""

    name: str
    value: str = ""
    is_secret: bool = False
    description: str | None = None
