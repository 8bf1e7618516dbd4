from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field

from connkit.models.connection import PasswordSource, utc_now


class ConnectionGroup(BaseModel):
    """A folder in the connection tree; ``parent_id`` of None means root."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    parent_id: UUID | None = None
    expanded: bool = True
    sort_order: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    username: str | None = None
    domain: str | None = None
    password_source: PasswordSource | None = None

    @classmethod
    def with_parent(cls, name: str, parent_id: UUID) -> ConnectionGroup:
        return cls(name=name, parent_id=parent_id)

    @property
    def is_root(self) -> bool:
        return self.parent_id is None
