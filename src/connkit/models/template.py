from __future__ import annotations

from datetime import datetime
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field

from connkit.models.automation import ConnectionTask, CustomProperty, WolConfig
from connkit.models.connection import Connection, PasswordSource, utc_now
from connkit.models.protocol import ProtocolConfig, ProtocolType, SshConfig


class ConnectionTemplate(BaseModel):
    """Reusable defaults from which new connections are created."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    description: str | None = None
    host: str = ""
    port: int = Field(default=22, ge=0, le=65535)
    protocol_config: ProtocolConfig = Field(default_factory=SshConfig)
    username: str | None = None
    domain: str | None = None
    tags: list[str] = Field(default_factory=list)
    password_source: PasswordSource = PasswordSource.none
    custom_properties: list[CustomProperty] = Field(default_factory=list)
    pre_connect_task: ConnectionTask | None = None
    post_disconnect_task: ConnectionTask | None = None
    wol_config: WolConfig | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType(self.protocol_config.kind)

    def apply(self, name: str | None = None) -> Connection:
        """Create a new connection (fresh id and timestamps) from this template."""
        return Connection(
            name=name or self.name,
            description=self.description,
            host=self.host,
            port=self.port,
            protocol_config=self.protocol_config.model_copy(deep=True),
            username=self.username,
            domain=self.domain,
            tags=list(self.tags),
            password_source=self.password_source,
            custom_properties=[p.model_copy() for p in self.custom_properties],
            pre_connect_task=self.pre_connect_task,
            post_disconnect_task=self.post_disconnect_task,
            wol_config=self.wol_config,
        )
