"""Canonical connection model."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, computed_field

from connkit.models.automation import ConnectionTask, CustomProperty, LogConfig, WolConfig
from connkit.models.protocol import (
    ProtocolConfig,
    ProtocolType,
    RdpConfig,
    SpiceConfig,
    SshConfig,
    VncConfig,
    ZeroTrustConfig,
)


def utc_now() -> datetime:
    return datetime.now(UTC)


class PasswordSource(str, Enum):
    prompt = "prompt"
    stored = "stored"
    keepass = "keepass"
    keyring = "keyring"
    inherit = "inherit"
    none = "none"


class WindowMode(str, Enum):
    embedded = "embedded"
    external = "external"
    fullscreen = "fullscreen"


class Connection(BaseModel):
    """A single remote-access profile.

    The protocol tag is derived from ``protocol_config`` so the two can never disagree.
    """

    id: UUID = Field(default_factory=uuid4)
    name: str
    host: str = ""
    port: int = Field(default=22, ge=0, le=65535)
    protocol_config: ProtocolConfig = Field(default_factory=SshConfig)
    username: str | None = None
    domain: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    group_id: UUID | None = None
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
    last_connected: datetime | None = None
    sort_order: int = 0
    password_source: PasswordSource = PasswordSource.none
    window_mode: WindowMode = WindowMode.embedded
    local_variables: dict[str, str] = Field(default_factory=dict)
    custom_properties: list[CustomProperty] = Field(default_factory=list)
    log_config: LogConfig | None = None
    pre_connect_task: ConnectionTask | None = None
    post_disconnect_task: ConnectionTask | None = None
    wol_config: WolConfig | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def protocol(self) -> ProtocolType:
        return ProtocolType(self.protocol_config.kind)

    @classmethod
    def new_ssh(cls, name: str, host: str, port: int = 22) -> Connection:
        return cls(name=name, host=host, port=port, protocol_config=SshConfig())

    @classmethod
    def new_rdp(cls, name: str, host: str, port: int = 3389) -> Connection:
        return cls(name=name, host=host, port=port, protocol_config=RdpConfig())

    @classmethod
    def new_vnc(cls, name: str, host: str, port: int = 5900) -> Connection:
        return cls(name=name, host=host, port=port, protocol_config=VncConfig())

    @classmethod
    def new_spice(cls, name: str, host: str, port: int = 5900) -> Connection:
        return cls(name=name, host=host, port=port, protocol_config=SpiceConfig())

    @classmethod
    def new_zerotrust(cls, name: str, config: ZeroTrustConfig) -> Connection:
        return cls(name=name, port=0, protocol_config=config)

    def add_tag(self, tag: str) -> None:
        if tag not in self.tags:
            self.tags.append(tag)

    def get_custom_property(self, name: str) -> CustomProperty | None:
        for prop in self.custom_properties:
            if prop.name == name:
                return prop
        return None

    def set_custom_property(self, prop: CustomProperty) -> None:
        """Insert or replace a custom property by name."""
        for index, existing in enumerate(self.custom_properties):
            if existing.name == prop.name:
                self.custom_properties[index] = prop
                return
        self.custom_properties.append(prop)

    def touch(self) -> None:
        self.updated_at = utc_now()
