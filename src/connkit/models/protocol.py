"""Protocol-specific connection settings.

Each config carries a ``kind`` literal so that ``ProtocolConfig`` works as a
pydantic discriminated union; the connection's protocol tag is derived from it.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal
from uuid import UUID

from pydantic import BaseModel, Field

from connkit.errors import ConfigError
from connkit.models.zerotrust import ZeroTrustProvider, ZeroTrustProviderConfig


class ProtocolType(str, Enum):
    ssh = "ssh"
    rdp = "rdp"
    vnc = "vnc"
    spice = "spice"
    zerotrust = "zerotrust"

    @property
    def default_port(self) -> int:
        return _DEFAULT_PORTS[self]

    @classmethod
    def parse(cls, value: str) -> ProtocolType:
        """Parse a user-supplied protocol name (case-insensitive)."""
        normalized = value.strip().lower().replace("-", "")
        if normalized == "zt":
            normalized = "zerotrust"
        try:
            return cls(normalized)
        except ValueError:
            supported = ", ".join(p.value for p in cls)
            raise ConfigError(
                "protocol", f"Unknown protocol '{value}'. Supported protocols: {supported}"
            ) from None


_DEFAULT_PORTS: dict[ProtocolType, int] = {
    ProtocolType.ssh: 22,
    ProtocolType.rdp: 3389,
    ProtocolType.vnc: 5900,
    ProtocolType.spice: 5900,
    ProtocolType.zerotrust: 0,
}


class ClientMode(str, Enum):
    embedded = "embedded"
    external = "external"


class PerformanceMode(str, Enum):
    quality = "quality"
    balanced = "balanced"
    speed = "speed"


class SharedFolder(BaseModel):
    local_path: Path
    share_name: str


class Resolution(BaseModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)

    @classmethod
    def parse(cls, value: str) -> Resolution | None:
        """Parse ``WIDTHxHEIGHT``; returns None for anything else."""
        width, sep, height = value.strip().lower().partition("x")
        if not sep or not width.isdigit() or not height.isdigit():
            return None
        if int(width) == 0 or int(height) == 0:
            return None
        return cls(width=int(width), height=int(height))

    def __str__(self) -> str:
        return f"{self.width}x{self.height}"


# --- SSH -------------------------------------------------------------------


class SshAuthMethod(str, Enum):
    password = "password"
    public_key = "public_key"
    keyboard_interactive = "keyboard_interactive"
    agent = "agent"


class DefaultKeySource(BaseModel):
    kind: Literal["default"] = "default"


class FileKeySource(BaseModel):
    kind: Literal["file"] = "file"
    path: Path


class AgentKeySource(BaseModel):
    kind: Literal["agent"] = "agent"
    fingerprint: str
    comment: str = ""


SshKeySource = Annotated[
    DefaultKeySource | FileKeySource | AgentKeySource, Field(discriminator="kind")
]


class SshConfig(BaseModel):
    kind: Literal["ssh"] = "ssh"
    auth_method: SshAuthMethod = SshAuthMethod.password
    key_source: SshKeySource = Field(default_factory=DefaultKeySource)
    identities_only: bool = False
    proxy_jump: str | None = None
    jump_host_id: UUID | None = None
    use_control_master: bool = False
    agent_forwarding: bool = False
    startup_command: str | None = None
    # Insertion order is preserved and emitted as-is.
    custom_options: dict[str, str] = Field(default_factory=dict)

    @property
    def key_path(self) -> Path | None:
        if isinstance(self.key_source, FileKeySource):
            return self.key_source.path
        return None

    def use_key_file(self, path: Path) -> None:
        self.key_source = FileKeySource(path=path)
        self.auth_method = SshAuthMethod.public_key


# --- RDP -------------------------------------------------------------------


class RdpGateway(BaseModel):
    hostname: str
    port: int = Field(default=443, ge=1, le=65535)
    username: str | None = None


class RdpConfig(BaseModel):
    kind: Literal["rdp"] = "rdp"
    client_mode: ClientMode = ClientMode.embedded
    performance_mode: PerformanceMode = PerformanceMode.balanced
    resolution: Resolution | None = None
    color_depth: int | None = None
    audio_redirect: bool = False
    gateway: RdpGateway | None = None
    shared_folders: list[SharedFolder] = Field(default_factory=list)
    custom_args: list[str] = Field(default_factory=list)


# --- VNC -------------------------------------------------------------------


class VncConfig(BaseModel):
    kind: Literal["vnc"] = "vnc"
    client_mode: ClientMode = ClientMode.embedded
    performance_mode: PerformanceMode = PerformanceMode.balanced
    encoding: str | None = None
    compression: int | None = Field(default=None, ge=0, le=9)
    quality: int | None = Field(default=None, ge=0, le=9)
    view_only: bool = False
    scaling: bool = True
    clipboard_enabled: bool = True
    custom_args: list[str] = Field(default_factory=list)


# --- SPICE -----------------------------------------------------------------


class SpiceImageCompression(str, Enum):
    auto = "auto"
    off = "off"
    glz = "glz"
    lz = "lz"
    quic = "quic"


class SpiceConfig(BaseModel):
    kind: Literal["spice"] = "spice"
    tls_enabled: bool = False
    ca_cert_path: Path | None = None
    skip_cert_verify: bool = False
    usb_redirection: bool = False
    clipboard_enabled: bool = True
    image_compression: SpiceImageCompression = SpiceImageCompression.auto
    shared_folders: list[SharedFolder] = Field(default_factory=list)


# --- Zero trust ------------------------------------------------------------


class ZeroTrustConfig(BaseModel):
    kind: Literal["zerotrust"] = "zerotrust"
    provider_config: ZeroTrustProviderConfig
    custom_args: list[str] = Field(default_factory=list)
    # Display-only; refreshed from the last built command line.
    detected_provider: str | None = None

    @property
    def provider(self) -> ZeroTrustProvider:
        return ZeroTrustProvider(self.provider_config.provider)


ProtocolConfig = Annotated[
    SshConfig | RdpConfig | VncConfig | SpiceConfig | ZeroTrustConfig,
    Field(discriminator="kind"),
]


def default_config_for(protocol: ProtocolType) -> SshConfig | RdpConfig | VncConfig | SpiceConfig:
    """Return a default protocol config for the plain (non zero-trust) protocols."""
    if protocol is ProtocolType.ssh:
        return SshConfig()
    if protocol is ProtocolType.rdp:
        return RdpConfig()
    if protocol is ProtocolType.vnc:
        return VncConfig()
    if protocol is ProtocolType.spice:
        return SpiceConfig()
    raise ConfigError(
        "protocol", "Zero Trust connections require an explicit provider configuration"
    )
