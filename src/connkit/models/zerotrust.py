"""Provider payloads for zero-trust (identity-aware proxy) connections."""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal

from pydantic import BaseModel, Field


class ZeroTrustProvider(str, Enum):
    aws_ssm = "aws_ssm"
    gcp_iap = "gcp_iap"
    azure_bastion = "azure_bastion"
    azure_ssh = "azure_ssh"
    oci_bastion = "oci_bastion"
    cloudflare_access = "cloudflare_access"
    teleport = "teleport"
    tailscale_ssh = "tailscale_ssh"
    boundary = "boundary"
    generic = "generic"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[ZeroTrustProvider, str] = {
    ZeroTrustProvider.aws_ssm: "AWS Session Manager",
    ZeroTrustProvider.gcp_iap: "GCP IAP Tunnel",
    ZeroTrustProvider.azure_bastion: "Azure Bastion",
    ZeroTrustProvider.azure_ssh: "Azure SSH (AAD)",
    ZeroTrustProvider.oci_bastion: "OCI Bastion",
    ZeroTrustProvider.cloudflare_access: "Cloudflare Access",
    ZeroTrustProvider.teleport: "Teleport",
    ZeroTrustProvider.tailscale_ssh: "Tailscale SSH",
    ZeroTrustProvider.boundary: "HashiCorp Boundary",
    ZeroTrustProvider.generic: "Generic Command",
}


class AwsSsmConfig(BaseModel):
    provider: Literal["aws_ssm"] = "aws_ssm"
    target: str
    profile: str = "default"
    region: str | None = None


class GcpIapConfig(BaseModel):
    provider: Literal["gcp_iap"] = "gcp_iap"
    instance: str
    zone: str
    project: str | None = None


class AzureBastionConfig(BaseModel):
    provider: Literal["azure_bastion"] = "azure_bastion"
    target_resource_id: str
    resource_group: str
    bastion_name: str


class AzureSshConfig(BaseModel):
    provider: Literal["azure_ssh"] = "azure_ssh"
    vm_name: str
    resource_group: str


class OciBastionConfig(BaseModel):
    provider: Literal["oci_bastion"] = "oci_bastion"
    bastion_id: str
    target_resource_id: str
    target_private_ip: str
    ssh_public_key_file: Path = Field(default_factory=lambda: Path("~/.ssh/id_rsa.pub"))
    session_ttl: int = Field(default=1800, ge=1)


class CloudflareAccessConfig(BaseModel):
    provider: Literal["cloudflare_access"] = "cloudflare_access"
    hostname: str
    username: str | None = None


class TeleportConfig(BaseModel):
    provider: Literal["teleport"] = "teleport"
    host: str
    username: str | None = None
    cluster: str | None = None


class TailscaleSshConfig(BaseModel):
    provider: Literal["tailscale_ssh"] = "tailscale_ssh"
    host: str
    username: str | None = None


class BoundaryConfig(BaseModel):
    provider: Literal["boundary"] = "boundary"
    target: str
    addr: str | None = None


class GenericZeroTrustConfig(BaseModel):
    """Arbitrary command run through ``sh -c``.

    ``%h``, ``%p`` and ``%u`` are replaced with the connection's host, port and username.
    """

    provider: Literal["generic"] = "generic"
    command_template: str


ZeroTrustProviderConfig = Annotated[
    AwsSsmConfig
    | GcpIapConfig
    | AzureBastionConfig
    | AzureSshConfig
    | OciBastionConfig
    | CloudflareAccessConfig
    | TeleportConfig
    | TailscaleSshConfig
    | BoundaryConfig
    | GenericZeroTrustConfig,
    Field(discriminator="provider"),
]
