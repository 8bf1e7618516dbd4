"""Command builders for the zero-trust providers.

Missing provider fields are not rejected here; the vendor CLI reports them at run time.
"""

from __future__ import annotations

from typing import Never, NoReturn

from connkit.errors import ConfigError
from connkit.models.connection import Connection
from connkit.models.protocol import ZeroTrustConfig
from connkit.models.zerotrust import (
    AwsSsmConfig,
    AzureBastionConfig,
    AzureSshConfig,
    BoundaryConfig,
    CloudflareAccessConfig,
    GcpIapConfig,
    GenericZeroTrustConfig,
    OciBastionConfig,
    TailscaleSshConfig,
    TeleportConfig,
)
from connkit.resolver.command import ConnectionCommand


def _user_at_host(username: str | None, host: str) -> str:
    return f"{username}@{host}" if username else host


def _aws_ssm(cfg: AwsSsmConfig) -> ConnectionCommand:
    args = ["ssm", "start-session", "--target", cfg.target]
    if cfg.profile and cfg.profile != "default":
        args += ["--profile", cfg.profile]
    if cfg.region:
        args += ["--region", cfg.region]
    return ConnectionCommand("aws", args)


def _gcp_iap(cfg: GcpIapConfig) -> ConnectionCommand:
    args = ["compute", "ssh", cfg.instance, "--zone", cfg.zone, "--tunnel-through-iap"]
    if cfg.project:
        args += ["--project", cfg.project]
    return ConnectionCommand("gcloud", args)


def _azure_bastion(cfg: AzureBastionConfig) -> ConnectionCommand:
    args = [
        "network",
        "bastion",
        "ssh",
        "--name",
        cfg.bastion_name,
        "--resource-group",
        cfg.resource_group,
        "--target-resource-id",
        cfg.target_resource_id,
        "--auth-type",
        "AAD",
    ]
    return ConnectionCommand("az", args)


def _azure_ssh(cfg: AzureSshConfig) -> ConnectionCommand:
    args = ["ssh", "vm", "--name", cfg.vm_name, "--resource-group", cfg.resource_group]
    return ConnectionCommand("az", args)


def _oci_bastion(cfg: OciBastionConfig) -> ConnectionCommand:
    args = [
        "bastion",
        "session",
        "create-managed-ssh",
        "--bastion-id",
        cfg.bastion_id,
        "--target-resource-id",
        cfg.target_resource_id,
        "--target-private-ip",
        cfg.target_private_ip,
        "--ssh-public-key-file",
        str(cfg.ssh_public_key_file),
        "--session-ttl",
        str(cfg.session_ttl),
    ]
    return ConnectionCommand("oci", args)


def _cloudflare(cfg: CloudflareAccessConfig, connection: Connection) -> ConnectionCommand:
    args = ["access", "ssh", "--hostname", cfg.hostname]
    username = cfg.username or connection.username
    if username:
        args += ["--user", username]
    return ConnectionCommand("cloudflared", args)


def _teleport(cfg: TeleportConfig, connection: Connection) -> ConnectionCommand:
    args = ["ssh"]
    if cfg.cluster:
        args += ["--cluster", cfg.cluster]
    args.append(_user_at_host(cfg.username or connection.username, cfg.host))
    return ConnectionCommand("tsh", args)


def _tailscale(cfg: TailscaleSshConfig, connection: Connection) -> ConnectionCommand:
    username = cfg.username or connection.username
    return ConnectionCommand("tailscale", ["ssh", _user_at_host(username, cfg.host)])


def _boundary(cfg: BoundaryConfig) -> ConnectionCommand:
    args = ["connect", "ssh", "-target-id", cfg.target]
    if cfg.addr:
        args += ["-addr", cfg.addr]
    return ConnectionCommand("boundary", args)


def expand_template(template: str, connection: Connection) -> str:
    """Substitute ``%h``, ``%p`` and ``%u``; ``%%`` yields a literal percent sign."""
    replacements = {
        "h": connection.host,
        "p": str(connection.port),
        "u": connection.username or "",
        "%": "%",
    }
    out: list[str] = []
    i = 0
    while i < len(template):
        char = template[i]
        if char == "%" and i + 1 < len(template) and template[i + 1] in replacements:
            out.append(replacements[template[i + 1]])
            i += 2
            continue
        out.append(char)
        i += 1
    return "".join(out)


def _generic(cfg: GenericZeroTrustConfig, connection: Connection) -> ConnectionCommand:
    return ConnectionCommand("sh", ["-c", expand_template(cfg.command_template, connection)])


def _unsupported_provider(cfg: Never) -> NoReturn:
    raise ConfigError("provider_config", f"Unsupported zero-trust provider: {cfg!r}")


def build_zerotrust_command(connection: Connection, config: ZeroTrustConfig) -> ConnectionCommand:
    """Build the provider command and append the connection's custom arguments."""
    cfg = config.provider_config
    match cfg:
        case AwsSsmConfig():
            command = _aws_ssm(cfg)
        case GcpIapConfig():
            command = _gcp_iap(cfg)
        case AzureBastionConfig():
            command = _azure_bastion(cfg)
        case AzureSshConfig():
            command = _azure_ssh(cfg)
        case OciBastionConfig():
            command = _oci_bastion(cfg)
        case CloudflareAccessConfig():
            command = _cloudflare(cfg, connection)
        case TeleportConfig():
            command = _teleport(cfg, connection)
        case TailscaleSshConfig():
            command = _tailscale(cfg, connection)
        case BoundaryConfig():
            command = _boundary(cfg)
        case GenericZeroTrustConfig():
            command = _generic(cfg, connection)
        case _:
            _unsupported_provider(cfg)

    return ConnectionCommand(command.program, [*command.args, *config.custom_args])
