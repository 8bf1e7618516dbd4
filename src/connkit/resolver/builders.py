"""Turn a Connection into the external client invocation.

Flag order is part of the contract: callers and tests compare argument lists exactly.
"""

from __future__ import annotations

import logging
from typing import Never, NoReturn

from connkit.errors import ConfigError
from connkit.models.connection import Connection
from connkit.models.protocol import (
    FileKeySource,
    RdpConfig,
    SpiceConfig,
    SshConfig,
    VncConfig,
    ZeroTrustConfig,
)
from connkit.resolver.command import ConnectionCommand
from connkit.resolver.detection import detect_provider
from connkit.resolver.zerotrust import build_zerotrust_command

logger = logging.getLogger(__name__)

SSH_DEFAULT_PORT = 22
VNC_BASE_PORT = 5900


def build_ssh_command(connection: Connection, config: SshConfig) -> ConnectionCommand:
    args: list[str] = []

    if connection.port != SSH_DEFAULT_PORT:
        args += ["-p", str(connection.port)]

    if isinstance(config.key_source, FileKeySource):
        args += ["-i", str(config.key_source.path)]

    if config.proxy_jump:
        args += ["-J", config.proxy_jump]

    if config.use_control_master:
        args += ["-o", "ControlMaster=auto", "-o", "ControlPersist=10m"]

    if config.agent_forwarding:
        args.append("-A")

    for key, value in config.custom_options.items():
        args += ["-o", f"{key}={value}"]

    if connection.username:
        args.append(f"{connection.username}@{connection.host}")
    else:
        args.append(connection.host)

    if config.startup_command:
        args.append(config.startup_command)

    return ConnectionCommand("ssh", args)


def build_rdp_command(connection: Connection, config: RdpConfig) -> ConnectionCommand:
    args = [f"/v:{connection.host}:{connection.port}"]

    if connection.username:
        args.append(f"/u:{connection.username}")
    if connection.domain:
        args.append(f"/d:{connection.domain}")

    if config.resolution is not None:
        args += [f"/w:{config.resolution.width}", f"/h:{config.resolution.height}"]

    if config.color_depth is not None:
        args.append(f"/bpp:{config.color_depth}")

    if config.audio_redirect:
        args.append("/sound")

    if config.gateway is not None:
        args.append(f"/g:{config.gateway.hostname}:{config.gateway.port}")
        if config.gateway.username:
            args.append(f"/gu:{config.gateway.username}")

    for folder in config.shared_folders:
        args.append(f"/drive:{folder.share_name},{folder.local_path}")

    args += config.custom_args
    return ConnectionCommand("xfreerdp", args)


def vnc_display(port: int) -> int:
    """Map a TCP port to a VNC display number (5901 -> 1); lower ports pass through."""
    return port - VNC_BASE_PORT if port >= VNC_BASE_PORT else port


def build_vnc_command(connection: Connection, config: VncConfig) -> ConnectionCommand:
    args: list[str] = []

    if config.encoding:
        args += ["-encoding", config.encoding]
    if config.compression is not None:
        args += ["-compresslevel", str(config.compression)]
    if config.quality is not None:
        args += ["-quality", str(config.quality)]

    args += config.custom_args
    args.append(f"{connection.host}:{vnc_display(connection.port)}")
    return ConnectionCommand("vncviewer", args)


def build_spice_command(connection: Connection, config: SpiceConfig) -> ConnectionCommand:
    scheme = "spice+tls" if config.tls_enabled else "spice"
    args = [f"{scheme}://{connection.host}:{connection.port}"]

    if config.ca_cert_path is not None:
        args.append(f"--spice-ca-file={config.ca_cert_path}")

    if config.usb_redirection:
        args.append("--spice-usbredir-redirect-on-connect=auto")

    for folder in config.shared_folders:
        args.append(f"--spice-shared-dir={folder.local_path}")

    return ConnectionCommand("remote-viewer", args)


def _unsupported_protocol(config: Never) -> NoReturn:
    raise ConfigError("protocol_config", f"Unsupported protocol configuration: {config!r}")


def resolve(connection: Connection) -> ConnectionCommand:
    """Build the launch command for a connection. Pure: no I/O, no mutation."""
    config = connection.protocol_config
    match config:
        case SshConfig():
            return build_ssh_command(connection, config)
        case RdpConfig():
            return build_rdp_command(connection, config)
        case VncConfig():
            return build_vnc_command(connection, config)
        case SpiceConfig():
            return build_spice_command(connection, config)
        case ZeroTrustConfig():
            return build_zerotrust_command(connection, config)
        case _:
            _unsupported_protocol(config)


def resolve_with_detection(connection: Connection) -> tuple[ConnectionCommand, Connection]:
    """Resolve and return a copy of the connection with ``detected_provider`` refreshed.

    The provider key is recomputed from the assembled command line rather than taken from
    the provider tag, so a generic template that wraps e.g. ``aws ssm`` reports ``aws``.
    """
    command = resolve(connection)
    config = connection.protocol_config
    if not isinstance(config, ZeroTrustConfig):
        return command, connection

    detected = detect_provider(command.command_line())
    logger.debug("Detected provider %s for connection %s", detected, connection.name)
    updated_config = config.model_copy(update={"detected_provider": detected})
    return command, connection.model_copy(update={"protocol_config": updated_config})
