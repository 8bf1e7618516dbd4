from connkit.resolver.builders import (
    build_rdp_command,
    build_spice_command,
    build_ssh_command,
    build_vnc_command,
    resolve,
    resolve_with_detection,
    vnc_display,
)
from connkit.resolver.command import ConnectionCommand
from connkit.resolver.detection import DetectedProvider, detect_provider
from connkit.resolver.zerotrust import build_zerotrust_command, expand_template

__all__ = [
    "ConnectionCommand",
    "DetectedProvider",
    "build_rdp_command",
    "build_spice_command",
    "build_ssh_command",
    "build_vnc_command",
    "build_zerotrust_command",
    "detect_provider",
    "expand_template",
    "resolve",
    "resolve_with_detection",
    "vnc_display",
]
