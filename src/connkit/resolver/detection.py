"""Provider detection from an assembled command line.

Used to fill the display-only ``detected_provider`` key of zero-trust connections.
"""

from __future__ import annotations

import re
from typing import Final, Literal

DetectedProvider = Literal[
    "aws", "gcloud", "azure", "oci", "cloudflare", "teleport", "tailscale", "boundary", "generic"
]

_EC2_INSTANCE_ID: Final[re.Pattern[str]] = re.compile(r"i-[0-9a-f]{8}")
_MANAGED_INSTANCE_ID: Final[re.Pattern[str]] = re.compile(r"mi-[0-9a-f]{17}")


def _contains_tool(cmd: str, tool: str) -> bool:
    return (
        cmd.startswith(f"{tool} ")
        or f"/{tool} " in cmd
        or f" {tool} " in cmd
        or cmd.endswith(f"/{tool}")
        or cmd.endswith(f" {tool}")
    )


def _contains_ec2_instance_id(cmd: str) -> bool:
    if "--target i-" in cmd or "--target=i-" in cmd:
        return True
    return _EC2_INSTANCE_ID.search(cmd) is not None


def _contains_managed_instance_id(cmd: str) -> bool:
    if "--target mi-" in cmd or "--target=mi-" in cmd:
        return True
    return _MANAGED_INSTANCE_ID.search(cmd) is not None


def detect_provider(command: str) -> DetectedProvider:
    """Classify a command line by the cloud tool it invokes.

    Order matters: tailscale, teleport, boundary and cloudflare are checked before
    azure because their arguments may contain a bare ``az`` token.
    """
    cmd = command.lower()

    if (
        _contains_tool(cmd, "aws")
        or "aws ssm" in cmd
        or "aws-ssm" in cmd
        or "ssm start-session" in cmd
        or "ssm-plugin" in cmd
        or _contains_ec2_instance_id(cmd)
        or _contains_managed_instance_id(cmd)
    ):
        return "aws"

    if (
        _contains_tool(cmd, "gcloud")
        or "iap-tunnel" in cmd
        or "compute ssh" in cmd
        or "--tunnel-through-iap" in cmd
    ):
        return "gcloud"

    if _contains_tool(cmd, "tailscale"):
        return "tailscale"

    if _contains_tool(cmd, "tsh") or "teleport" in cmd:
        return "teleport"

    if _contains_tool(cmd, "boundary") or "hashicorp" in cmd:
        return "boundary"

    if _contains_tool(cmd, "cloudflared") or "cloudflare" in cmd:
        return "cloudflare"

    if _contains_tool(cmd, "az") or "azure" in cmd or "bastion ssh" in cmd:
        return "azure"

    if _contains_tool(cmd, "oci") or "oracle" in cmd:
        return "oci"

    return "generic"
