"""Per-connection extras: custom properties, tasks, Wake-on-LAN and session logging."""

from __future__ import annotations

import re
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field, field_validator

_MAC_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^([0-9a-f]{2}[:-]){5}[0-9a-f]{2}$", re.IGNORECASE
)


class PropertyType(str, Enum):
    text = "text"
    url = "url"
    protected = "protected"


class CustomProperty(BaseModel):
    name: str
    property_type: PropertyType = PropertyType.text
    value: str = ""

    @property
    def is_protected(self) -> bool:
        return self.property_type is PropertyType.protected


class ConnectionTask(BaseModel):
    """Shell command run before connecting or after disconnecting."""

    command: str
    timeout_secs: int | None = Field(default=None, ge=1)
    abort_on_failure: bool = False


class WolConfig(BaseModel):
    mac_address: str
    broadcast_address: str = "255.255.255.255"
    port: int = Field(default=9, ge=1, le=65535)
    wait_seconds: int = Field(default=30, ge=0)

    @field_validator("mac_address")
    @classmethod
    def _check_mac(cls, value: str) -> str:
        if not _MAC_PATTERN.match(value):
            raise ValueError(f"invalid MAC address: {value!r}")
        return value.lower().replace("-", ":")


class LogConfig(BaseModel):
    enabled: bool = False
    path_template: str = "${HOME}/.local/share/connkit/logs/${connection_name}_${date}.log"
    timestamp_format: str = "%Y-%m-%d %H:%M:%S"
    max_size_mb: int = Field(default=10, ge=0)
    retention_days: int = Field(default=30, ge=0)
