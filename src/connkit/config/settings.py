from __future__ import annotations

import os
import platform
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ExecMode(str, Enum):
    replace = "replace"
    spawn = "spawn"


class LogLevel(str, Enum):
    debug = "DEBUG"
    info = "INFO"
    warning = "WARNING"
    error = "ERROR"


def get_platform_data_dir() -> Path:
    """Return the platform-specific directory holding the connection store."""
    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support" / "connkit"
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "connkit"
        return Path.home() / "AppData" / "Roaming" / "connkit"

    xdg_data = os.environ.get("XDG_DATA_HOME")
    if xdg_data:
        return Path(xdg_data) / "connkit"
    return Path.home() / ".local" / "share" / "connkit"


def _default_store_path() -> Path:
    return get_platform_data_dir() / "store.json"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    store_path: Path = Field(default_factory=_default_store_path)
    exec_mode: ExecMode = ExecMode.replace
    log_level: LogLevel = LogLevel.warning

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value

    def __init__(self, **data: Any) -> None:
        super().__init__(**data)
        # Manually override from environment variables
        if "CONNKIT_STORE_PATH" in os.environ:
            self.store_path = Path(os.environ["CONNKIT_STORE_PATH"]).expanduser()
        if "CONNKIT_EXEC_MODE" in os.environ:
            self.exec_mode = ExecMode(os.environ["CONNKIT_EXEC_MODE"].lower())
