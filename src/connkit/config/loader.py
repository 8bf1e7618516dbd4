"""Config loader for connkit settings.

Search order: ./connkit.toml -> platform config
Uses stdlib tomllib (Python 3.11+).
"""

from __future__ import annotations

import os
import platform
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from connkit.config.settings import ExecMode, LogLevel, Settings


def get_platform_config_path() -> Path:
    """Return the platform-specific config.toml path."""
    system = platform.system().lower()
    if system == "darwin":
        return Path.home() / "Library" / "Application Support" / "connkit" / "config.toml"
    if system == "windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "connkit" / "config.toml"
        return Path.home() / "AppData" / "Roaming" / "connkit" / "config.toml"

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / "connkit" / "config.toml"
    return Path.home() / ".config" / "connkit" / "config.toml"


def get_config_search_paths() -> list[Path]:
    """Return config search paths in priority order."""
    return [
        Path("./connkit.toml"),
        get_platform_config_path(),
    ]


def _find_config_file() -> Path | None:
    """Find the first existing config file in search order."""
    for path in get_config_search_paths():
        if path.exists():
            return path
    return None


def _parse_toml(path: Path) -> dict[str, Any]:
    """Parse a TOML file and return its contents."""
    with path.open("rb") as f:
        return tomllib.load(f)


def resolve_config_path(config_path: Path | None = None) -> Path:
    """Resolve the config path used for display or creation."""
    if config_path:
        return config_path
    return _find_config_file() or get_platform_config_path()


def merge_cli_overrides(settings: Settings, overrides: Mapping[str, Any]) -> Settings:
    """Apply CLI overrides to loaded settings."""
    if "store_path" in overrides and overrides["store_path"] is not None:
        settings.store_path = Path(overrides["store_path"]).expanduser()

    if "exec_mode" in overrides and overrides["exec_mode"] is not None:
        settings.exec_mode = ExecMode(overrides["exec_mode"])

    if "log_level" in overrides and overrides["log_level"] is not None:
        settings.log_level = LogLevel(str(overrides["log_level"]).upper())

    return settings


def load_settings(
    config_path: Path | None = None, *, cli_overrides: Mapping[str, Any] | None = None
) -> Settings:
    """Load application settings from TOML file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.
        cli_overrides: Optional CLI overrides to apply after loading.

    Returns:
        Settings with loaded or default values.

    Raises:
        FileNotFoundError: If an explicit config_path is provided but does not exist.
        RuntimeError: If the config file cannot be parsed.
    """
    if config_path:
        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found at explicitly provided path: {config_path}. "
                "Ensure the file exists or omit the argument to use default search paths."
            )
        path: Path = config_path
    else:
        found_path = _find_config_file()
        if found_path is None:
            settings = Settings()
            if cli_overrides:
                settings = merge_cli_overrides(settings, cli_overrides)
            return settings
        path = found_path

    try:
        data = _parse_toml(path)
    except Exception as e:
        raise RuntimeError(f"Failed to parse configuration file at {path}: {e}") from e

    settings_data: dict[str, Any] = {}

    if "store_path" in data:
        store_path = Path(data["store_path"]).expanduser()
        # Resolve relative paths against the config file location
        if not store_path.is_absolute():
            store_path = path.parent / store_path
        settings_data["store_path"] = store_path

    for key in ("exec_mode", "log_level"):
        if key in data:
            settings_data[key] = data[key]

    # Settings.__init__ applies environment overrides; model_validate would not.
    settings = Settings(**settings_data)
    if cli_overrides:
        settings = merge_cli_overrides(settings, cli_overrides)
    return settings
