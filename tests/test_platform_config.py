"""Tests for platform config and data path detection."""

from __future__ import annotations

import platform
from pathlib import Path
from typing import Any

from connkit.config import get_config_search_paths, get_platform_config_path, get_platform_data_dir


def test_get_platform_config_path_darwin(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Darwin")
    path = get_platform_config_path()
    assert path == (Path.home() / "Library" / "Application Support" / "connkit" / "config.toml")


def test_get_platform_config_path_linux(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", "/tmp/config")
    path = get_platform_config_path()
    assert path == Path("/tmp/config") / "connkit" / "config.toml"


def test_get_platform_config_path_linux_default(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)
    path = get_platform_config_path()
    assert path == Path.home() / ".config" / "connkit" / "config.toml"


def test_get_platform_config_path_windows(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Windows")
    monkeypatch.setenv("APPDATA", "C:/Users/Test/AppData/Roaming")
    path = get_platform_config_path()
    assert path == Path("C:/Users/Test/AppData/Roaming") / "connkit" / "config.toml"


def test_get_platform_data_dir_linux(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_DATA_HOME", "/tmp/data")
    assert get_platform_data_dir() == Path("/tmp/data") / "connkit"


def test_get_platform_data_dir_darwin(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Darwin")
    assert get_platform_data_dir() == Path.home() / "Library" / "Application Support" / "connkit"


def test_search_paths_prefer_working_directory(monkeypatch: Any) -> None:
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", "/tmp/config")
    assert get_config_search_paths() == [
        Path("./connkit.toml"),
        Path("/tmp/config") / "connkit" / "config.toml",
    ]
