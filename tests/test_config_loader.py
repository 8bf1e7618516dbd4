"""Tests for config loader."""

from __future__ import annotations

import platform
from pathlib import Path
from textwrap import dedent

import pytest

from connkit.config import ExecMode, LogLevel, Settings, load_settings, merge_cli_overrides


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's own config and environment out of these tests."""
    monkeypatch.setattr(platform, "system", lambda: "Linux")
    monkeypatch.delenv("CONNKIT_STORE_PATH", raising=False)
    monkeypatch.delenv("CONNKIT_EXEC_MODE", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "xdg-data"))
    monkeypatch.chdir(tmp_path)


def test_load_settings_no_file(tmp_path: Path) -> None:
    """Loading with no config file returns defaults."""
    settings = load_settings()

    assert settings.exec_mode is ExecMode.replace
    assert settings.log_level is LogLevel.warning
    assert settings.store_path == tmp_path / "xdg-data" / "connkit" / "store.json"


def test_load_settings_from_toml(tmp_path: Path) -> None:
    """Loading from a TOML file parses correctly."""
    config_file = tmp_path / "connkit.toml"
    config_file.write_text(
        dedent("""
        store_path = "/abs/path/to/store.json"
        exec_mode = "spawn"
        log_level = "info"
        """)
    )

    settings = load_settings(config_path=config_file)

    assert settings.store_path == Path("/abs/path/to/store.json")
    assert settings.exec_mode is ExecMode.spawn
    assert settings.log_level is LogLevel.info


def test_load_settings_relative_store_path(tmp_path: Path) -> None:
    """Relative store_path is resolved against config file location."""
    config_file = tmp_path / "subdir" / "connkit.toml"
    config_file.parent.mkdir()
    config_file.write_text('store_path = "./store.json"')

    settings = load_settings(config_path=config_file)

    assert settings.store_path == config_file.parent / "store.json"


def test_load_settings_finds_local_file(tmp_path: Path) -> None:
    """./connkit.toml in the working directory is picked up automatically."""
    (tmp_path / "connkit.toml").write_text('exec_mode = "spawn"')

    assert load_settings().exec_mode is ExecMode.spawn


def test_load_settings_missing_explicit_path(tmp_path: Path) -> None:
    """An explicit path that does not exist is an error."""
    with pytest.raises(FileNotFoundError, match="explicitly provided path"):
        load_settings(config_path=tmp_path / "nope.toml")


def test_load_settings_invalid_toml(tmp_path: Path) -> None:
    """Malformed TOML raises a RuntimeError naming the file."""
    config_file = tmp_path / "connkit.toml"
    config_file.write_text("store_path = [unterminated")

    with pytest.raises(RuntimeError, match="Failed to parse configuration file"):
        load_settings(config_path=config_file)


def test_env_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Environment variables win over the config file."""
    config_file = tmp_path / "connkit.toml"
    config_file.write_text('exec_mode = "replace"\nstore_path = "/from/file.json"')
    monkeypatch.setenv("CONNKIT_EXEC_MODE", "SPAWN")
    monkeypatch.setenv("CONNKIT_STORE_PATH", "/from/env.json")

    settings = load_settings(config_path=config_file)

    assert settings.exec_mode is ExecMode.spawn
    assert settings.store_path == Path("/from/env.json")


def test_cli_overrides_win(tmp_path: Path) -> None:
    """CLI overrides are applied last."""
    config_file = tmp_path / "connkit.toml"
    config_file.write_text('log_level = "ERROR"')

    settings = load_settings(
        config_path=config_file,
        cli_overrides={"store_path": tmp_path / "cli.json", "log_level": "debug"},
    )

    assert settings.store_path == tmp_path / "cli.json"
    assert settings.log_level is LogLevel.debug


def test_merge_cli_overrides_ignores_none() -> None:
    """None-valued overrides leave settings unchanged."""
    settings = Settings(exec_mode=ExecMode.spawn)
    merged = merge_cli_overrides(settings, {"exec_mode": None, "store_path": None})
    assert merged.exec_mode is ExecMode.spawn


def test_unknown_setting_rejected() -> None:
    """Unknown keys in Settings are rejected."""
    with pytest.raises(ValueError):
        Settings(unknown_key=1)  # type: ignore[call-arg]
