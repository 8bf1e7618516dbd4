"""Tests for the OpenSSH client config importer."""

from __future__ import annotations

import textwrap
from pathlib import Path

from connkit.importers import ImportResult, SshConfigImporter
from connkit.importers.ssh_config import parse_line
from connkit.models import SshConfig


def _import(text: str) -> ImportResult:
    return SshConfigImporter().import_text(textwrap.dedent(text), source="config")


def test_wildcard_host_is_skipped() -> None:
    """Wildcard patterns produce no connection and one skipped record."""
    result = _import("Host *.internal\n    User ops\n")

    assert result.connections == []
    assert len(result.skipped) == 1
    assert result.skipped[0].identifier == "*.internal"
    assert result.skipped[0].reason == "wildcard pattern unsupported"


def test_host_block_fields() -> None:
    """Handled directives map onto the SSH config; the rest become custom options."""
    result = _import(
        """
        Host db1
            HostName db1.example.com
            Port 2222
            User alice
            IdentityFile /home/alice/.ssh/id_ed25519
            IdentitiesOnly yes
            ProxyJump bastion
            ControlMaster auto
            ForwardAgent yes
            ServerAliveInterval 30
        """
    )

    assert len(result.connections) == 1
    conn = result.connections[0]
    assert conn.name == "db1"
    assert conn.host == "db1.example.com"
    assert conn.port == 2222
    assert conn.username == "alice"

    config = conn.protocol_config
    assert isinstance(config, SshConfig)
    assert config.key_path == Path("/home/alice/.ssh/id_ed25519")
    assert config.identities_only
    assert config.proxy_jump == "bastion"
    assert config.use_control_master
    assert config.agent_forwarding
    assert config.custom_options == {"ServerAliveInterval": "30"}


def test_multiple_aliases_and_mixed_patterns() -> None:
    """Each concrete alias becomes a connection; patterns on the same line are skipped."""
    result = _import(
        """
        Host web1 web2 web-*
            HostName 10.0.0.5
        """
    )

    assert [c.name for c in result.connections] == ["web1", "web2"]
    assert all(c.host == "10.0.0.5" for c in result.connections)
    assert [s.identifier for s in result.skipped] == ["web-*"]


def test_host_defaults_to_alias() -> None:
    """Without HostName the alias is the host and the port is 22."""
    result = _import("Host plain\n")
    conn = result.connections[0]
    assert conn.host == "plain"
    assert conn.port == 22
    assert conn.username is None


def test_first_value_wins() -> None:
    """Repeated directives keep their first value."""
    result = _import(
        """
        Host twice
            Port 2200
            Port 2300
        """
    )
    assert result.connections[0].port == 2200


def test_match_block_ends_host() -> None:
    """Directives after Match do not leak into the preceding host."""
    result = _import(
        """
        Host a
            User alice
        Match host b
            User bob
        """
    )
    assert len(result.connections) == 1
    assert result.connections[0].username == "alice"


def test_equals_syntax_and_comments() -> None:
    """Key=Value lines and comments are accepted."""
    result = _import(
        """
        # personal hosts
        Host=box
            HostName=box.lan
            Port=2022
        """
    )
    conn = result.connections[0]
    assert conn.host == "box.lan"
    assert conn.port == 2022


def test_invalid_line_reported() -> None:
    """A directive without a value is skipped with its line number."""
    result = _import("Host ok\n    HostName\n")
    assert len(result.connections) == 1
    assert result.skipped[0].identifier == "line 2"
    assert result.skipped[0].reason == "Invalid syntax"


def test_parse_line() -> None:
    """Both separators are understood and quotes are stripped."""
    assert parse_line("User alice") == ("User", "alice")
    assert parse_line("User=alice") == ("User", "alice")
    assert parse_line('IdentityFile "/path with space/key"') == (
        "IdentityFile",
        "/path with space/key",
    )
    assert parse_line("Port") is None
