"""Tests for launch-command resolution of the direct protocols."""

from __future__ import annotations

from pathlib import Path

from connkit.models import (
    Connection,
    RdpConfig,
    RdpGateway,
    Resolution,
    SharedFolder,
    SpiceConfig,
    SshConfig,
    VncConfig,
)
from connkit.resolver import ConnectionCommand, resolve, resolve_with_detection, vnc_display


def _ssh(**kwargs: object) -> Connection:
    config = SshConfig()
    conn = Connection(name="db1", host="db1.example.com", protocol_config=config)
    for key, value in kwargs.items():
        setattr(conn, key, value)
    return conn


class TestSsh:
    def test_port_key_and_user(self) -> None:
        """Non-default port, key file and username render in a fixed order."""
        conn = _ssh(port=2222, username="alice")
        assert isinstance(conn.protocol_config, SshConfig)
        conn.protocol_config.use_key_file(Path("/home/alice/.ssh/id_ed25519"))

        command = resolve(conn)

        assert command.program == "ssh"
        assert command.args == [
            "-p",
            "2222",
            "-i",
            "/home/alice/.ssh/id_ed25519",
            "alice@db1.example.com",
        ]

    def test_default_port_omitted(self) -> None:
        """Port 22 produces no -p flag."""
        command = resolve(_ssh(port=22))
        assert "-p" not in command.args
        assert command.args == ["db1.example.com"]

    def test_full_option_order(self) -> None:
        """Jump host, control master, agent forwarding and options precede the target."""
        config = SshConfig(
            proxy_jump="bastion.example.com",
            use_control_master=True,
            agent_forwarding=True,
            custom_options={"ServerAliveInterval": "30", "Compression": "yes"},
            startup_command="tmux attach",
        )
        conn = Connection(
            name="db1",
            host="db1.example.com",
            port=2200,
            username="ops",
            protocol_config=config,
        )

        assert resolve(conn).args == [
            "-p",
            "2200",
            "-J",
            "bastion.example.com",
            "-o",
            "ControlMaster=auto",
            "-o",
            "ControlPersist=10m",
            "-A",
            "-o",
            "ServerAliveInterval=30",
            "-o",
            "Compression=yes",
            "ops@db1.example.com",
            "tmux attach",
        ]

    def test_resolve_is_pure(self) -> None:
        """Resolving twice yields equal commands and leaves the connection untouched."""
        conn = _ssh(port=2222, username="alice")
        before = conn.model_dump()
        assert resolve(conn) == resolve(conn)
        assert conn.model_dump() == before


class TestRdp:
    def test_display_and_audio_flags(self) -> None:
        """Resolution, colour depth and audio map to xfreerdp flags."""
        conn = Connection(
            name="win1",
            host="win1",
            port=3389,
            protocol_config=RdpConfig(
                resolution=Resolution(width=1920, height=1080),
                color_depth=32,
                audio_redirect=True,
            ),
        )

        command = resolve(conn)

        assert command.program == "xfreerdp"
        assert command.args[0] == "/v:win1:3389"
        for flag in ("/w:1920", "/h:1080", "/bpp:32", "/sound"):
            assert flag in command.args

    def test_credentials_gateway_and_drives(self) -> None:
        """User, domain, gateway and shared folders follow the server flag."""
        conn = Connection(
            name="win2",
            host="win2.corp",
            port=3390,
            username="admin",
            domain="CORP",
            protocol_config=RdpConfig(
                gateway=RdpGateway(hostname="gw.corp", username="gwuser"),
                shared_folders=[SharedFolder(local_path=Path("/srv/share"), share_name="share")],
                custom_args=["/cert:ignore"],
            ),
        )

        assert resolve(conn).args == [
            "/v:win2.corp:3390",
            "/u:admin",
            "/d:CORP",
            "/g:gw.corp:443",
            "/gu:gwuser",
            "/drive:share,/srv/share",
            "/cert:ignore",
        ]


class TestVnc:
    def test_display_number(self) -> None:
        """Port 5901 becomes display 1 in the final argument."""
        conn = Connection(name="vnc1", host="vnc1", port=5901, protocol_config=VncConfig())
        command = resolve(conn)
        assert command.program == "vncviewer"
        assert command.args[-1] == "vnc1:1"

    def test_low_port_passes_through(self) -> None:
        """Ports below 5900 are treated as display numbers already."""
        assert vnc_display(5900) == 0
        assert vnc_display(5905) == 5
        assert vnc_display(2) == 2

    def test_encoding_options_precede_destination(self) -> None:
        """Encoding, compression and quality flags come before host:display."""
        conn = Connection(
            name="vnc2",
            host="vnc2",
            port=5902,
            protocol_config=VncConfig(encoding="tight", compression=6, quality=8),
        )
        assert resolve(conn).args == [
            "-encoding",
            "tight",
            "-compresslevel",
            "6",
            "-quality",
            "8",
            "vnc2:2",
        ]


class TestSpice:
    def test_plain_uri(self) -> None:
        """Without TLS the spice:// scheme is used."""
        conn = Connection(name="vm", host="hv1", port=5930, protocol_config=SpiceConfig())
        command = resolve(conn)
        assert command.program == "remote-viewer"
        assert command.args == ["spice://hv1:5930"]

    def test_tls_and_extras(self) -> None:
        """TLS switches the scheme; CA file and USB redirection add flags."""
        conn = Connection(
            name="vm",
            host="hv1",
            port=5931,
            protocol_config=SpiceConfig(
                tls_enabled=True,
                ca_cert_path=Path("/etc/pki/ca.pem"),
                usb_redirection=True,
            ),
        )
        assert resolve(conn).args == [
            "spice+tls://hv1:5931",
            "--spice-ca-file=/etc/pki/ca.pem",
            "--spice-usbredir-redirect-on-connect=auto",
        ]


def test_detection_is_noop_for_direct_protocols() -> None:
    """Only zero-trust connections get a detected provider."""
    conn = Connection.new_ssh("db1", "db1.example.com")
    command, updated = resolve_with_detection(conn)
    assert command == ConnectionCommand("ssh", ["db1.example.com"])
    assert updated is conn


def test_command_line_renderings() -> None:
    """command_line joins plainly; shell_line quotes."""
    command = ConnectionCommand("ssh", ["db1", "tmux attach"])
    assert command.argv() == ["ssh", "db1", "tmux attach"]
    assert command.command_line() == "ssh db1 tmux attach"
    assert command.shell_line() == "ssh db1 'tmux attach'"
