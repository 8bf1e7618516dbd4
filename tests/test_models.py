"""Tests for the connection model and validation."""

from __future__ import annotations

from pathlib import Path
from uuid import uuid4

import pytest
from pydantic import ValidationError

from connkit.errors import ConfigError
from connkit.models import (
    AwsSsmConfig,
    Cluster,
    Connection,
    ConnectionGroup,
    ConnectionTemplate,
    CustomProperty,
    FileKeySource,
    PropertyType,
    ProtocolType,
    RdpConfig,
    Resolution,
    SshAuthMethod,
    SshConfig,
    VncConfig,
    WolConfig,
    ZeroTrustConfig,
    default_config_for,
    validate_connection,
    validate_group,
    validate_group_hierarchy,
)


class TestProtocolType:
    def test_default_ports(self) -> None:
        """Each protocol has its conventional port; zero trust has none."""
        assert ProtocolType.ssh.default_port == 22
        assert ProtocolType.rdp.default_port == 3389
        assert ProtocolType.vnc.default_port == 5900
        assert ProtocolType.spice.default_port == 5900
        assert ProtocolType.zerotrust.default_port == 0

    def test_parse_is_case_insensitive(self) -> None:
        """Protocol names parse regardless of case, with zt/zero-trust aliases."""
        assert ProtocolType.parse("SSH") is ProtocolType.ssh
        assert ProtocolType.parse(" rdp ") is ProtocolType.rdp
        assert ProtocolType.parse("zero-trust") is ProtocolType.zerotrust
        assert ProtocolType.parse("zt") is ProtocolType.zerotrust

    def test_parse_unknown_raises_config_error(self) -> None:
        """Unknown protocol strings raise ConfigError naming the field."""
        with pytest.raises(ConfigError) as exc_info:
            ProtocolType.parse("telnet")
        assert exc_info.value.field == "protocol"
        assert "telnet" in exc_info.value.reason

    def test_default_config_for_zerotrust_raises(self) -> None:
        """Zero trust needs an explicit provider payload."""
        with pytest.raises(ConfigError):
            default_config_for(ProtocolType.zerotrust)
        assert isinstance(default_config_for(ProtocolType.vnc), VncConfig)


class TestConnection:
    def test_protocol_follows_config(self) -> None:
        """The protocol tag is derived from the config variant."""
        conn = Connection(name="win", host="win1", port=3389, protocol_config=RdpConfig())
        assert conn.protocol is ProtocolType.rdp

        conn.protocol_config = SshConfig()
        assert conn.protocol is ProtocolType.ssh

    def test_constructors_use_default_ports(self) -> None:
        """new_* helpers pick the protocol's default port."""
        assert Connection.new_ssh("a", "h").port == 22
        assert Connection.new_rdp("a", "h").port == 3389
        assert Connection.new_vnc("a", "h").port == 5900
        assert Connection.new_spice("a", "h").port == 5900

    def test_ids_are_unique(self) -> None:
        """Every connection gets its own id."""
        assert Connection.new_ssh("a", "h").id != Connection.new_ssh("a", "h").id

    def test_port_out_of_range_rejected(self) -> None:
        """Ports are 16-bit."""
        with pytest.raises(ValidationError):
            Connection(name="x", host="h", port=70000)

    def test_protocol_config_discriminator_from_dict(self) -> None:
        """A dict payload is parsed into the variant named by ``kind``."""
        conn = Connection.model_validate(
            {
                "name": "v",
                "host": "vnc1",
                "port": 5901,
                "protocol_config": {"kind": "vnc", "quality": 7},
            }
        )
        assert isinstance(conn.protocol_config, VncConfig)
        assert conn.protocol_config.quality == 7

    def test_vnc_quality_constrained(self) -> None:
        """VNC quality must stay within 0..9."""
        with pytest.raises(ValidationError):
            VncConfig(quality=10)

    def test_use_key_file_switches_auth(self) -> None:
        """Setting a key file selects public-key auth and exposes key_path."""
        config = SshConfig()
        assert config.key_path is None
        config.use_key_file(Path("/home/alice/.ssh/id_ed25519"))
        assert isinstance(config.key_source, FileKeySource)
        assert config.auth_method is SshAuthMethod.public_key
        assert config.key_path == Path("/home/alice/.ssh/id_ed25519")

    def test_tags_are_deduplicated(self) -> None:
        """add_tag ignores tags that are already present."""
        conn = Connection.new_ssh("a", "h")
        conn.add_tag("prod")
        conn.add_tag("prod")
        assert conn.tags == ["prod"]

    def test_custom_property_replace_by_name(self) -> None:
        """set_custom_property replaces an existing property with the same name."""
        conn = Connection.new_ssh("a", "h")
        conn.set_custom_property(CustomProperty(name="ticket", value="OPS-1"))
        conn.set_custom_property(
            CustomProperty(name="ticket", property_type=PropertyType.protected, value="x")
        )
        prop = conn.get_custom_property("ticket")
        assert prop is not None
        assert prop.is_protected
        assert len(conn.custom_properties) == 1

    def test_touch_moves_updated_at(self) -> None:
        """touch refreshes the update timestamp."""
        conn = Connection.new_ssh("a", "h")
        before = conn.updated_at
        conn.touch()
        assert conn.updated_at >= before


class TestAutomation:
    def test_wol_mac_is_normalized(self) -> None:
        """MAC addresses are lowercased with colon separators."""
        wol = WolConfig(mac_address="AA-BB-CC-DD-EE-FF")
        assert wol.mac_address == "aa:bb:cc:dd:ee:ff"
        assert wol.broadcast_address == "255.255.255.255"
        assert wol.port == 9

    def test_wol_rejects_bad_mac(self) -> None:
        """Malformed MAC addresses are rejected."""
        with pytest.raises(ValidationError):
            WolConfig(mac_address="not-a-mac")


class TestResolution:
    def test_parse(self) -> None:
        """WIDTHxHEIGHT strings parse; anything else yields None."""
        assert Resolution.parse("1920x1080") == Resolution(width=1920, height=1080)
        assert Resolution.parse("garbage") is None
        assert Resolution.parse("0x100") is None
        assert str(Resolution(width=800, height=600)) == "800x600"


class TestTemplate:
    def test_apply_creates_fresh_connection(self) -> None:
        """Applying a template copies defaults but not identity."""
        template = ConnectionTemplate(
            name="bastion",
            host="bastion.example.com",
            port=2200,
            username="ops",
            tags=["infra"],
        )
        first = template.apply("b1")
        second = template.apply("b2")

        assert first.name == "b1"
        assert first.host == "bastion.example.com"
        assert first.port == 2200
        assert first.username == "ops"
        assert first.tags == ["infra"]
        assert first.id != second.id
        assert first.id != template.id

        first.tags.append("changed")
        assert template.tags == ["infra"]


class TestValidation:
    def test_blank_name_rejected(self) -> None:
        """A connection needs a name."""
        with pytest.raises(ConfigError, match="Connection name cannot be empty"):
            validate_connection(Connection(name="  ", host="h"))

    def test_blank_host_rejected(self) -> None:
        """Plain protocols need a host."""
        with pytest.raises(ConfigError, match="Host cannot be empty"):
            validate_connection(Connection(name="x", host=""))

    def test_port_zero_rejected(self) -> None:
        """Port 0 is invalid for plain protocols."""
        with pytest.raises(ConfigError, match="Port must be greater than 0"):
            validate_connection(Connection(name="x", host="h", port=0))

    def test_zerotrust_needs_no_host(self) -> None:
        """Zero-trust targets live in the provider config."""
        conn = Connection.new_zerotrust(
            "ssm", ZeroTrustConfig(provider_config=AwsSsmConfig(target="i-0abc1234def567890"))
        )
        validate_connection(conn)

    def test_blank_group_name_rejected(self) -> None:
        """Groups need a name."""
        with pytest.raises(ConfigError, match="Group name cannot be empty"):
            validate_group(ConnectionGroup(name=""))

    def test_group_cycle_detected(self) -> None:
        """A parent chain that loops back is rejected."""
        a = ConnectionGroup(name="a")
        b = ConnectionGroup(name="b", parent_id=a.id)
        a.parent_id = b.id
        with pytest.raises(ConfigError, match="cycle"):
            validate_group_hierarchy([a, b])

    def test_group_unknown_parent_detected(self) -> None:
        """A parent id that names no group is rejected."""
        orphan = ConnectionGroup(name="orphan", parent_id=uuid4())
        with pytest.raises(ConfigError, match="unknown parent"):
            validate_group_hierarchy([orphan])

    def test_valid_hierarchy_passes(self) -> None:
        """Acyclic trees validate."""
        root = ConnectionGroup(name="root")
        child = ConnectionGroup.with_parent("child", root.id)
        validate_group_hierarchy([root, child])
        assert root.is_root
        assert not child.is_root


def test_cluster_membership() -> None:
    """Clusters hold each connection id once."""
    cluster = Cluster(name="web")
    conn_id = uuid4()
    cluster.add_connection(conn_id)
    cluster.add_connection(conn_id)
    assert cluster.connection_ids == [conn_id]
    assert cluster.remove_connection(conn_id)
    assert not cluster.remove_connection(conn_id)
