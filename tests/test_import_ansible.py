"""Tests for the Ansible inventory importer."""

from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from connkit.errors import ImportFailedError
from connkit.importers import AnsibleInventoryImporter
from connkit.models import ProtocolType, SshConfig


@pytest.fixture
def importer() -> AnsibleInventoryImporter:
    return AnsibleInventoryImporter()


class TestIniInventory:
    def test_single_host_line(self, importer: AnsibleInventoryImporter) -> None:
        """A bare host line becomes one SSH connection."""
        result = importer.import_text("web1 ansible_host=10.0.0.5 ansible_port=22\n")

        assert len(result.connections) == 1
        conn = result.connections[0]
        assert conn.name == "web1"
        assert conn.host == "10.0.0.5"
        assert conn.port == 22
        assert conn.protocol is ProtocolType.ssh
        assert result.groups == []
        assert not result.has_issues

    def test_groups_and_vars(self, importer: AnsibleInventoryImporter) -> None:
        """Sections become groups and [group:vars] apply to their hosts."""
        text = textwrap.dedent(
            """
            # inventory
            bastion ansible_host=192.0.2.1

            [web]
            web1 ansible_host=10.0.0.5
            web2 ansible_host=10.0.0.6 ansible_user=deploy ansible_port=2222

            [web:vars]
            ansible_user=www
            ansible_ssh_private_key_file=/keys/web.pem

            [db]
            db1 ansible_host="10.0.1.5"
            """
        )

        result = importer.import_text(text)

        assert [g.name for g in result.groups] == ["web", "db"]
        by_name = {c.name: c for c in result.connections}
        assert set(by_name) == {"bastion", "web1", "web2", "db1"}

        web_group = result.groups[0]
        assert by_name["bastion"].group_id is None
        assert by_name["web1"].group_id == web_group.id
        assert by_name["web1"].username == "www"
        assert by_name["web2"].username == "deploy"
        assert by_name["web2"].port == 2222
        assert by_name["db1"].host == "10.0.1.5"

        config = by_name["web1"].protocol_config
        assert isinstance(config, SshConfig)
        assert config.key_path == Path("/keys/web.pem")

    def test_host_without_ansible_host_uses_name(self, importer: AnsibleInventoryImporter) -> None:
        """The inventory name doubles as the host when ansible_host is absent."""
        result = importer.import_text("[app]\napp.example.com\n")
        assert result.connections[0].host == "app.example.com"

    def test_host_ranges_skipped(self, importer: AnsibleInventoryImporter) -> None:
        """Range patterns like web[01:10] are reported and skipped."""
        result = importer.import_text("[web]\nweb[01:10].example.com\n")
        assert result.connections == []
        assert len(result.skipped) == 1
        assert result.skipped[0].reason == "Host ranges are not supported"

    def test_winrm_host_becomes_rdp(self, importer: AnsibleInventoryImporter) -> None:
        """Windows hosts reached over WinRM are imported as RDP."""
        result = importer.import_text(
            "win1 ansible_host=10.0.2.5 ansible_connection=winrm ansible_port=5986\n"
        )
        conn = result.connections[0]
        assert conn.protocol is ProtocolType.rdp
        assert conn.port == 3389

    def test_malformed_variable_recorded(self, importer: AnsibleInventoryImporter) -> None:
        """A token without '=' is an error but the host is still imported."""
        result = importer.import_text("web1 ansible_host=10.0.0.5 stray\n")
        assert len(result.connections) == 1
        assert len(result.errors) == 1
        assert "stray" in result.errors[0]

    def test_invalid_port_falls_back(self, importer: AnsibleInventoryImporter) -> None:
        """Non-numeric ports fall back to 22."""
        result = importer.import_text("web1 ansible_port=ssh\n")
        assert result.connections[0].port == 22


class TestYamlInventory:
    def test_nested_children(self, importer: AnsibleInventoryImporter) -> None:
        """YAML children become nested groups with inherited vars."""
        text = textwrap.dedent(
            """
            ---
            all:
              vars:
                ansible_user: admin
              hosts:
                lb1:
                  ansible_host: 10.0.0.1
              children:
                prod:
                  children:
                    web:
                      hosts:
                        web1:
                          ansible_host: 10.0.0.5
                          ansible_port: 2222
            """
        )

        result = importer.import_text(text)

        groups = {g.name: g for g in result.groups}
        assert set(groups) == {"prod", "web"}
        assert groups["web"].parent_id == groups["prod"].id
        assert groups["prod"].parent_id is None

        by_name = {c.name: c for c in result.connections}
        assert by_name["lb1"].group_id is None
        assert by_name["lb1"].username == "admin"
        assert by_name["web1"].group_id == groups["web"].id
        assert by_name["web1"].port == 2222
        assert by_name["web1"].username == "admin"

    def test_pattern_hosts_skipped(self, importer: AnsibleInventoryImporter) -> None:
        """Host patterns in YAML are skipped."""
        text = "all:\n  hosts:\n    'web*':\n      ansible_host: 10.0.0.5\n"
        result = importer.import_text(text)
        assert result.connections == []
        assert [s.identifier for s in result.skipped] == ["web*"]

    def test_malformed_yaml_aborts(self, importer: AnsibleInventoryImporter) -> None:
        """Unparseable YAML aborts the import."""
        with pytest.raises(ImportFailedError, match="Failed to parse YAML"):
            importer.import_text("---\nall: [unclosed\n")


def test_import_path_missing_file(tmp_path: Path) -> None:
    """A missing inventory path raises ImportFailedError."""
    with pytest.raises(ImportFailedError, match="File not found"):
        AnsibleInventoryImporter().import_path(tmp_path / "missing.ini")


def test_import_path_reads_file(tmp_path: Path) -> None:
    """import_path reads the file and records it as the skip location."""
    inventory = tmp_path / "hosts.ini"
    inventory.write_text("[web]\nweb[1:3]\n", encoding="utf-8")

    result = AnsibleInventoryImporter().import_path(inventory)

    assert result.skipped[0].location == f"{inventory}:2"
