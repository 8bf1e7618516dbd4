"""Field-level checks applied on add, update and import."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from connkit.errors import ConfigError
from connkit.models.cluster import Cluster
from connkit.models.connection import Connection
from connkit.models.group import ConnectionGroup
from connkit.models.protocol import ProtocolType
from connkit.models.template import ConnectionTemplate


def validate_connection(connection: Connection) -> None:
    if not connection.name.strip():
        raise ConfigError("name", "Connection name cannot be empty")

    # Zero-trust targets live in the provider config.
    if connection.protocol is ProtocolType.zerotrust:
        return

    if not connection.host.strip():
        raise ConfigError("host", "Host cannot be empty")
    if connection.port == 0:
        raise ConfigError("port", "Port must be greater than 0")


def validate_group(group: ConnectionGroup) -> None:
    if not group.name:
        raise ConfigError("name", "Group name cannot be empty")


def validate_template(template: ConnectionTemplate) -> None:
    if not template.name.strip():
        raise ConfigError("name", "Template name cannot be empty")


def validate_cluster(cluster: Cluster) -> None:
    if not cluster.name.strip():
        raise ConfigError("name", "Cluster name cannot be empty")


def validate_group_hierarchy(groups: Sequence[ConnectionGroup]) -> None:
    """Ensure every parent chain terminates at a root group.

    Raises ConfigError on a cycle or on a parent id that names no known group.
    """
    by_id: dict[UUID, ConnectionGroup] = {g.id: g for g in groups}
    for group in groups:
        visited: set[UUID] = {group.id}
        parent_id = group.parent_id
        while parent_id is not None:
            if parent_id in visited:
                raise ConfigError(
                    "parent_id", f"Group '{group.name}' is part of a hierarchy cycle"
                )
            parent = by_id.get(parent_id)
            if parent is None:
                raise ConfigError(
                    "parent_id", f"Group '{group.name}' references unknown parent {parent_id}"
                )
            visited.add(parent_id)
            parent_id = parent.parent_id
