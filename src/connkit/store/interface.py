from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection
from connkit.models.document import NativeDocument
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate


class ConnectionStore(Protocol):
    def list_connections(self) -> Sequence[Connection]: ...

    def get_connection(self, connection_id: UUID) -> Connection | None: ...

    def add_connection(self, connection: Connection) -> Connection:
        """Validate and insert a connection.

        Raises:
            ConfigError: If the connection fails validation.
        """
        ...

    def update_connection(self, connection: Connection) -> Connection:
        """Re-validate and replace the stored connection with the same id.

        Raises:
            ConfigError: If the connection fails validation.
            ConnectionNotFoundError: If no connection has that id.
        """
        ...

    def delete_connection(self, connection_id: UUID) -> bool:
        """Delete a connection and drop it from every cluster.

        Returns True if the connection existed.
        """
        ...

    def list_groups(self) -> Sequence[ConnectionGroup]: ...

    def get_group(self, group_id: UUID) -> ConnectionGroup | None: ...

    def add_group(self, group: ConnectionGroup) -> ConnectionGroup: ...

    def delete_group(self, group_id: UUID) -> bool:
        """Delete a group; its child groups and connections move to the root."""
        ...

    def list_templates(self) -> Sequence[ConnectionTemplate]: ...

    def add_template(self, template: ConnectionTemplate) -> ConnectionTemplate: ...

    def list_clusters(self) -> Sequence[Cluster]: ...

    def add_cluster(self, cluster: Cluster) -> Cluster: ...

    def list_variables(self) -> Sequence[Variable]: ...

    def set_variable(self, variable: Variable) -> Variable: ...

    def snapshot(self) -> NativeDocument:
        """Return the whole store as a native document."""
        ...

    def batch(self) -> AbstractContextManager[None]:
        """Context manager that persists the mutations made inside it once, on success."""
        ...
