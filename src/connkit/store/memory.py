from __future__ import annotations

import contextlib
from collections.abc import Iterator, Sequence
from uuid import UUID

from connkit.errors import ConnectionNotFoundError
from connkit.models.cluster import Cluster, Variable
from connkit.models.connection import Connection
from connkit.models.document import NativeDocument
from connkit.models.group import ConnectionGroup
from connkit.models.template import ConnectionTemplate
from connkit.models.validation import (
    validate_cluster,
    validate_connection,
    validate_group,
    validate_group_hierarchy,
    validate_template,
)
from connkit.store.interface import ConnectionStore


class MemoryConnectionStore(ConnectionStore):
    def __init__(self, document: NativeDocument | None = None) -> None:
        # Dicts keep insertion order, which is the listing order.
        self._connections: dict[UUID, Connection] = {}
        self._groups: dict[UUID, ConnectionGroup] = {}
        self._templates: dict[UUID, ConnectionTemplate] = {}
        self._clusters: dict[UUID, Cluster] = {}
        self._variables: dict[str, Variable] = {}
        self._batch_depth = 0
        self._pending = False
        if document is not None:
            self._load(document)

    def _load(self, document: NativeDocument) -> None:
        self._connections = {c.id: c for c in document.connections}
        self._groups = {g.id: g for g in document.groups}
        self._templates = {t.id: t for t in document.templates}
        self._clusters = {c.id: c for c in document.clusters}
        self._variables = {v.name: v for v in document.variables}

    def _changed(self) -> None:
        """Hook called after every mutation, or once per completed batch."""

    def _mutated(self) -> None:
        if self._batch_depth:
            self._pending = True
        else:
            self._changed()

    @contextlib.contextmanager
    def batch(self) -> Iterator[None]:
        """Group mutations so ``_changed`` runs once when the outermost block completes.

        If the block raises, the hook is not called for the batched mutations.
        """
        self._batch_depth += 1
        try:
            yield
        finally:
            self._batch_depth -= 1
        if self._batch_depth == 0 and self._pending:
            self._pending = False
            self._changed()

    def list_connections(self) -> Sequence[Connection]:
        return list(self._connections.values())

    def get_connection(self, connection_id: UUID) -> Connection | None:
        return self._connections.get(connection_id)

    def add_connection(self, connection: Connection) -> Connection:
        validate_connection(connection)
        self._connections[connection.id] = connection
        self._mutated()
        return connection

    def update_connection(self, connection: Connection) -> Connection:
        if connection.id not in self._connections:
            raise ConnectionNotFoundError(str(connection.id))
        validate_connection(connection)
        connection.touch()
        self._connections[connection.id] = connection
        self._mutated()
        return connection

    def delete_connection(self, connection_id: UUID) -> bool:
        if connection_id not in self._connections:
            return False
        del self._connections[connection_id]
        for cluster in self._clusters.values():
            cluster.remove_connection(connection_id)
        self._mutated()
        return True

    def list_groups(self) -> Sequence[ConnectionGroup]:
        return list(self._groups.values())

    def get_group(self, group_id: UUID) -> ConnectionGroup | None:
        return self._groups.get(group_id)

    def add_group(self, group: ConnectionGroup) -> ConnectionGroup:
        validate_group(group)
        validate_group_hierarchy([*self._groups.values(), group])
        self._groups[group.id] = group
        self._mutated()
        return group

    def delete_group(self, group_id: UUID) -> bool:
        if group_id not in self._groups:
            return False
        del self._groups[group_id]
        for group in self._groups.values():
            if group.parent_id == group_id:
                group.parent_id = None
        for connection in self._connections.values():
            if connection.group_id == group_id:
                connection.group_id = None
        self._mutated()
        return True

    def list_templates(self) -> Sequence[ConnectionTemplate]:
        return list(self._templates.values())

    def add_template(self, template: ConnectionTemplate) -> ConnectionTemplate:
        validate_template(template)
        self._templates[template.id] = template
        self._mutated()
        return template

    def list_clusters(self) -> Sequence[Cluster]:
        return list(self._clusters.values())

    def add_cluster(self, cluster: Cluster) -> Cluster:
        validate_cluster(cluster)
        self._clusters[cluster.id] = cluster
        self._mutated()
        return cluster

    def list_variables(self) -> Sequence[Variable]:
        return list(self._variables.values())

    def set_variable(self, variable: Variable) -> Variable:
        self._variables[variable.name] = variable
        self._mutated()
        return variable

    def snapshot(self) -> NativeDocument:
        return NativeDocument(
            connections=self.list_connections(),
            groups=self.list_groups(),
            templates=self.list_templates(),
            clusters=self.list_clusters(),
            variables=self.list_variables(),
        )
