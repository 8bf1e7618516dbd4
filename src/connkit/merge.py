"""Fold an ImportResult into a store with identity-based dedup.

Groups are identified by name (case-sensitive), connections by the (name, host) pair,
templates, clusters and variables by name. Duplicates are dropped silently; they are
not reported as skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from uuid import UUID

from connkit.errors import ConfigError
from connkit.importers.base import ImportResult
from connkit.models.group import ConnectionGroup
from connkit.store.interface import ConnectionStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MergeReport:
    new_connections: int
    new_groups: int
    total_connections: int
    total_groups: int
    new_templates: int = 0
    new_clusters: int = 0
    new_variables: int = 0


def _parents_first(groups: Sequence[ConnectionGroup]) -> list[ConnectionGroup]:
    by_id = {g.id: g for g in groups}
    ordered: list[ConnectionGroup] = []
    placed: set[UUID] = set()

    def place(group: ConnectionGroup, trail: set[UUID]) -> None:
        if group.id in placed or group.id in trail:
            return
        parent = by_id.get(group.parent_id) if group.parent_id is not None else None
        if parent is not None:
            place(parent, trail | {group.id})
        placed.add(group.id)
        ordered.append(group)

    for group in groups:
        place(group, set())
    return ordered


def merge_import(store: ConnectionStore, result: ImportResult) -> MergeReport:
    """Add the records of ``result`` that the store does not already hold.

    Group references on imported records are rewritten when their group was dropped in
    favour of an existing group with the same name. Records the store rejects as invalid
    are logged and left out; a group left out this way also drops the references to it.
    The store persists the whole merge once, after every record has been folded in.
    """
    with store.batch():
        report = _merge(store, result)
    logger.info(
        "Merged import: %d new connections, %d new groups",
        report.new_connections,
        report.new_groups,
    )
    return report


def _merge(store: ConnectionStore, result: ImportResult) -> MergeReport:
    groups_by_name = {g.name: g for g in store.list_groups()}
    known_group_ids = {g.id for g in store.list_groups()}
    group_remap: dict[UUID, UUID] = {}
    new_groups = 0

    for group in _parents_first(result.groups):
        existing = groups_by_name.get(group.name)
        if existing is not None:
            group_remap[group.id] = existing.id
            continue
        if group.parent_id is not None:
            group.parent_id = group_remap.get(group.parent_id, group.parent_id)
            if group.parent_id not in known_group_ids:
                group.parent_id = None
        try:
            store.add_group(group)
        except ConfigError as e:
            logger.warning("Not merging group %r: %s", group.name, e)
            continue
        groups_by_name[group.name] = group
        known_group_ids.add(group.id)
        new_groups += 1

    seen = {(c.name, c.host) for c in store.list_connections()}
    new_connections = 0
    for connection in result.connections:
        key = (connection.name, connection.host)
        if key in seen:
            logger.debug("Dropping duplicate connection %s (%s)", connection.name, connection.host)
            continue
        if connection.group_id is not None:
            connection.group_id = group_remap.get(connection.group_id, connection.group_id)
            if connection.group_id not in known_group_ids:
                connection.group_id = None
        try:
            store.add_connection(connection)
        except ConfigError as e:
            logger.warning("Not merging connection %r: %s", connection.name, e)
            continue
        seen.add(key)
        new_connections += 1

    template_names = {t.name for t in store.list_templates()}
    new_templates = 0
    for template in result.templates:
        if template.name in template_names:
            continue
        try:
            store.add_template(template)
        except ConfigError as e:
            logger.warning("Not merging template %r: %s", template.name, e)
            continue
        template_names.add(template.name)
        new_templates += 1

    cluster_names = {c.name for c in store.list_clusters()}
    new_clusters = 0
    for cluster in result.clusters:
        if cluster.name in cluster_names:
            continue
        try:
            store.add_cluster(cluster)
        except ConfigError as e:
            logger.warning("Not merging cluster %r: %s", cluster.name, e)
            continue
        cluster_names.add(cluster.name)
        new_clusters += 1

    variable_names = {v.name for v in store.list_variables()}
    new_variables = 0
    for variable in result.variables:
        if variable.name not in variable_names:
            store.set_variable(variable)
            variable_names.add(variable.name)
            new_variables += 1

    return MergeReport(
        new_connections=new_connections,
        new_groups=new_groups,
        total_connections=len(store.list_connections()),
        total_groups=len(store.list_groups()),
        new_templates=new_templates,
        new_clusters=new_clusters,
        new_variables=new_variables,
    )
