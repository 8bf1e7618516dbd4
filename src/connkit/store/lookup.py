"""Resolve a user-supplied name or id to a stored connection."""

from __future__ import annotations

from collections.abc import Sequence
from uuid import UUID

from connkit.errors import AmbiguousConnectionError, ConnectionNotFoundError
from connkit.models.connection import Connection


def find_connection(connections: Sequence[Connection], query: str) -> Connection:
    """Match by exact name, then id, then case-insensitive name, then unique name prefix.

    Raises:
        ConnectionNotFoundError: If nothing matches.
        AmbiguousConnectionError: If only a prefix matches, and it matches several names.
    """
    for connection in connections:
        if connection.name == query:
            return connection

    try:
        wanted = UUID(query)
    except ValueError:
        wanted = None
    if wanted is not None:
        for connection in connections:
            if connection.id == wanted:
                return connection

    lowered = query.lower()
    for connection in connections:
        if connection.name.lower() == lowered:
            return connection

    matches = [c for c in connections if c.name.lower().startswith(lowered)]

    if len(matches) == 1:
        return matches[0]
    if matches:
        raise AmbiguousConnectionError(query, [c.name for c in matches])
    raise ConnectionNotFoundError(query)
