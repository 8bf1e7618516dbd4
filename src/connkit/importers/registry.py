"""Importer registry for selecting an importer by format name."""

from __future__ import annotations

from connkit.errors import ImportFailedError
from connkit.importers.ansible import AnsibleInventoryImporter
from connkit.importers.asbru import AsbruImporter
from connkit.importers.base import Importer
from connkit.importers.native import NativeImporter
from connkit.importers.remmina import RemminaImporter
from connkit.importers.royalts import RoyalTsImporter
from connkit.importers.ssh_config import SshConfigImporter

# Registry of known importers
_IMPORTERS: dict[str, type[Importer]] = {
    "ansible": AnsibleInventoryImporter,
    "ssh-config": SshConfigImporter,
    "ssh_config": SshConfigImporter,  # Alias
    "remmina": RemminaImporter,
    "asbru": AsbruImporter,
    "asbru-cm": AsbruImporter,  # Alias
    "royalts": RoyalTsImporter,
    "royal-ts": RoyalTsImporter,  # Alias
    "native": NativeImporter,
}

# Singleton instances (importers are stateless)
_importer_instances: dict[str, Importer] = {}


def get_importer(format_name: str) -> Importer:
    """Get the importer for a format name.

    Raises:
        ImportFailedError: If the format is not registered.
    """
    normalized = format_name.lower().strip()

    if normalized in _importer_instances:
        return _importer_instances[normalized]

    importer_cls = _IMPORTERS.get(normalized)
    if importer_cls is None:
        raise ImportFailedError.unsupported_format(format_name)

    instance = importer_cls()
    _importer_instances[normalized] = instance
    return instance


def register_importer(format_name: str, importer_cls: type[Importer]) -> None:
    normalized = format_name.lower().strip()
    _IMPORTERS[normalized] = importer_cls
    _importer_instances.pop(normalized, None)


def list_importers() -> list[str]:
    """List the canonical format ids (aliases excluded)."""
    return sorted({cls.format_id for cls in _IMPORTERS.values()})
