"""Format importers: external files -> ImportResult."""

from connkit.importers.ansible import AnsibleInventoryImporter
from connkit.importers.asbru import AsbruImporter
from connkit.importers.base import BaseImporter, Importer, ImportResult, SkippedEntry
from connkit.importers.native import NativeImporter
from connkit.importers.registry import get_importer, list_importers, register_importer
from connkit.importers.remmina import RemminaImporter
from connkit.importers.royalts import RoyalTsImporter
from connkit.importers.ssh_config import SshConfigImporter

__all__ = [
    "AnsibleInventoryImporter",
    "AsbruImporter",
    "BaseImporter",
    "ImportResult",
    "Importer",
    "NativeImporter",
    "RemminaImporter",
    "RoyalTsImporter",
    "SkippedEntry",
    "SshConfigImporter",
    "get_importer",
    "list_importers",
    "register_importer",
]
