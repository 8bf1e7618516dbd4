from connkit.store.interface import ConnectionStore
from connkit.store.json_file import JsonFileStore
from connkit.store.lookup import find_connection
from connkit.store.memory import MemoryConnectionStore

__all__ = ["ConnectionStore", "JsonFileStore", "MemoryConnectionStore", "find_connection"]
