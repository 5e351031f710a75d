"""Row store and snapshot persistence."""

from lumiscan.storage.interfaces import PersistenceInterface, RowStoreInterface
from lumiscan.storage.json_file import DEFAULT_STORAGE_FILE, JsonFilePersistence
from lumiscan.storage.memory import InMemoryPersistence, InMemoryRowStore, NullPersistence

__all__ = [
    "PersistenceInterface",
    "RowStoreInterface",
    "InMemoryPersistence",
    "InMemoryRowStore",
    "NullPersistence",
    "JsonFilePersistence",
    "DEFAULT_STORAGE_FILE",
]
