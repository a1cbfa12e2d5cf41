"""Namespaced state persistence for the stores"""

from habitquest.storage.backends import JsonFileStorage, MemoryStorage, StorageBackend
from habitquest.storage.persistent_store import PersistentStore

__all__ = [
    "StorageBackend",
    "JsonFileStorage",
    "MemoryStorage",
    "PersistentStore",
]
