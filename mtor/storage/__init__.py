"""
Persistence Layer

Storage backends (memory, JSON documents) behind a generic CRUD repository.
"""
from .backends import InMemoryStorage, JsonFileStorage, StorageBackend, create_storage
from .repository import Repository

__all__ = [
    "InMemoryStorage",
    "JsonFileStorage",
    "StorageBackend",
    "create_storage",
    "Repository",
]
