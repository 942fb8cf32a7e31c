"""
Storage backends.

A backend persists whole collections as ordered lists of JSON-compatible
dicts. The repository owns record semantics (ids, versions, merge);
backends only load and save.
"""
from __future__ import annotations

import copy
import json
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List

from mtor.utils import get_logger

logger = get_logger(__name__)


class StorageBackend(ABC):
    """Load/save contract shared by every backend."""

    @abstractmethod
    def load(self, collection: str) -> List[dict]:
        """Return the collection records in insertion order (empty if absent)."""

    @abstractmethod
    def save(self, collection: str, records: List[dict]) -> None:
        """Replace the whole collection."""


class InMemoryStorage(StorageBackend):
    """Process-local storage. Copies on the way in and out."""

    def __init__(self):
        self._collections: Dict[str, List[dict]] = {}

    def load(self, collection: str) -> List[dict]:
        return copy.deepcopy(self._collections.get(collection, []))

    def save(self, collection: str, records: List[dict]) -> None:
        self._collections[collection] = copy.deepcopy(records)


class JsonFileStorage(StorageBackend):
    """
    One JSON document per collection, ``<directory>/<collection>.json``.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a crash never leaves a half-written document.
    """

    def __init__(self, directory: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        logger.info(f"JsonFileStorage initialized, directory: {self.directory}")

    def _path(self, collection: str) -> Path:
        return self.directory / f"{collection}.json"

    def load(self, collection: str) -> List[dict]:
        path = self._path(collection)
        if not path.exists():
            return []
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)

    def save(self, collection: str, records: List[dict]) -> None:
        fd, tmp_path = tempfile.mkstemp(
            dir=self.directory, prefix=f".{collection}-", suffix=".json"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                json.dump(records, fh, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self._path(collection))
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise
        logger.debug(f"JsonFileStorage: saved {len(records)} record(s) to {collection}")


def create_storage(backend: str, directory: str = "data") -> StorageBackend:
    """Build the backend named in settings ("memory" or "json")."""
    if backend == "memory":
        return InMemoryStorage()
    if backend == "json":
        return JsonFileStorage(directory)
    raise ValueError(f"Unknown storage backend: {backend}")
