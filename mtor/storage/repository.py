"""
Generic CRUD Repository

One Repository instance per entity collection. It is constructed once by
the service container (see mtor.services.build_services) and shared by
every request of that application.

Usage:
    from mtor.storage import InMemoryStorage, Repository
    from mtor.models import Cliente

    repo = Repository(Cliente, InMemoryStorage(), "clientes",
                      search_fields=("nome", "email", "modalidade"))
    cliente = repo.create(Cliente(...))
    page = repo.list(page=0, page_size=10, search="silva")
"""
from __future__ import annotations

import math
import threading
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Generic, List, Mapping, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel

from mtor.models.common import EntityBase, Page, new_id
from mtor.utils import (
    ConcurrencyConflictError,
    DuplicateIdentityError,
    InvalidPageRequestError,
    NotFoundError,
    get_logger,
)
from .backends import StorageBackend

logger = get_logger(__name__)

T = TypeVar("T", bound=EntityBase)

Predicate = Callable[[Any], bool]

# Fields the repository owns; partial updates never overwrite them
_PROTECTED_FIELDS = frozenset({"id", "created_at", "version"})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _resolve(record: Any, path: str) -> Any:
    """Follow a dotted attribute path ("cliente.nome"); None on any gap."""
    value = record
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return value


def _as_text(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


class Repository(Generic[T]):
    """
    Ordered, id-keyed collection of one entity type.

    Records keep insertion order. Every write runs under a per-repository
    lock as a load/modify/save cycle, and bumps the entity version so
    callers can issue conditional updates.
    Values of unique_fields are checked inside that same cycle.
    """

    def __init__(
        self,
        model: Type[T],
        storage: StorageBackend,
        collection: str,
        search_fields: Sequence[str] = (),
        normalizer: Optional[Callable[[T], T]] = None,
        entity_name: Optional[str] = None,
        unique_fields: Sequence[str] = (),
    ):
        self.model = model
        self.storage = storage
        self.collection = collection
        self.search_fields = tuple(search_fields)
        self.normalizer = normalizer
        self.entity_name = entity_name or model.__name__
        self.unique_fields = tuple(unique_fields)
        self._lock = threading.RLock()

    # ── internal ─────────────────────────────────────────────────────────

    def _load(self) -> List[T]:
        return [self.model.model_validate(r) for r in self.storage.load(self.collection)]

    def _save(self, items: List[T]) -> None:
        self.storage.save(self.collection, [i.model_dump(mode="json") for i in items])

    def _index_of(self, items: List[T], entity_id: str) -> int:
        for idx, item in enumerate(items):
            if item.id == entity_id:
                return idx
        raise NotFoundError(self.entity_name, entity_id)

    def _matches(self, item: T, term: str) -> bool:
        for path in self.search_fields:
            value = _resolve(item, path)
            if value is not None and term in _as_text(value).lower():
                return True
        return False

    def _normalize(self, item: T) -> T:
        return self.normalizer(item) if self.normalizer else item

    def _check_unique(self, items: List[T], candidate: T) -> None:
        for name in self.unique_fields:
            value = getattr(candidate, name)
            if value is None:
                continue
            for item in items:
                if item.id != candidate.id and getattr(item, name) == value:
                    raise DuplicateIdentityError(name, str(value))

    # ── reads ────────────────────────────────────────────────────────────

    def all(self, predicate: Optional[Predicate] = None) -> List[T]:
        items = self._load()
        if predicate is None:
            return items
        return [i for i in items if predicate(i)]

    def find_first(self, predicate: Predicate) -> Optional[T]:
        for item in self._load():
            if predicate(item):
                return item
        return None

    def count(self, predicate: Optional[Predicate] = None) -> int:
        return len(self.all(predicate))

    def list(
        self,
        page: int = 0,
        page_size: int = 10,
        predicate: Optional[Predicate] = None,
        search: Optional[str] = None,
    ) -> Page[T]:
        """
        Offset pagination over the (optionally filtered) collection.

        Args:
            page: Zero-based page index
            page_size: Records per page (>= 1)
            predicate: Optional record filter
            search: Case-insensitive substring matched against search_fields

        Returns:
            Page with total_pages = ceil(total_count / page_size)
        """
        if page < 0 or page_size < 1:
            raise InvalidPageRequestError(page, page_size)

        items = self.all(predicate)
        if search and search.strip():
            term = search.strip().lower()
            items = [i for i in items if self._matches(i, term)]

        total = len(items)
        start = page * page_size
        end = start + page_size
        return Page[self.model](
            items=items[start:end],
            total_count=total,
            total_pages=math.ceil(total / page_size),
            page=page,
            page_size=page_size,
            first=page == 0,
            last=end >= total,
        )

    def get_by_id(self, entity_id: str) -> T:
        items = self._load()
        return items[self._index_of(items, entity_id)]

    # ── writes ───────────────────────────────────────────────────────────

    def create(self, entity: T) -> T:
        """
        Store a new record with a fresh id, timestamps and version 1.

        The record is re-validated, so values set through model_copy still
        pass the model validators.

        Raises:
            DuplicateIdentityError: a unique field value is already taken
        """
        now = _utcnow()
        data = entity.model_dump()
        data.update(id=new_id(), created_at=now, updated_at=now, version=1)
        created = self._normalize(self.model.model_validate(data))
        with self._lock:
            items = self._load()
            self._check_unique(items, created)
            items.append(created)
            self._save(items)
        logger.debug(f"{self.collection}: created {created.id}")
        return created

    def update(
        self,
        entity_id: str,
        changes: Mapping[str, Any],
        expected_version: Optional[int] = None,
    ) -> T:
        """
        Shallow-merge ``changes`` into the stored record.

        Raises:
            NotFoundError: no record with that id
            ConcurrencyConflictError: expected_version given and stale
            pydantic.ValidationError: merged record is not a valid entity
        """
        with self._lock:
            items = self._load()
            idx = self._index_of(items, entity_id)
            current = items[idx]

            if expected_version is not None and current.version != expected_version:
                raise ConcurrencyConflictError(
                    self.entity_name, entity_id, expected_version, current.version
                )

            merged = current.model_dump()
            for key, value in changes.items():
                if key in _PROTECTED_FIELDS:
                    continue
                merged[key] = value.model_dump() if isinstance(value, BaseModel) else value
            merged["updated_at"] = _utcnow()
            merged["version"] = current.version + 1

            updated = self._normalize(self.model.model_validate(merged))
            self._check_unique(items, updated)
            items[idx] = updated
            self._save(items)
        logger.debug(f"{self.collection}: updated {entity_id} -> v{updated.version}")
        return updated

    def delete(self, entity_id: str) -> None:
        with self._lock:
            items = self._load()
            del items[self._index_of(items, entity_id)]
            self._save(items)
        logger.debug(f"{self.collection}: deleted {entity_id}")
