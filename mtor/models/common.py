"""
Shared model pieces: persisted-entity base fields, the client snapshot
embedded in dependent records, and the paginated response envelope.
"""
import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field

from mtor.utils import InvalidValueError

T = TypeVar("T")
E = TypeVar("E", bound=Enum)


def new_id() -> str:
    return uuid.uuid4().hex


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Naive datetimes are taken as UTC; aware ones pass through."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


def parse_enum(enum_cls: Type[E], value: Any, field: str = "status") -> E:
    """Enum member for ``value``; InvalidValueError when it is not one."""
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidValueError(field, value, [m.value for m in enum_cls]) from None


class Genero(str, Enum):
    MASCULINO = "MASCULINO"
    FEMININO = "FEMININO"


class EntityBase(BaseModel):
    """Fields owned by the repository; values sent by callers are ignored."""
    id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    version: int = 0


class ClienteResumo(BaseModel):
    """Client snapshot taken when an assessment or exam is created."""
    id: str
    nome: str
    email: str
    telefone: str = ""
    data_nascimento: Optional[date] = None
    genero: Genero


class Page(BaseModel, Generic[T]):
    items: List[T] = Field(default_factory=list)
    total_count: int
    total_pages: int
    page: int
    page_size: int
    first: bool
    last: bool
