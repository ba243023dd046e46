"""
Query vocabulary shared by the filter builder and the record store.

Predicates are plain values; a store adapter compiles them to its own query
language and `filter_builder.matches` evaluates them in memory.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

ALL = "all"


class StockLevel(str, Enum):
    """Stock-level filter choices."""

    ALL = "all"
    LOW = "low"
    OUT = "out"


class FilterSpec(BaseModel):
    """Ephemeral description of the record slice the caller wants."""

    search: str = ""
    category: str = ALL
    location: str = ALL
    stock_level: StockLevel = StockLevel.ALL


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any


@dataclass(frozen=True)
class Contains:
    """Case-insensitive substring match."""

    field: str
    value: str


@dataclass(frozen=True)
class FieldLessThan:
    """Compares two columns of the same record: field < other."""

    field: str
    other: str


@dataclass(frozen=True)
class AnyOf:
    """Logical OR of the wrapped predicates."""

    predicates: tuple["Predicate", ...]


Predicate = Equals | Contains | FieldLessThan | AnyOf


@dataclass(frozen=True)
class Ordering:
    field: str
    descending: bool = True


DEFAULT_ORDER = Ordering("created_at", descending=True)
RECENTLY_UPDATED_ORDER = Ordering("updated_at", descending=True)
