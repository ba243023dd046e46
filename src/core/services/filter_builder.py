"""
Filter Builder.

Translates a FilterSpec into the store's predicate vocabulary. Predicates
in the returned list are ANDed; the only OR is inside the search clause.
"""

from typing import Any

from src.core.entities.inventory import InventoryRecord
from src.core.entities.query import (
    ALL,
    AnyOf,
    Contains,
    Equals,
    FieldLessThan,
    FilterSpec,
    Predicate,
    StockLevel,
)


def build_query(spec: FilterSpec) -> list[Predicate]:
    """Build the predicate list for the list filters."""
    predicates: list[Predicate] = []

    if spec.search:
        predicates.append(
            AnyOf((Contains("name", spec.search), Contains("sku", spec.search)))
        )

    if spec.category != ALL:
        predicates.append(Equals("category", spec.category))

    if spec.location != ALL:
        predicates.append(Equals("location", spec.location))

    # "low" is strict here; the dashboard counts records at the threshold too
    if spec.stock_level == StockLevel.LOW:
        predicates.append(FieldLessThan("quantity", "minimum_stock"))
    elif spec.stock_level == StockLevel.OUT:
        predicates.append(Equals("quantity", 0))

    return predicates


def _field(record: InventoryRecord, name: str) -> Any:
    return getattr(record, name)


def evaluate(predicate: Predicate, record: InventoryRecord) -> bool:
    """Evaluate one predicate against a record in memory."""
    if isinstance(predicate, Equals):
        return _field(record, predicate.field) == predicate.value
    if isinstance(predicate, Contains):
        haystack = _field(record, predicate.field) or ""
        return predicate.value.lower() in str(haystack).lower()
    if isinstance(predicate, FieldLessThan):
        return _field(record, predicate.field) < _field(record, predicate.other)
    if isinstance(predicate, AnyOf):
        return any(evaluate(inner, record) for inner in predicate.predicates)
    raise TypeError(f"Unsupported predicate: {predicate!r}")


def matches(record: InventoryRecord, predicates: list[Predicate]) -> bool:
    """True when the record satisfies every predicate."""
    return all(evaluate(predicate, record) for predicate in predicates)
