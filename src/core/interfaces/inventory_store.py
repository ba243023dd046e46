"""Abstract interface for inventory record storage."""

from abc import ABC, abstractmethod
from typing import Any

from src.core.entities.inventory import InventoryRecord
from src.core.entities.query import Ordering, Predicate


class IInventoryStore(ABC):
    """
    Interface for inventory record and lookup table persistence.

    Implementations raise DuplicateKeyError on a SKU conflict,
    ConnectivityError when the store cannot be reached and StoreError
    for any other rejection. They never retry.
    """

    @abstractmethod
    async def insert_one(self, record: InventoryRecord) -> InventoryRecord:
        """Insert a record and return it with store-assigned fields."""
        pass

    @abstractmethod
    async def insert_many(self, records: list[InventoryRecord]) -> list[InventoryRecord]:
        """Insert records as a single batch; one failure rejects them all."""
        pass

    @abstractmethod
    async def update_by_id(
        self,
        record_id: str,
        patch: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> bool:
        """
        Apply a partial update to one record.

        When expected is given, the update only lands if every listed column
        still holds the listed value. Returns False when no row was written.
        """
        pass

    @abstractmethod
    async def get_by_id(self, record_id: str) -> InventoryRecord | None:
        """Get record by ID."""
        pass

    @abstractmethod
    async def select_where(
        self,
        predicates: list[Predicate],
        order: Ordering | None = None,
    ) -> list[InventoryRecord]:
        """Select records matching all predicates."""
        pass

    @abstractmethod
    async def count_all(self) -> int:
        """Count all records."""
        pass

    @abstractmethod
    async def list_categories(self) -> list[str]:
        """Category names, ordered by name."""
        pass

    @abstractmethod
    async def list_locations(self) -> list[str]:
        """Location names, ordered by name."""
        pass

    @abstractmethod
    async def add_category(self, name: str) -> None:
        """Add a category name to the lookup table."""
        pass

    @abstractmethod
    async def add_location(self, name: str) -> None:
        """Add a location name to the lookup table."""
        pass
