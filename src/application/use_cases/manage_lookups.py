"""Manage Lookups Use Case - category and location vocabularies."""

from typing import Literal

from src.config import get_logger
from src.core.exceptions import ValidationError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.validation import text_violation, validate_required_text

logger = get_logger(__name__)

LookupKind = Literal["category", "location"]

LOOKUP_MIN_LENGTH = 1
LOOKUP_MAX_LENGTH = 100


class ManageLookupsUseCase:
    """List and register the names offered by the category/location filters."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def list_names(self, kind: LookupKind) -> list[str]:
        store = await self._get_inventory_store()
        if kind == "category":
            return await store.list_categories()
        return await store.list_locations()

    async def add_name(self, kind: LookupKind, name: str) -> str:
        """Register name (trimmed); registering an existing name is a no-op."""
        name = name.strip()
        violation = text_violation(name, LOOKUP_MIN_LENGTH, LOOKUP_MAX_LENGTH)
        if violation is not None:
            raise ValidationError(
                kind,
                violation.value,
                validate_required_text(name, LOOKUP_MIN_LENGTH, LOOKUP_MAX_LENGTH),
                name,
            )

        store = await self._get_inventory_store()
        if kind == "category":
            await store.add_category(name)
        else:
            await store.add_location(name)
        logger.info("lookup_registered", kind=kind, name=name)
        return name
