"""
Service factory functions for dependency injection.

This module provides factory functions that wire infrastructure
implementations to core services. Use cases should import from here.

Clean Architecture: Application layer orchestrates DI, not core layer.
"""

from typing import TYPE_CHECKING

from src.application.inventory_view import InventoryView
from src.core.services import StockMutationService

if TYPE_CHECKING:
    from src.core.interfaces import IInventoryStore


# Singleton instances
_inventory_view: InventoryView | None = None
_stock_mutation_service: StockMutationService | None = None


def get_inventory_view() -> InventoryView:
    """Get the process-wide inventory view."""
    global _inventory_view
    if _inventory_view is None:
        _inventory_view = InventoryView()
    return _inventory_view


async def get_stock_mutation_service(
    inventory_store: "IInventoryStore | None" = None,
) -> StockMutationService:
    """
    Get or create StockMutationService instance.

    Args:
        inventory_store: Optional store override (not cached)

    Returns:
        Configured StockMutationService
    """
    global _stock_mutation_service

    if inventory_store is not None:
        return StockMutationService(inventory_store)

    if _stock_mutation_service is None:
        # Lazy import infrastructure to avoid circular imports
        from src.infrastructure.storage.sqlite import get_inventory_store

        _stock_mutation_service = StockMutationService(await get_inventory_store())
    return _stock_mutation_service


def reset_services() -> None:
    """
    Reset all singleton service instances.

    Useful for testing or when configuration changes.
    """
    global _inventory_view
    global _stock_mutation_service

    _inventory_view = None
    _stock_mutation_service = None


__all__ = [
    "get_inventory_view",
    "get_stock_mutation_service",
    "reset_services",
]
