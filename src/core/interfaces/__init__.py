"""Core interfaces (ports) for dependency injection."""

from src.core.interfaces.inventory_store import IInventoryStore
from src.core.interfaces.tabular import ITabularCodec, TabularRows

__all__ = [
    "IInventoryStore",
    "ITabularCodec",
    "TabularRows",
]
