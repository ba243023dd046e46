"""Core domain entities."""

from src.core.entities.exchange import ExportedFile, ReportType, TabularDocument
from src.core.entities.inventory import (
    MAX_QUANTITY,
    UNCATEGORIZED,
    ActivityEntry,
    CategoryStat,
    DashboardSummary,
    InventoryRecord,
    LowStockAlert,
    ReportOverview,
    Unit,
    is_at_or_below_threshold,
    is_out_of_stock,
    is_strictly_below_threshold,
)
from src.core.entities.query import (
    ALL,
    DEFAULT_ORDER,
    RECENTLY_UPDATED_ORDER,
    AnyOf,
    Contains,
    Equals,
    FieldLessThan,
    FilterSpec,
    Ordering,
    Predicate,
    StockLevel,
)

__all__ = [
    # Inventory
    "InventoryRecord",
    "Unit",
    "MAX_QUANTITY",
    "UNCATEGORIZED",
    "is_at_or_below_threshold",
    "is_strictly_below_threshold",
    "is_out_of_stock",
    # Analytics
    "CategoryStat",
    "LowStockAlert",
    "ActivityEntry",
    "DashboardSummary",
    "ReportOverview",
    # Query
    "FilterSpec",
    "StockLevel",
    "ALL",
    "Predicate",
    "Equals",
    "Contains",
    "FieldLessThan",
    "AnyOf",
    "Ordering",
    "DEFAULT_ORDER",
    "RECENTLY_UPDATED_ORDER",
    # Exchange
    "ReportType",
    "TabularDocument",
    "ExportedFile",
]
