"""Inventory domain entities."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, field_validator

MAX_QUANTITY = 2**31 - 1  # 32-bit signed integer column bound
UNCATEGORIZED = "Uncategorized"


class Unit(str, Enum):
    """Units a record may be counted in."""

    PCS = "pcs"
    KG = "kg"
    G = "g"
    L = "l"
    ML = "ml"
    M = "m"
    CM = "cm"


class InventoryRecord(BaseModel):
    """A quantity-tracked stock record."""

    id: str | None = None  # assigned by the store
    sku: str
    name: str
    description: str = ""
    quantity: int = 1
    minimum_stock: int = 1  # reorder threshold
    location: str = ""
    category: str = ""
    unit: str = Unit.PCS.value
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("created_at", "updated_at")
    @classmethod
    def assume_utc(cls, v: datetime | None) -> datetime | None:
        """Treat naive timestamps as UTC."""
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


def is_at_or_below_threshold(record: InventoryRecord) -> bool:
    """Low stock as the dashboard, alerts and low-stock report see it."""
    return record.quantity <= record.minimum_stock


def is_strictly_below_threshold(record: InventoryRecord) -> bool:
    """Low stock as the explicit "low" filter sees it."""
    return record.quantity < record.minimum_stock


def is_out_of_stock(record: InventoryRecord) -> bool:
    return record.quantity == 0


class CategoryStat(BaseModel):
    """Share of the record set held by one category."""

    name: str
    count: int
    percentage: float


class LowStockAlert(BaseModel):
    """A record ranked by how far below its threshold it sits."""

    id: str | None
    sku: str
    name: str
    quantity: int
    minimum_stock: int
    ratio: float


class ActivityEntry(BaseModel):
    """Recently modified record, standing in for an audit log entry."""

    id: str | None
    item_name: str
    action: str = "Stock Update"
    timestamp: datetime | None


class DashboardSummary(BaseModel):
    """Headline numbers for the dashboard."""

    total_items: int
    low_stock_count: int
    total_quantity: int
    top_low_stock: list[LowStockAlert]
    top_recently_updated: list[ActivityEntry]


class ReportOverview(BaseModel):
    """Totals and category breakdown for the reports page."""

    total_items: int
    low_stock_items: int
    total_quantity: int
    categories: list[CategoryStat]
