"""
Analytics Engine.

Derives low-stock rankings, recent activity and category distributions from
a snapshot of records. Nothing here is cached between snapshots.
"""

from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from src.config import get_logger
from src.core.entities.inventory import (
    UNCATEGORIZED,
    ActivityEntry,
    CategoryStat,
    DashboardSummary,
    InventoryRecord,
    LowStockAlert,
    ReportOverview,
    is_at_or_below_threshold,
)

logger = get_logger(__name__)

ACTIVITY_ACTION = "Stock Update"
_NEVER = datetime.min.replace(tzinfo=UTC)


def stock_ratio(record: InventoryRecord) -> float:
    """quantity / minimum_stock, with a zero threshold counted as most urgent."""
    if record.minimum_stock == 0:
        return 0.0
    return record.quantity / record.minimum_stock


def low_stock_records(records: Iterable[InventoryRecord]) -> list[InventoryRecord]:
    return [record for record in records if is_at_or_below_threshold(record)]


def low_stock_alerts(records: Sequence[InventoryRecord], limit: int) -> list[LowStockAlert]:
    """
    Rank records at or below their threshold, most urgent first.

    The sort is stable, so equal ratios keep their input order.
    """
    ranked = sorted(low_stock_records(records), key=stock_ratio)
    return [
        LowStockAlert(
            id=record.id,
            sku=record.sku,
            name=record.name,
            quantity=record.quantity,
            minimum_stock=record.minimum_stock,
            ratio=stock_ratio(record),
        )
        for record in ranked[:limit]
    ]


def _updated_key(record: InventoryRecord) -> datetime:
    return record.updated_at or _NEVER


def sort_by_recently_updated(records: Iterable[InventoryRecord]) -> list[InventoryRecord]:
    """Most recently updated first; records never updated sink to the end."""
    return sorted(records, key=_updated_key, reverse=True)


def recent_activity(records: Sequence[InventoryRecord], limit: int) -> list[ActivityEntry]:
    """
    Approximate recent activity from the most recently modified records.

    There is no movement journal, so each entry is reported as a stock update.
    """
    return [
        ActivityEntry(
            id=record.id,
            item_name=record.name,
            action=ACTIVITY_ACTION,
            timestamp=record.updated_at,
        )
        for record in sort_by_recently_updated(records)[:limit]
    ]


def category_distribution(records: Sequence[InventoryRecord]) -> list[CategoryStat]:
    """Count records per category, largest first, percentages to one decimal."""
    total = len(records)
    if total == 0:
        return []

    counts: dict[str, int] = {}
    for record in records:
        name = record.category or UNCATEGORIZED
        counts[name] = counts.get(name, 0) + 1

    stats = [
        CategoryStat(name=name, count=count, percentage=round(count / total * 100, 1))
        for name, count in counts.items()
    ]
    return sorted(stats, key=lambda stat: stat.count, reverse=True)


def total_quantity(records: Iterable[InventoryRecord]) -> int:
    return sum(record.quantity or 0 for record in records)


def dashboard_summary(records: Sequence[InventoryRecord], top_n: int = 3) -> DashboardSummary:
    """Headline numbers plus the most urgent and most recently touched records."""
    summary = DashboardSummary(
        total_items=len(records),
        low_stock_count=len(low_stock_records(records)),
        total_quantity=total_quantity(records),
        top_low_stock=low_stock_alerts(records, top_n),
        top_recently_updated=recent_activity(records, top_n),
    )
    logger.debug(
        "dashboard_summary_computed",
        total_items=summary.total_items,
        low_stock=summary.low_stock_count,
    )
    return summary


def report_overview(records: Sequence[InventoryRecord]) -> ReportOverview:
    return ReportOverview(
        total_items=len(records),
        low_stock_items=len(low_stock_records(records)),
        total_quantity=total_quantity(records),
        categories=category_distribution(records),
    )
