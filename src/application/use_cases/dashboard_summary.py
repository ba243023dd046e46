"""Dashboard Summary Use Case."""

from src.application.dto.responses import (
    ActivityEntryResponse,
    DashboardResponse,
    LowStockAlertResponse,
)
from src.config import get_logger, get_settings
from src.core.entities.inventory import DashboardSummary
from src.core.entities.query import DEFAULT_ORDER
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.analytics import dashboard_summary

logger = get_logger(__name__)


class DashboardSummaryUseCase:
    """Aggregate counts, the lowest-stock records and the latest updates."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        top_n: int | None = None,
    ):
        self._inventory_store = inventory_store
        self._top_n = top_n

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self) -> DashboardSummary:
        top_n = self._top_n if self._top_n is not None else get_settings().analytics.top_n
        store = await self._get_inventory_store()
        records = await store.select_where([], DEFAULT_ORDER)
        summary = dashboard_summary(records, top_n=top_n)
        logger.debug(
            "dashboard_computed",
            total_items=summary.total_items,
            low_stock_count=summary.low_stock_count,
        )
        return summary

    def to_response(self, summary: DashboardSummary) -> DashboardResponse:
        """Convert result to API response."""
        return DashboardResponse(
            total_items=summary.total_items,
            low_stock_count=summary.low_stock_count,
            total_quantity=summary.total_quantity,
            top_low_stock=[
                LowStockAlertResponse(**alert.model_dump()) for alert in summary.top_low_stock
            ],
            top_recently_updated=[
                ActivityEntryResponse(**entry.model_dump())
                for entry in summary.top_recently_updated
            ],
        )
