"""Report Overview Use Case - totals and category distribution."""

from src.application.dto.responses import CategoryStatResponse, ReportOverviewResponse
from src.core.entities.inventory import ReportOverview
from src.core.entities.query import DEFAULT_ORDER
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.analytics import report_overview


class ReportOverviewUseCase:
    """Compute the figures shown above the report downloads."""

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self) -> ReportOverview:
        store = await self._get_inventory_store()
        return report_overview(await store.select_where([], DEFAULT_ORDER))

    def to_response(self, overview: ReportOverview) -> ReportOverviewResponse:
        """Convert result to API response."""
        return ReportOverviewResponse(
            total_items=overview.total_items,
            low_stock_items=overview.low_stock_items,
            total_quantity=overview.total_quantity,
            categories=[CategoryStatResponse(**stat.model_dump()) for stat in overview.categories],
        )
