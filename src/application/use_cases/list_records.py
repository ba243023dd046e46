"""List Records Use Case - filtered listing with stale-snapshot fallback."""

from dataclasses import dataclass, field

from src.application.dto.responses import InventoryRecordResponse, RecordListResponse
from src.application.inventory_view import InventoryView
from src.config import get_logger
from src.core.entities.inventory import InventoryRecord
from src.core.entities.query import DEFAULT_ORDER, FilterSpec
from src.core.exceptions import ConnectivityError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.filter_builder import build_query, matches

logger = get_logger(__name__)


@dataclass
class ListRecordsResult:
    """Records answering one listing request."""

    records: list[InventoryRecord] = field(default_factory=list)
    generation: int = 0
    applied: bool = True  # False when a newer request superseded this one
    stale: bool = False
    notice: str | None = None


class ListRecordsUseCase:
    """Fetch the records matching a filter, newest first."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        view: InventoryView | None = None,
    ):
        self._inventory_store = inventory_store
        self._view = view

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_view(self) -> InventoryView:
        if self._view is None:
            from src.application.services import get_inventory_view

            self._view = get_inventory_view()
        return self._view

    async def execute(self, spec: FilterSpec | None = None) -> ListRecordsResult:
        """
        List records matching spec.

        A connectivity failure does not raise: the last known snapshot,
        narrowed to spec, is returned flagged stale with the error's message
        as notice. Other store errors propagate.
        """
        spec = spec or FilterSpec()
        predicates = build_query(spec)
        view = self._get_view()
        generation = view.begin_fetch(spec)

        store = await self._get_inventory_store()
        try:
            records = await store.select_where(predicates, DEFAULT_ORDER)
        except ConnectivityError as e:
            view.mark_failed(generation, e.message)
            fallback = [record for record in view.records if matches(record, predicates)]
            logger.warning(
                "inventory_list_stale",
                generation=generation,
                snapshot_size=len(fallback),
                error=e.details.get("error"),
            )
            return ListRecordsResult(
                records=fallback,
                generation=generation,
                applied=False,
                stale=True,
                notice=e.message,
            )

        applied = view.apply_fetch(generation, records)
        logger.info(
            "inventory_listed",
            generation=generation,
            count=len(records),
            applied=applied,
            filters=spec.model_dump(mode="json"),
        )
        return ListRecordsResult(records=records, generation=generation, applied=applied)

    async def refresh(self) -> ListRecordsResult:
        """Re-run the listing for the filter the view currently shows."""
        return await self.execute(self._get_view().spec)

    def to_response(self, result: ListRecordsResult) -> RecordListResponse:
        """Convert result to API response."""
        return RecordListResponse(
            items=[InventoryRecordResponse.from_entity(r) for r in result.records],
            total=len(result.records),
            generation=result.generation,
            stale=result.stale,
            notice=result.notice,
        )

