"""Remove Stock Use Case - bounded decrement with refetch-after-write."""

from src.application.dto.requests import RemoveStockRequest
from src.application.dto.responses import InventoryRecordResponse, RemoveStockResponse
from src.application.inventory_view import InventoryView
from src.config import get_logger
from src.core.exceptions import StorageError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.stock_mutation import MutationOutcome

logger = get_logger(__name__)


class RemoveStockUseCase:
    """Remove stock from one record and publish the confirmed state."""

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

    async def execute(self, record_id: str, request: RemoveStockRequest) -> MutationOutcome:
        """
        Remove request.amount units from record_id.

        On success the confirmed record replaces its entry in the view. A
        store failure leaves the view to a full refetch instead; a validation
        failure leaves it alone, since nothing was written.

        Raises:
            ValidationError, RecordNotFoundError, StorageError
        """
        store = await self._get_inventory_store()
        from src.application.services import get_stock_mutation_service

        service = await get_stock_mutation_service(store)
        outcome = await service.run_removal(record_id, request.amount)

        if outcome.error is not None:
            if isinstance(outcome.error, StorageError):
                await self._refresh_view(store)
            raise outcome.error

        self._get_view().replace(outcome.confirmed_record())
        return outcome

    async def _refresh_view(self, store: IInventoryStore) -> None:
        from src.application.use_cases.list_records import ListRecordsUseCase

        try:
            await ListRecordsUseCase(inventory_store=store, view=self._get_view()).refresh()
        except StorageError as e:
            logger.warning("view_refresh_failed", error_code=e.code, error=e.message)

    def to_response(self, outcome: MutationOutcome) -> RemoveStockResponse:
        """Convert result to API response."""
        return RemoveStockResponse(
            record=InventoryRecordResponse.from_entity(outcome.confirmed_record()),
            requested_amount=str(outcome.requested_amount),
            removed=outcome.applied_amount or 0,
            states=[state.value for state in outcome.history],
        )
