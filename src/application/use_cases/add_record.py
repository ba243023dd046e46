"""Add Record Use Case - validated single insert."""

from src.application.dto.requests import AddRecordRequest
from src.application.inventory_view import InventoryView
from src.config import get_logger
from src.core.entities.inventory import InventoryRecord
from src.core.exceptions import StorageError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.services.validation import as_whole_number, validate_record_fields

logger = get_logger(__name__)


class AddRecordUseCase:
    """Validate a new record and insert it."""

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

    async def execute(self, request: AddRecordRequest) -> InventoryRecord:
        """
        Insert the record described by request.

        Raises:
            ValidationError: first field that breaks a rule; nothing is sent
            DuplicateKeyError: the SKU is already taken
            StorageError: the store rejected or could not serve the insert
        """
        values = request.model_dump()
        violations = validate_record_fields(values)
        if violations:
            first = violations[0]
            logger.info(
                "add_record_rejected",
                sku=request.sku,
                field=first.field,
                violation=first.violation.value,
            )
            raise first.as_error(values.get(first.field))

        record = InventoryRecord(
            sku=request.sku,
            name=request.name,
            description=request.description,
            quantity=as_whole_number(request.quantity),
            minimum_stock=as_whole_number(request.minimum_stock),
            location=request.location,
            category=request.category,
            unit=request.unit,
        )

        store = await self._get_inventory_store()
        try:
            created = await store.insert_one(record)
        except StorageError as e:
            logger.warning("add_record_failed", sku=request.sku, error_code=e.code)
            await self._refresh_view(store)
            raise

        await self._refresh_view(store)
        return created

    async def _refresh_view(self, store: IInventoryStore) -> None:
        from src.application.use_cases.list_records import ListRecordsUseCase

        try:
            await ListRecordsUseCase(inventory_store=store, view=self._view).refresh()
        except StorageError as e:
            logger.warning("view_refresh_failed", error_code=e.code, error=e.message)
