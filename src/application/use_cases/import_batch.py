"""Import Batch Use Case - tabular file to records, one all-or-nothing insert."""

from dataclasses import dataclass
from pathlib import PurePath

from src.application.dto.responses import ImportResultResponse
from src.application.inventory_view import InventoryView
from src.config import get_logger, get_settings
from src.core.exceptions import FileTooLargeError, StorageError, UnsupportedFileTypeError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.interfaces.tabular import ITabularCodec
from src.core.services.exchange import (
    check_import_columns,
    rows_to_candidates,
    validate_candidates,
)

logger = get_logger(__name__)


@dataclass
class ImportBatchResult:
    """Result of importing one file."""

    filename: str
    imported: int
    total_records: int
    validated: bool


class ImportBatchUseCase:
    """Read an interchange file and insert its rows as new records."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        codec: ITabularCodec | None = None,
        view: InventoryView | None = None,
        validate_rows: bool | None = None,
    ):
        self._inventory_store = inventory_store
        self._codec = codec
        self._view = view
        self._validate_rows = validate_rows

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_codec(self, filename: str) -> ITabularCodec:
        if self._codec is None:
            from src.infrastructure.tabular import get_codec_for_filename

            return get_codec_for_filename(filename)
        return self._codec

    def _check_upload(self, content: bytes, filename: str) -> None:
        settings = get_settings()
        extension = PurePath(filename).suffix.lower()
        if extension not in settings.api.allowed_extensions:
            raise UnsupportedFileTypeError(
                filename, extension or "(none)", settings.api.allowed_extensions
            )
        if len(content) > settings.api.max_upload_size:
            raise FileTooLargeError(filename, len(content), settings.api.max_upload_size)

    async def execute(self, content: bytes, filename: str) -> ImportBatchResult:
        """
        Import every data row of filename.

        Rows are mapped leniently (unparseable numbers become 0, empty cells
        take defaults). Field rules are only enforced when row validation is
        enabled; otherwise the store's own constraints are the last line.

        Raises:
            UnsupportedFileTypeError, FileTooLargeError: upload rejected
            TabularCodecError: file could not be parsed
            ImportFormatError: a required column is missing
            InvalidRowError: a row broke a field rule (validation enabled)
            StorageError: the batch was rejected; nothing was inserted
        """
        self._check_upload(content, filename)
        validate_rows = (
            self._validate_rows
            if self._validate_rows is not None
            else get_settings().exchange.validate_imports
        )

        logger.info("import_started", filename=filename, size=len(content))
        table = self._get_codec(filename).read(content, filename)
        check_import_columns(table.headers)

        candidates = rows_to_candidates(table.rows)
        if validate_rows:
            validate_candidates(candidates)

        store = await self._get_inventory_store()
        try:
            inserted = await store.insert_many(candidates)
        except StorageError as e:
            logger.warning(
                "import_failed",
                filename=filename,
                rows=len(candidates),
                error_code=e.code,
            )
            await self._refresh_view(store)
            raise

        total = await store.count_all()
        await self._refresh_view(store)

        logger.info(
            "import_complete",
            filename=filename,
            imported=len(inserted),
            total_records=total,
            validated=validate_rows,
        )
        return ImportBatchResult(
            filename=filename,
            imported=len(inserted),
            total_records=total,
            validated=validate_rows,
        )

    async def _refresh_view(self, store: IInventoryStore) -> None:
        from src.application.use_cases.list_records import ListRecordsUseCase

        try:
            await ListRecordsUseCase(inventory_store=store, view=self._view).refresh()
        except StorageError as e:
            logger.warning("view_refresh_failed", error_code=e.code, error=e.message)

    def to_response(self, result: ImportBatchResult) -> ImportResultResponse:
        """Convert result to API response."""
        return ImportResultResponse(
            filename=result.filename,
            imported=result.imported,
            total_records=result.total_records,
            validated=result.validated,
        )
