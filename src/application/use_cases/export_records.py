"""Export Records Use Case - full export and named reports."""

from collections.abc import Callable
from datetime import date

from src.config import get_logger, get_settings
from src.core.entities.exchange import ExportedFile, ReportType, TabularDocument
from src.core.entities.query import DEFAULT_ORDER, RECENTLY_UPDATED_ORDER
from src.core.exceptions import NothingToExportError
from src.core.interfaces.inventory_store import IInventoryStore
from src.core.interfaces.tabular import ITabularCodec
from src.core.services.exchange import export_document, parse_report_type, report_document

logger = get_logger(__name__)


class ExportRecordsUseCase:
    """Serialize records into interchange files."""

    def __init__(
        self,
        inventory_store: IInventoryStore | None = None,
        codec: ITabularCodec | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._inventory_store = inventory_store
        self._codec = codec
        self._today = today

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from src.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_codec(self) -> ITabularCodec:
        if self._codec is None:
            from src.infrastructure.tabular import get_codec

            self._codec = get_codec()
        return self._codec

    def _render(self, document: TabularDocument) -> ExportedFile:
        codec = self._get_codec()
        return ExportedFile(
            filename=f"{document.name}{codec.extension}",
            content=codec.write(document),
            media_type=codec.media_type,
            row_count=len(document.rows),
        )

    async def export_all(self) -> ExportedFile:
        """
        Export every record, most recently created first.

        Raises:
            NothingToExportError: the store is empty
        """
        store = await self._get_inventory_store()
        records = await store.select_where([], DEFAULT_ORDER)
        if not records:
            raise NothingToExportError()

        document = export_document(
            records,
            on=self._today(),
            sheet_name=get_settings().exchange.export_sheet_name,
        )
        exported = self._render(document)
        logger.info("inventory_exported", filename=exported.filename, rows=exported.row_count)
        return exported

    async def generate_report(self, report_type: str | ReportType) -> ExportedFile:
        """
        Build a named report; an empty store yields a header-only file.

        Raises:
            InvalidReportTypeError: report_type is not a known report
        """
        kind = parse_report_type(report_type)
        order = RECENTLY_UPDATED_ORDER if kind is ReportType.ACTIVITY else DEFAULT_ORDER
        store = await self._get_inventory_store()
        records = await store.select_where([], order)

        document = report_document(
            kind,
            records,
            on=self._today(),
            sheet_name=get_settings().exchange.report_sheet_name,
        )
        exported = self._render(document)
        logger.info(
            "report_generated",
            report_type=kind.value,
            filename=exported.filename,
            rows=exported.row_count,
        )
        return exported
