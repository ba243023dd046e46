"""
Excel (.xlsx) codec built on openpyxl.

Only the first worksheet is read; its first row is the header row.
"""

from io import BytesIO
from typing import Any
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.config import get_logger
from src.core.entities.exchange import TabularDocument
from src.core.exceptions import TabularCodecError
from src.core.interfaces.tabular import ITabularCodec, TabularRows

logger = get_logger(__name__)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _is_blank(values: tuple[Any, ...]) -> bool:
    return all(value is None or (isinstance(value, str) and not value.strip()) for value in values)


class XlsxCodec(ITabularCodec):
    """Reads and writes single-sheet workbooks."""

    extension = ".xlsx"
    media_type = XLSX_MEDIA_TYPE

    def read(self, content: bytes, filename: str = "") -> TabularRows:
        try:
            workbook = load_workbook(BytesIO(content), read_only=True, data_only=True)
        except (BadZipFile, InvalidFileException, KeyError, OSError, ValueError) as e:
            raise TabularCodecError(filename or "upload", f"not a valid workbook ({e})") from e

        try:
            sheet = workbook.worksheets[0] if workbook.worksheets else None
            if sheet is None:
                return TabularRows(headers=[])

            rows = sheet.iter_rows(values_only=True)
            header_row = next(rows, None)
            if header_row is None:
                return TabularRows(headers=[])

            headers = ["" if value is None else str(value).strip() for value in header_row]
            records: list[dict[str, Any]] = []
            for values in rows:
                if _is_blank(values):
                    continue
                records.append(
                    {
                        header: values[index] if index < len(values) else None
                        for index, header in enumerate(headers)
                        if header
                    }
                )
        finally:
            workbook.close()

        logger.debug("xlsx_read", filename=filename, rows=len(records), columns=headers)
        return TabularRows(headers=[header for header in headers if header], rows=records)

    def write(self, document: TabularDocument) -> bytes:
        workbook = Workbook()
        sheet = workbook.active
        sheet.title = document.sheet_name[:31]
        sheet.append(document.headers)
        for row in document.rows:
            sheet.append([row.get(header) for header in document.headers])

        buffer = BytesIO()
        workbook.save(buffer)
        logger.debug("xlsx_written", name=document.name, rows=len(document.rows))
        return buffer.getvalue()
