"""CSV codec; the header line names the columns."""

import csv
from io import StringIO
from typing import Any

from src.config import get_logger
from src.core.entities.exchange import TabularDocument
from src.core.exceptions import TabularCodecError
from src.core.interfaces.tabular import ITabularCodec, TabularRows

logger = get_logger(__name__)


class CsvCodec(ITabularCodec):
    """Comma-separated values, UTF-8 with optional BOM."""

    extension = ".csv"
    media_type = "text/csv"

    def read(self, content: bytes, filename: str = "") -> TabularRows:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise TabularCodecError(filename or "upload", "file is not UTF-8 text") from e

        reader = csv.reader(StringIO(text))
        try:
            header_row = next(reader, None)
            if header_row is None:
                return TabularRows(headers=[])
            headers = [value.strip() for value in header_row]

            rows: list[dict[str, Any]] = []
            for values in reader:
                if not any(value.strip() for value in values):
                    continue
                rows.append(
                    {
                        header: (values[index] if index < len(values) and values[index] != "" else None)
                        for index, header in enumerate(headers)
                        if header
                    }
                )
        except csv.Error as e:
            raise TabularCodecError(filename or "upload", str(e)) from e

        logger.debug("csv_read", filename=filename, rows=len(rows))
        return TabularRows(headers=[header for header in headers if header], rows=rows)

    def write(self, document: TabularDocument) -> bytes:
        buffer = StringIO()
        writer = csv.DictWriter(buffer, fieldnames=document.headers, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(document.rows)
        return buffer.getvalue().encode("utf-8")
