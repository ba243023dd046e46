"""
Exchange Pipeline.

Maps between inventory records and codec-neutral tabular documents:
import rows become record candidates, and records become export and report
projections. Reading and writing actual files is left to an ITabularCodec.
"""

import math
import re
from collections.abc import Iterable, Sequence
from datetime import date, datetime
from typing import Any

from src.core.entities.exchange import ReportType, TabularDocument
from src.core.entities.inventory import InventoryRecord, Unit
from src.core.exceptions import ImportFormatError, InvalidReportTypeError, InvalidRowError
from src.core.services.analytics import low_stock_records, sort_by_recently_updated
from src.core.services.validation import validate_record_fields

IMPORT_REQUIRED_COLUMNS = ("sku", "name", "quantity")
IMPORT_OPTIONAL_COLUMNS = ("description", "location", "category", "minimum_stock", "unit")

EXPORT_COLUMNS = [
    "id",
    "sku",
    "name",
    "description",
    "quantity",
    "location",
    "category",
    "minimum_stock",
    "unit",
    "created_at",
    "updated_at",
]

REPORT_COLUMNS: dict[ReportType, list[str]] = {
    ReportType.INVENTORY: [
        "SKU",
        "Name",
        "Quantity",
        "Location",
        "Category",
        "Minimum Stock",
        "Unit",
    ],
    ReportType.LOW_STOCK: [
        "SKU",
        "Name",
        "Current Quantity",
        "Minimum Stock",
        "Location",
        "Category",
    ],
    ReportType.ACTIVITY: [
        "SKU",
        "Name",
        "Last Updated",
        "Current Quantity",
        "Location",
    ],
}

EXPORT_NAME_PREFIX = "inventory_export"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


# Import


def missing_import_columns(headers: Iterable[str]) -> list[str]:
    present = {str(header).strip() for header in headers}
    return [column for column in IMPORT_REQUIRED_COLUMNS if column not in present]


def check_import_columns(headers: Iterable[str]) -> None:
    missing = missing_import_columns(headers)
    if missing:
        raise ImportFormatError(missing)


def parse_int(value: Any) -> int:
    """
    Parse an integer cell leniently, falling back to 0.

    Takes the leading integer of a string ("12 pcs" -> 12, "3.9" -> 3) and
    truncates floats toward zero.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else 0
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def _cell_text(value: Any) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _text_or(value: Any, default: str) -> str:
    """Empty cells (None, "", 0) take the default."""
    if not value:
        return default
    return _cell_text(value)


def row_to_candidate(row: dict[str, Any]) -> InventoryRecord:
    """Map one import row to an (unvalidated) record candidate."""
    sku = row.get("sku")
    name = row.get("name")
    return InventoryRecord(
        sku=_cell_text(sku) if sku is not None else "",
        name=_cell_text(name) if name is not None else "",
        description=_text_or(row.get("description"), ""),
        quantity=parse_int(row.get("quantity")),
        location=_text_or(row.get("location"), ""),
        category=_text_or(row.get("category"), ""),
        minimum_stock=parse_int(row.get("minimum_stock")),
        unit=_text_or(row.get("unit"), Unit.PCS.value),
    )


def rows_to_candidates(rows: Iterable[dict[str, Any]]) -> list[InventoryRecord]:
    return [row_to_candidate(row) for row in rows]


def validate_candidates(candidates: Sequence[InventoryRecord]) -> None:
    """
    Raise InvalidRowError for the first candidate that breaks a field rule.

    Row numbers are spreadsheet rows, so the first data row is row 2.
    """
    for index, candidate in enumerate(candidates):
        values = candidate.model_dump()
        violations = validate_record_fields(values)
        if violations:
            first = violations[0]
            raise InvalidRowError(index + 2, first.as_error(values.get(first.field)))


# Export and reports


def _iso(value: datetime | None) -> str:
    return value.isoformat() if value else ""


def _display_time(value: datetime | None) -> str:
    return value.strftime("%Y-%m-%d %H:%M:%S") if value else ""


def export_row(record: InventoryRecord) -> dict[str, Any]:
    """Flatten every field of a record."""
    return {
        "id": record.id,
        "sku": record.sku,
        "name": record.name,
        "description": record.description,
        "quantity": record.quantity,
        "location": record.location,
        "category": record.category,
        "minimum_stock": record.minimum_stock,
        "unit": record.unit,
        "created_at": _iso(record.created_at),
        "updated_at": _iso(record.updated_at),
    }


def export_document(
    records: Sequence[InventoryRecord],
    on: date,
    sheet_name: str = "Inventory",
) -> TabularDocument:
    """Full export, in the order the records were fetched."""
    return TabularDocument(
        name=f"{EXPORT_NAME_PREFIX}_{on.isoformat()}",
        sheet_name=sheet_name,
        headers=list(EXPORT_COLUMNS),
        rows=[export_row(record) for record in records],
    )


def parse_report_type(value: str | ReportType) -> ReportType:
    try:
        return ReportType(value)
    except ValueError:
        raise InvalidReportTypeError(str(value), [t.value for t in ReportType]) from None


def _inventory_row(record: InventoryRecord) -> dict[str, Any]:
    return {
        "SKU": record.sku,
        "Name": record.name,
        "Quantity": record.quantity,
        "Location": record.location,
        "Category": record.category,
        "Minimum Stock": record.minimum_stock,
        "Unit": record.unit,
    }


def _low_stock_row(record: InventoryRecord) -> dict[str, Any]:
    return {
        "SKU": record.sku,
        "Name": record.name,
        "Current Quantity": record.quantity,
        "Minimum Stock": record.minimum_stock,
        "Location": record.location,
        "Category": record.category,
    }


def _activity_row(record: InventoryRecord) -> dict[str, Any]:
    return {
        "SKU": record.sku,
        "Name": record.name,
        "Last Updated": _display_time(record.updated_at),
        "Current Quantity": record.quantity,
        "Location": record.location,
    }


def report_rows(report_type: ReportType, records: Sequence[InventoryRecord]) -> list[dict[str, Any]]:
    """Project records into the rows of a named report."""
    if report_type is ReportType.INVENTORY:
        return [_inventory_row(record) for record in records]
    if report_type is ReportType.LOW_STOCK:
        return [_low_stock_row(record) for record in low_stock_records(records)]
    return [_activity_row(record) for record in sort_by_recently_updated(records)]


def report_document(
    report_type: str | ReportType,
    records: Sequence[InventoryRecord],
    on: date,
    sheet_name: str = "Report",
) -> TabularDocument:
    """Build a report document named <report-type>_<YYYY-MM-DD>."""
    kind = parse_report_type(report_type)
    return TabularDocument(
        name=f"{kind.value}_{on.isoformat()}",
        sheet_name=sheet_name,
        headers=list(REPORT_COLUMNS[kind]),
        rows=report_rows(kind, records),
    )
