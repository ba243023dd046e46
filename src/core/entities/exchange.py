"""Interchange (tabular import/export) entities."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ReportType(str, Enum):
    """Named report projections."""

    INVENTORY = "inventory"
    LOW_STOCK = "low-stock"
    ACTIVITY = "activity"


@dataclass
class TabularDocument:
    """A codec-neutral table: one header row plus value rows."""

    name: str  # file name without extension
    sheet_name: str
    headers: list[str]
    rows: list[dict[str, Any]] = field(default_factory=list)


@dataclass
class ExportedFile:
    """A serialized interchange file ready to hand to the caller."""

    filename: str
    content: bytes
    media_type: str
    row_count: int
