"""
Shared, versioned snapshot of the current filtered inventory listing.

Every fetch takes a request generation from the view before it awaits the
store. When the response arrives it is applied only if no newer fetch has
started in the meantime; otherwise it is dropped. A slow, superseded query
can therefore never overwrite the result of a newer one.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime

from src.config import get_logger
from src.core.entities.inventory import InventoryRecord
from src.core.entities.query import FilterSpec

logger = get_logger(__name__)


@dataclass(frozen=True)
class ViewSnapshot:
    """Immutable copy of the view state handed to readers."""

    records: tuple[InventoryRecord, ...]
    spec: FilterSpec
    generation: int
    version: int
    fetched_at: datetime | None = None
    stale: bool = False
    notice: str | None = None


@dataclass
class InventoryView:
    """Latest applied listing plus the bookkeeping to reject stale responses."""

    spec: FilterSpec = field(default_factory=FilterSpec)
    records: list[InventoryRecord] = field(default_factory=list)
    generation: int = 0  # newest fetch started
    applied_generation: int = 0  # fetch the records came from
    version: int = 0  # bumped on every change to records
    fetched_at: datetime | None = None
    stale: bool = False
    notice: str | None = None

    def begin_fetch(self, spec: FilterSpec) -> int:
        """Start a fetch for spec and return its generation."""
        self.generation += 1
        self.spec = spec
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def apply_fetch(self, generation: int, records: list[InventoryRecord]) -> bool:
        """Apply a fetch result; False when a newer fetch has started."""
        if not self.is_current(generation):
            logger.debug(
                "superseded_fetch_discarded",
                generation=generation,
                latest=self.generation,
            )
            return False

        self.records = list(records)
        self.applied_generation = generation
        self.version += 1
        self.fetched_at = datetime.now(UTC)
        self.stale = False
        self.notice = None
        return True

    def mark_failed(self, generation: int, notice: str) -> bool:
        """Keep the last records but flag them stale; ignored if superseded."""
        if not self.is_current(generation):
            return False
        self.stale = True
        self.notice = notice
        return True

    def replace(self, record: InventoryRecord) -> bool:
        """Swap in a confirmed record by id; False if it is not in view."""
        for index, existing in enumerate(self.records):
            if existing.id == record.id:
                self.records[index] = record
                self.version += 1
                return True
        return False

    def snapshot(self) -> ViewSnapshot:
        return ViewSnapshot(
            records=tuple(self.records),
            spec=self.spec,
            generation=self.generation,
            version=self.version,
            fetched_at=self.fetched_at,
            stale=self.stale,
            notice=self.notice,
        )
