"""SQLite implementation of inventory record storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

import aiosqlite

from src.config import get_logger
from src.core.entities.inventory import InventoryRecord
from src.core.entities.query import (
    DEFAULT_ORDER,
    AnyOf,
    Contains,
    Equals,
    FieldLessThan,
    Ordering,
    Predicate,
)
from src.core.exceptions import (
    ConnectivityError,
    DuplicateKeyError,
    StoreError,
    WareFlowError,
)
from src.core.interfaces.inventory_store import IInventoryStore
from src.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)

COLUMNS = (
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
)
PATCHABLE_COLUMNS = frozenset(COLUMNS) - {"id", "created_at"}

# OperationalError messages that mean "try again later" rather than "wrong"
_TRANSIENT_MARKERS = (
    "database is locked",
    "database is busy",
    "unable to open database",
    "disk i/o error",
)


def to_db_time(value: datetime) -> str:
    """Fixed-width UTC timestamp, so text ordering matches time ordering."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%S.%f+00:00")


def _to_db_value(value: Any) -> Any:
    return to_db_time(value) if isinstance(value, datetime) else value


def _from_db_time(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        logger.warning("unparseable_timestamp", value=value)
        return None


@asynccontextmanager
async def store_errors(operation: str) -> AsyncIterator[None]:
    """Translate sqlite errors into the store error taxonomy."""
    try:
        yield
    except WareFlowError:
        raise
    except aiosqlite.IntegrityError as e:
        if "UNIQUE constraint failed" in str(e) and "sku" in str(e):
            raise DuplicateKeyError("sku") from e
        raise StoreError(operation, str(e)) from e
    except aiosqlite.OperationalError as e:
        if any(marker in str(e).lower() for marker in _TRANSIENT_MARKERS):
            raise ConnectivityError(operation, str(e)) from e
        raise StoreError(operation, str(e)) from e
    except aiosqlite.Error as e:
        raise StoreError(operation, str(e)) from e
    except OverflowError as e:
        # integers beyond 64 bits never reach SQLite
        raise StoreError(operation, "value out of range") from e


def _column(name: str) -> str:
    if name not in COLUMNS:
        raise StoreError("select", f"unknown column '{name}'")
    return name


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def compile_predicate(predicate: Predicate) -> tuple[str, list[Any]]:
    """Compile one predicate to a parameterised SQL fragment."""
    if isinstance(predicate, Equals):
        return f"{_column(predicate.field)} = ?", [predicate.value]
    if isinstance(predicate, Contains):
        return (
            f"LOWER({_column(predicate.field)}) LIKE ? ESCAPE '\\'",
            [f"%{_escape_like(predicate.value.lower())}%"],
        )
    if isinstance(predicate, FieldLessThan):
        return f"{_column(predicate.field)} < {_column(predicate.other)}", []
    if isinstance(predicate, AnyOf):
        parts = [compile_predicate(inner) for inner in predicate.predicates]
        sql = " OR ".join(fragment for fragment, _ in parts)
        params = [param for _, fragment_params in parts for param in fragment_params]
        return f"({sql})", params
    raise StoreError("select", f"unsupported predicate {predicate!r}")


def compile_where(predicates: list[Predicate]) -> tuple[str, list[Any]]:
    """AND the compiled predicates into a WHERE clause ('' when empty)."""
    if not predicates:
        return "", []
    parts = [compile_predicate(predicate) for predicate in predicates]
    sql = " AND ".join(fragment for fragment, _ in parts)
    params = [param for _, fragment_params in parts for param in fragment_params]
    return f"WHERE {sql}", params


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory record and lookup storage."""

    async def insert_one(self, record: InventoryRecord) -> InventoryRecord:
        """Insert a new record; the store assigns id and timestamps."""
        stored = self._prepare_insert(record, datetime.now(UTC))
        async with store_errors("insert"):
            async with get_transaction() as conn:
                await conn.execute(self._insert_sql(), self._insert_params(stored))
        logger.info("inventory_record_created", record_id=stored.id, sku=stored.sku)
        return stored

    async def insert_many(self, records: list[InventoryRecord]) -> list[InventoryRecord]:
        """Insert a batch in one transaction; any failure rolls back the lot."""
        now = datetime.now(UTC)
        stored = [self._prepare_insert(record, now) for record in records]
        if not stored:
            return []
        async with store_errors("batch insert"):
            async with get_transaction() as conn:
                await conn.executemany(
                    self._insert_sql(),
                    [self._insert_params(record) for record in stored],
                )
        logger.info("inventory_batch_inserted", count=len(stored))
        return stored

    async def update_by_id(
        self,
        record_id: str,
        patch: dict[str, Any],
        expected: dict[str, Any] | None = None,
    ) -> bool:
        """
        Apply a partial update; unknown or immutable columns are rejected.

        With expected, the WHERE clause also pins those columns to the given
        values, so a row changed by another writer is left alone.
        """
        if not patch:
            return False
        invalid = sorted(set(patch) - PATCHABLE_COLUMNS)
        if invalid:
            raise StoreError("update", f"columns not updatable: {', '.join(invalid)}")
        expected = expected or {}

        assignments = ", ".join(f"{column} = ?" for column in patch)
        conditions = "".join(f" AND {_column(column)} = ?" for column in expected)
        params = [_to_db_value(value) for value in patch.values()]
        guards = [_to_db_value(value) for value in expected.values()]
        async with store_errors("update"):
            async with get_transaction() as conn:
                cursor = await conn.execute(
                    f"UPDATE inventory_items SET {assignments} WHERE id = ?{conditions}",
                    (*params, record_id, *guards),
                )
                updated = cursor.rowcount
        logger.info(
            "inventory_record_updated",
            record_id=record_id,
            columns=list(patch),
            guarded=list(expected),
            matched=updated,
        )
        return updated > 0

    async def get_by_id(self, record_id: str) -> InventoryRecord | None:
        """Get record by ID."""
        async with store_errors("select"):
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT * FROM inventory_items WHERE id = ?", (record_id,)
                )
                row = await cursor.fetchone()
        if row is None:
            return None
        return self._row_to_record(row)

    async def select_where(
        self,
        predicates: list[Predicate],
        order: Ordering | None = None,
    ) -> list[InventoryRecord]:
        """Select records matching all predicates, newest first by default."""
        order = order or DEFAULT_ORDER
        where, params = compile_where(predicates)
        direction = "DESC" if order.descending else "ASC"
        sql = (
            f"SELECT * FROM inventory_items {where} "
            f"ORDER BY {_column(order.field)} {direction}, rowid {direction}"
        )
        async with store_errors("select"):
            async with get_connection() as conn:
                cursor = await conn.execute(sql, params)
                rows = await cursor.fetchall()
        return [self._row_to_record(row) for row in rows]

    async def count_all(self) -> int:
        async with store_errors("count"):
            async with get_connection() as conn:
                cursor = await conn.execute("SELECT COUNT(*) FROM inventory_items")
                row = await cursor.fetchone()
        return int(row[0]) if row else 0

    async def list_categories(self) -> list[str]:
        return await self._list_lookup("categories")

    async def list_locations(self) -> list[str]:
        return await self._list_lookup("locations")

    async def add_category(self, name: str) -> None:
        await self._add_lookup("categories", name)

    async def add_location(self, name: str) -> None:
        await self._add_lookup("locations", name)

    async def _list_lookup(self, table: str) -> list[str]:
        async with store_errors(f"select {table}"):
            async with get_connection() as conn:
                cursor = await conn.execute(f"SELECT name FROM {table} ORDER BY name")
                rows = await cursor.fetchall()
        return [row["name"] for row in rows]

    async def _add_lookup(self, table: str, name: str) -> None:
        async with store_errors(f"insert {table}"):
            async with get_transaction() as conn:
                await conn.execute(f"INSERT OR IGNORE INTO {table} (name) VALUES (?)", (name,))
        logger.info("lookup_value_added", table=table, name=name)

    @staticmethod
    def _prepare_insert(record: InventoryRecord, now: datetime) -> InventoryRecord:
        return record.model_copy(
            update={"id": uuid4().hex, "created_at": now, "updated_at": now}
        )

    @staticmethod
    def _insert_sql() -> str:
        placeholders = ", ".join("?" for _ in COLUMNS)
        return f"INSERT INTO inventory_items ({', '.join(COLUMNS)}) VALUES ({placeholders})"

    @staticmethod
    def _insert_params(record: InventoryRecord) -> tuple[Any, ...]:
        return (
            record.id,
            record.sku,
            record.name,
            record.description,
            record.quantity,
            record.location,
            record.category,
            record.minimum_stock,
            record.unit,
            to_db_time(record.created_at),  # type: ignore[arg-type]
            to_db_time(record.updated_at),  # type: ignore[arg-type]
        )

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        """Convert a database row to an InventoryRecord entity."""
        return InventoryRecord(
            id=row["id"],
            sku=row["sku"],
            name=row["name"],
            description=row["description"] or "",
            quantity=int(row["quantity"]),
            location=row["location"] or "",
            category=row["category"] or "",
            minimum_stock=int(row["minimum_stock"]),
            unit=row["unit"],
            created_at=_from_db_time(row["created_at"]),
            updated_at=_from_db_time(row["updated_at"]),
        )
