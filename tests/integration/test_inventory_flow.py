"""End-to-end inventory flow through the use cases on a real SQLite file."""

import asyncio
from collections.abc import AsyncGenerator
from datetime import date
from unittest.mock import MagicMock, patch

import pytest

import src.infrastructure.storage.sqlite.connection as conn_module
from src.application.dto.requests import AddRecordRequest, RemoveStockRequest
from src.application.inventory_view import InventoryView
from src.application.use_cases import (
    AddRecordUseCase,
    DashboardSummaryUseCase,
    ExportRecordsUseCase,
    ImportBatchUseCase,
    ListRecordsUseCase,
    RemoveStockUseCase,
)
from src.core.entities.query import FilterSpec
from src.core.exceptions import DuplicateKeyError, StoreError
from src.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from src.infrastructure.storage.sqlite.migrations.migrator import initialize_database
from src.infrastructure.tabular import CsvCodec


@pytest.fixture
async def store(tmp_path) -> AsyncGenerator[SQLiteInventoryStore, None]:
    db_path = tmp_path / "flow.db"
    await initialize_database(db_path, create_backup_before=False)

    settings = MagicMock()
    settings.storage.db_path = db_path
    settings.storage.pool_size = 2
    settings.storage.busy_timeout = 5000

    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        yield SQLiteInventoryStore()
        await conn_module.close_pool()


async def test_add_remove_export_import(store):
    view = InventoryView()

    created = await AddRecordUseCase(store, view).execute(
        AddRecordRequest(sku="X1", name="Widget", quantity=10, minimum_stock=5, category="Tools")
    )
    assert [r.sku for r in view.records] == ["X1"]

    with pytest.raises(DuplicateKeyError):
        await AddRecordUseCase(store, view).execute(AddRecordRequest(sku="X1", name="Again"))

    remove = RemoveStockUseCase(store, view)
    first = await remove.execute(created.id, RemoveStockRequest(amount=7))
    second = await remove.execute(created.id, RemoveStockRequest(amount=7))
    assert first.record.quantity == 3
    assert second.record.quantity == 0
    assert view.records[0].quantity == 0

    out_of_stock = await ListRecordsUseCase(store, InventoryView()).execute(
        FilterSpec(stock_level="out")
    )
    assert [r.sku for r in out_of_stock.records] == ["X1"]

    exporter = ExportRecordsUseCase(store, CsvCodec(), today=lambda: date(2024, 3, 1))
    exported = await exporter.export_all()
    assert exported.row_count == 1

    result = await ImportBatchUseCase(store, view=view).execute(
        b"sku,name,quantity,minimum_stock,category\nY1,Bolt,2,4,Tools\nY2,Nut,40,4,\n",
        "more.csv",
    )
    assert result.imported == 2
    assert result.total_records == 3
    assert {r.sku for r in view.records} == {"X1", "Y1", "Y2"}

    summary = await DashboardSummaryUseCase(store).execute()
    assert summary.total_items == 3
    assert summary.low_stock_count == 2
    assert [a.sku for a in summary.top_low_stock] == ["X1", "Y1"]


async def test_failed_import_leaves_store_untouched(store):
    await AddRecordUseCase(store).execute(AddRecordRequest(sku="DUP", name="Existing"))

    with pytest.raises(DuplicateKeyError):
        await ImportBatchUseCase(store).execute(
            b"sku,name,quantity\nNEW1,First,1\nDUP,Clash,1\n",
            "batch.csv",
        )

    assert await store.count_all() == 1


async def test_overlapping_removals_end_at_zero(store):
    view = InventoryView()
    created = await AddRecordUseCase(store, view).execute(
        AddRecordRequest(sku="X1", name="Widget", quantity=10, minimum_stock=5)
    )

    remove = RemoveStockUseCase(store, view)
    outcomes = await asyncio.gather(
        remove.execute(created.id, RemoveStockRequest(amount=7)),
        remove.execute(created.id, RemoveStockRequest(amount=7)),
    )

    assert sorted(outcome.applied_amount for outcome in outcomes) == [3, 7]
    assert (await store.get_by_id(created.id)).quantity == 0
    refreshed = await ListRecordsUseCase(store, InventoryView()).execute(FilterSpec())
    assert refreshed.records[0].quantity == 0


async def test_oversized_import_value_is_a_store_error(store):
    with pytest.raises(StoreError) as exc_info:
        await ImportBatchUseCase(store, validate_rows=False).execute(
            b"sku,name,quantity\nBIG,Huge,99999999999999999999\n",
            "big.csv",
        )

    assert exc_info.value.details["error"] == "value out of range"
    assert await store.count_all() == 0
