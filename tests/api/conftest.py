"""API test fixtures: the real app with use cases bound to a mock store."""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.api import dependencies as deps
from src.api.main import app
from src.application.use_cases import (
    AddRecordUseCase,
    DashboardSummaryUseCase,
    ExportRecordsUseCase,
    ImportBatchUseCase,
    ListRecordsUseCase,
    ManageLookupsUseCase,
    RemoveStockUseCase,
    ReportOverviewUseCase,
)
from src.infrastructure.tabular import CsvCodec


@pytest.fixture
async def client(mock_store, view) -> AsyncGenerator[AsyncClient, None]:
    """Async client whose use cases all talk to mock_store."""
    overrides = {
        deps.get_list_records_use_case: lambda: ListRecordsUseCase(mock_store, view),
        deps.get_add_record_use_case: lambda: AddRecordUseCase(mock_store, view),
        deps.get_remove_stock_use_case: lambda: RemoveStockUseCase(mock_store, view),
        deps.get_import_batch_use_case: lambda: ImportBatchUseCase(mock_store, view=view),
        deps.get_export_records_use_case: lambda: ExportRecordsUseCase(mock_store, CsvCodec()),
        deps.get_dashboard_summary_use_case: lambda: DashboardSummaryUseCase(mock_store),
        deps.get_report_overview_use_case: lambda: ReportOverviewUseCase(mock_store),
        deps.get_manage_lookups_use_case: lambda: ManageLookupsUseCase(mock_store),
    }
    app.dependency_overrides.update(overrides)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)
