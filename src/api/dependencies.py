"""
Dependency injection container for FastAPI.

Provides use case and store instances to route handlers.
"""

from functools import lru_cache

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
from src.config import Settings, get_settings
from src.infrastructure.storage.sqlite import SQLiteInventoryStore, get_inventory_store


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Use case dependencies
def get_list_records_use_case() -> ListRecordsUseCase:
    """Get list records use case."""
    return ListRecordsUseCase()


def get_add_record_use_case() -> AddRecordUseCase:
    """Get add record use case."""
    return AddRecordUseCase()


def get_remove_stock_use_case() -> RemoveStockUseCase:
    """Get remove stock use case."""
    return RemoveStockUseCase()


def get_import_batch_use_case() -> ImportBatchUseCase:
    """Get import batch use case."""
    return ImportBatchUseCase()


def get_export_records_use_case() -> ExportRecordsUseCase:
    """Get export records use case."""
    return ExportRecordsUseCase()


def get_dashboard_summary_use_case() -> DashboardSummaryUseCase:
    """Get dashboard summary use case."""
    return DashboardSummaryUseCase()


def get_report_overview_use_case() -> ReportOverviewUseCase:
    """Get report overview use case."""
    return ReportOverviewUseCase()


def get_manage_lookups_use_case() -> ManageLookupsUseCase:
    """Get lookup management use case."""
    return ManageLookupsUseCase()


# Store dependencies
async def get_inv_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()
