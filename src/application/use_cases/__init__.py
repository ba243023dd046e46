"""Application use cases."""

from src.application.use_cases.add_record import AddRecordUseCase
from src.application.use_cases.dashboard_summary import DashboardSummaryUseCase
from src.application.use_cases.export_records import ExportRecordsUseCase
from src.application.use_cases.import_batch import ImportBatchResult, ImportBatchUseCase
from src.application.use_cases.list_records import ListRecordsResult, ListRecordsUseCase
from src.application.use_cases.manage_lookups import ManageLookupsUseCase
from src.application.use_cases.remove_stock import RemoveStockUseCase
from src.application.use_cases.report_overview import ReportOverviewUseCase

__all__ = [
    "ListRecordsUseCase",
    "ListRecordsResult",
    "AddRecordUseCase",
    "RemoveStockUseCase",
    "ImportBatchUseCase",
    "ImportBatchResult",
    "ExportRecordsUseCase",
    "DashboardSummaryUseCase",
    "ReportOverviewUseCase",
    "ManageLookupsUseCase",
]
